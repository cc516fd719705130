"""
Analysis result repository - write-through cache of authorship verdicts.

Maps interview id -> AnalysisResult. Loaded once at start-up from a JSON file
holding an ordered list of [interview_id, result] pairs; every put rewrites
the whole file before returning. There is no expiry and no locking.
"""
import json
import logging
import os
import tempfile
from typing import Iterator, Optional, Tuple

from pydantic import ValidationError

from codefessor.models.analysis import AnalysisResult

logger = logging.getLogger(__name__)


class AnalysisResultRepository:
    """Result cache backed by a single JSON document on disk."""

    def __init__(self, file_path: Optional[str] = None):
        # file_path=None keeps the cache in memory only (tests, ad-hoc runs)
        self.file_path = file_path
        self._results: dict[str, AnalysisResult] = {}

    def load(self) -> int:
        """
        Replace the in-memory cache with the file contents.

        A missing file, unreadable JSON or an unexpected document shape
        results in an empty cache. Invalid entries are skipped.

        Returns:
            Number of entries loaded
        """
        self._results = {}
        if not self.file_path or not os.path.exists(self.file_path):
            logger.info("[CACHE] No analysis results file, starting empty")
            return 0

        try:
            with open(self.file_path, "r", encoding="utf-8") as f:
                document = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"[CACHE] Error loading analysis results from {self.file_path}: {e}")
            return 0

        if not isinstance(document, list):
            logger.error(f"[CACHE] Analysis results file {self.file_path} is not a list, ignoring it")
            return 0

        for entry in document:
            if not (isinstance(entry, list) and len(entry) == 2 and isinstance(entry[0], str)):
                logger.warning(f"[CACHE] Skipping malformed cache entry: {str(entry)[:200]}")
                continue
            interview_id, payload = entry
            try:
                self._results[interview_id] = AnalysisResult.model_validate(payload)
            except ValidationError as e:
                logger.warning(f"[CACHE] Skipping invalid result for interview {interview_id}: {e}")

        logger.info(f"[CACHE] Loaded {len(self._results)} existing analysis results")
        return len(self._results)

    def get(self, interview_id: str) -> Optional[AnalysisResult]:
        return self._results.get(interview_id)

    def put(self, interview_id: str, result: AnalysisResult) -> None:
        """Store a result and flush the whole cache to disk."""
        self._results[interview_id] = result
        self.flush()

    def flush(self) -> None:
        """
        Overwrite the backing file with the entire cache.

        Writes to a temporary file in the same directory and renames it over
        the target, so readers never see a half-written document.

        Raises:
            OSError: If the file cannot be written
        """
        if not self.file_path:
            return

        document = [
            [interview_id, result.model_dump(mode="json")]
            for interview_id, result in self._results.items()
        ]
        directory = os.path.dirname(os.path.abspath(self.file_path))
        os.makedirs(directory, exist_ok=True)

        fd, tmp_path = tempfile.mkstemp(dir=directory, prefix=".analysis_results.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(document, f, indent=2, ensure_ascii=False)
            os.replace(tmp_path, self.file_path)
        except OSError:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise

        logger.info(f"[CACHE] Saved {len(document)} analysis results to {self.file_path}")

    def items(self) -> Iterator[Tuple[str, AnalysisResult]]:
        return iter(list(self._results.items()))

    def __contains__(self, interview_id: object) -> bool:
        return interview_id in self._results

    def __len__(self) -> int:
        return len(self._results)
