"""
Interview session repository - in-memory link from interview id to submission.

Sessions do not survive a restart; analyses then run without the original code.
"""
import logging
from typing import Optional

from codefessor.models.interview import InterviewSession

logger = logging.getLogger(__name__)


class InterviewSessionRepository:
    """Process-local store of submission sessions keyed by interview id."""

    def __init__(self):
        self._sessions: dict[str, InterviewSession] = {}

    def get(self, interview_id: str) -> Optional[InterviewSession]:
        return self._sessions.get(interview_id)

    def put(self, session: InterviewSession) -> None:
        self._sessions[session.interview_id] = session
        logger.debug(f"Session stored for interview {session.interview_id}")

    def list_all(self) -> list[InterviewSession]:
        return list(self._sessions.values())

    def __len__(self) -> int:
        return len(self._sessions)
