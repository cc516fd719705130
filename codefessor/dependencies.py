"""
FastAPI dependency injection factories.

Shared services are built once during app startup (see init_services) and
handed to routers through the getters below. Tests swap them out with
app.dependency_overrides.
"""
import logging
from typing import Optional
from fastapi import Depends

from codefessor.config import ANALYSIS_RESULTS_FILE
from codefessor.repositories import AnalysisResultRepository, InterviewSessionRepository
from codefessor.services import (
    AnalysisService,
    GeminiService,
    RibbonService,
    SubmissionService,
    get_gemini_service,
    get_ribbon_service,
)

logger = logging.getLogger(__name__)


# Global instances (set during app startup)
_sessions: Optional[InterviewSessionRepository] = None
_results: Optional[AnalysisResultRepository] = None


def init_services(results_file: Optional[str] = ANALYSIS_RESULTS_FILE) -> None:
    """Create the repositories and load the persisted result cache."""
    global _sessions, _results
    _sessions = InterviewSessionRepository()
    _results = AnalysisResultRepository(results_file)
    loaded = _results.load()
    logger.info(f"Loaded {loaded} previously analyzed interviews")


def get_session_repo() -> InterviewSessionRepository:
    """Get the global session repository."""
    if _sessions is None:
        raise RuntimeError("Repositories not initialized. Call init_services() during app startup.")
    return _sessions


def get_result_repo() -> AnalysisResultRepository:
    """Get the global analysis result repository."""
    if _results is None:
        raise RuntimeError("Repositories not initialized. Call init_services() during app startup.")
    return _results


# =============================================================================
# Service Dependencies
# =============================================================================

def get_gemini() -> GeminiService:
    return get_gemini_service()


def get_ribbon() -> RibbonService:
    return get_ribbon_service()


def get_submission_service(
    llm: GeminiService = Depends(get_gemini),
    ribbon: RibbonService = Depends(get_ribbon),
    sessions: InterviewSessionRepository = Depends(get_session_repo),
) -> SubmissionService:
    return SubmissionService(llm, ribbon, sessions)


def get_analysis_service(
    llm: GeminiService = Depends(get_gemini),
    ribbon: RibbonService = Depends(get_ribbon),
    results: AnalysisResultRepository = Depends(get_result_repo),
    sessions: InterviewSessionRepository = Depends(get_session_repo),
) -> AnalysisService:
    return AnalysisService(llm, ribbon, results, sessions)
