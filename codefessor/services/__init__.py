"""
Service layer for business logic.
"""
from .gemini_service import GeminiService, get_gemini_service, is_quota_error
from .ribbon_service import RibbonService, get_ribbon_service
from .submission_service import SubmissionService
from .analysis_service import AnalysisService

__all__ = [
    "GeminiService",
    "get_gemini_service",
    "is_quota_error",
    "RibbonService",
    "get_ribbon_service",
    "SubmissionService",
    "AnalysisService",
]
