"""
Repository layer for data access.
"""
from .analysis_result_repo import AnalysisResultRepository
from .session_repo import InterviewSessionRepository

__all__ = [
    "AnalysisResultRepository",
    "InterviewSessionRepository",
]
