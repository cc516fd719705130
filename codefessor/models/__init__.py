"""
Codefessor API Models.

This module re-exports all model classes for convenient importing.
"""

# Analysis models
from .analysis import (
    SuspiciousPhrase,
    StudentInfo,
    AnalysisResult,
    AnalyzeTranscriptRequest,
    AnalyzeTranscriptResponse,
    build_placeholder,
    QUOTA_EXCEEDED_REASON,
    ANALYSIS_FAILED_REASON,
)

# Submission / interview models
from .interview import (
    SubmitCodeRequest,
    CodeSubmission,
    SubmitCodeResponse,
    InterviewSession,
    InterviewRecord,
    InterviewStatusResponse,
    ManualCheckResponse,
)

# Ribbon payload models
from .ribbon import (
    RibbonInterviewData,
    RibbonNestedInterview,
    RibbonFlowCreated,
    RibbonInterviewCreated,
    normalize_interview,
)

# Teacher dashboard models
from .teacher import (
    DashboardInterview,
    RecentInterviewsResponse,
    InterviewDetailResponse,
)

__all__ = [
    "SuspiciousPhrase",
    "StudentInfo",
    "AnalysisResult",
    "AnalyzeTranscriptRequest",
    "AnalyzeTranscriptResponse",
    "build_placeholder",
    "QUOTA_EXCEEDED_REASON",
    "ANALYSIS_FAILED_REASON",
    "SubmitCodeRequest",
    "CodeSubmission",
    "SubmitCodeResponse",
    "InterviewSession",
    "InterviewRecord",
    "InterviewStatusResponse",
    "ManualCheckResponse",
    "RibbonInterviewData",
    "RibbonNestedInterview",
    "RibbonFlowCreated",
    "RibbonInterviewCreated",
    "normalize_interview",
    "DashboardInterview",
    "RecentInterviewsResponse",
    "InterviewDetailResponse",
]
