"""
Teacher dashboard models (camelCase to match frontend contract).
"""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel

from .analysis import AnalysisResult, StudentInfo


class DashboardInterview(BaseModel):
    """One row on the teacher dashboard."""
    interviewId: str
    studentName: str
    studentEmail: str
    language: str
    aiScore: int
    aiLikelihood: str
    confidence: str
    completedAt: datetime
    transcriptLength: int
    hasOriginalCode: bool


class RecentInterviewsResponse(BaseModel):
    success: bool = True
    interviews: list[DashboardInterview]
    totalProcessed: int
    totalAvailable: int


class InterviewDetailResponse(BaseModel):
    success: bool = True
    interviewId: str
    studentInfo: StudentInfo
    originalCode: Optional[str] = None
    transcript: Optional[str] = None
    analysis: AnalysisResult
    # Simplified label for the teacher view
    aiLikelihood: str
    completedAt: datetime
    interviewFlowId: Optional[str] = None
    hasOriginalCode: bool
