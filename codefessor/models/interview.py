"""
Submission and interview models.
"""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel

from .analysis import AnalysisResult, StudentInfo


# =============================================================================
# Submission
# =============================================================================

class SubmitCodeRequest(BaseModel):
    """Request model for submitting code.

    All fields are required; missing ones are reported as a 400 by the router.
    """
    code: Optional[str] = None
    language: Optional[str] = None
    studentName: Optional[str] = None
    studentEmail: Optional[str] = None


class CodeSubmission(BaseModel):
    """Validated submission handed to the pipeline."""
    code: str
    language: str
    student_name: str
    student_email: str


class SubmitCodeResponse(BaseModel):
    success: bool = True
    sessionId: str
    interviewId: str
    interviewLink: Optional[str] = None


class InterviewSession(BaseModel):
    """In-memory link between an interview and the submission that created it."""
    interview_id: str
    interview_flow_id: str
    submission: CodeSubmission
    created_at: datetime

    def student_info(self) -> StudentInfo:
        return StudentInfo(
            name=self.submission.student_name,
            email=self.submission.student_email,
            language=self.submission.language,
            code=self.submission.code,
        )


# =============================================================================
# Interview platform record (normalized)
# =============================================================================

class InterviewRecord(BaseModel):
    """Canonical interview record, independent of the platform's response shape."""
    interview_id: str
    interview_flow_id: Optional[str] = None
    status: Optional[str] = None
    transcript: Optional[str] = None
    completed_at: Optional[datetime] = None

    @property
    def is_completed(self) -> bool:
        return self.status == "completed"


# =============================================================================
# Status polling
# =============================================================================

class InterviewStatusResponse(BaseModel):
    status: str
    message: Optional[str] = None
    analysis: Optional[AnalysisResult] = None
    transcript: Optional[str] = None
    originalCode: Optional[str] = None
    studentInfo: Optional[StudentInfo] = None
    sessionLost: bool = False
    note: Optional[str] = None


class ManualCheckResponse(BaseModel):
    found: bool
    message: Optional[str] = None
    interviewId: Optional[str] = None
    flowId: Optional[str] = None
    status: Optional[str] = None
    analysis: Optional[AnalysisResult] = None
    transcript: Optional[str] = None
    note: Optional[str] = None
