"""
Authorship analysis models.

AnalysisResult is the persisted entity of the result cache. Its likelihood
labels are computed from (score, confidence, indecisive) on every read.
"""
from datetime import datetime, timezone
from typing import Any, Literal, Optional
from pydantic import BaseModel, Field, computed_field, field_validator, model_validator

from authorship_judge.scoring import clamp_score, derive_ai_likelihood, derive_teacher_likelihood
from codefessor.config import UNKNOWN_STUDENT_NAME, UNKNOWN_STUDENT_EMAIL, UNKNOWN_LANGUAGE

QUOTA_EXCEEDED_REASON = "quota exceeded"
ANALYSIS_FAILED_REASON = "analysis failed"
UNAVAILABLE_PREFIX = "Analysis unavailable ("


class SuspiciousPhrase(BaseModel):
    """A phrase in the code or transcript that suggests AI generation."""
    text: str
    type: Literal["code", "transcript"]
    reason: str = ""


class StudentInfo(BaseModel):
    """Snapshot of the submitter at analysis time."""
    name: str = UNKNOWN_STUDENT_NAME
    email: str = UNKNOWN_STUDENT_EMAIL
    language: str = UNKNOWN_LANGUAGE
    code: Optional[str] = None


# =============================================================================
# Persisted Result (camelCase to match frontend contract)
# =============================================================================

class AnalysisResult(BaseModel):
    """Normalized authorship verdict for one interview."""
    score: int = Field(0, ge=0, le=100)
    confidence: str = "medium"
    reasoning: str = "Analysis completed"
    redFlags: list[str] = []
    humanIndicators: list[str] = []
    keyObservations: list[str] = []
    suspiciousPhrases: list[SuspiciousPhrase] = []
    indecisive: bool = False
    # True when the verdict came from a parsed JSON response
    geminiAnalysis: bool = False
    transcriptLength: int = 0
    # Set on placeholders that stand in for a judgment that could not run
    unavailableReason: Optional[str] = None
    analyzedAt: Optional[datetime] = None
    interviewId: Optional[str] = None
    studentInfo: Optional[StudentInfo] = None

    @model_validator(mode="before")
    @classmethod
    def _recover_placeholder_reason(cls, data: Any) -> Any:
        # Older cache files stored the placeholder label instead of a reason
        if isinstance(data, dict) and not data.get("unavailableReason"):
            label = data.get("aiLikelihood")
            if isinstance(label, str) and label.startswith(UNAVAILABLE_PREFIX) and label.endswith(")"):
                data = {**data, "unavailableReason": label[len(UNAVAILABLE_PREFIX):-1]}
            elif label == ANALYSIS_FAILED_REASON or (
                data.get("confidence") == "error" and not data.get("geminiAnalysis")
            ):
                data = {**data, "unavailableReason": ANALYSIS_FAILED_REASON}
        return data

    @field_validator("score", mode="before")
    @classmethod
    def _clamp_score(cls, value: Any) -> int:
        return clamp_score(value)

    @property
    def is_placeholder(self) -> bool:
        return self.unavailableReason is not None

    @computed_field
    @property
    def aiLikelihood(self) -> str:
        if self.unavailableReason:
            return f"{UNAVAILABLE_PREFIX}{self.unavailableReason})"
        if self.confidence == "unknown":
            return "unknown"
        return derive_ai_likelihood(self.score, self.confidence, self.indecisive)

    @computed_field
    @property
    def teacherLikelihood(self) -> str:
        if self.unavailableReason:
            return f"{UNAVAILABLE_PREFIX}{self.unavailableReason})"
        if self.confidence == "unknown":
            return "unknown"
        return derive_teacher_likelihood(self.score, self.confidence, self.indecisive)


def build_placeholder(
    reason: str,
    reasoning: str,
    interview_id: str,
    student_info: StudentInfo,
    key_observations: Optional[list[str]] = None,
) -> AnalysisResult:
    """Result shown in place of a judgment that could not be produced."""
    return AnalysisResult(
        score=0,
        confidence="pending" if reason == QUOTA_EXCEEDED_REASON else "error",
        reasoning=reasoning,
        keyObservations=key_observations or [],
        geminiAnalysis=False,
        unavailableReason=reason,
        analyzedAt=datetime.now(timezone.utc),
        interviewId=interview_id,
        studentInfo=student_info,
    )


# =============================================================================
# Ad-hoc analysis endpoint
# =============================================================================

class AnalyzeTranscriptRequest(BaseModel):
    """Request model for analyzing a transcript outside the interview flow."""
    transcript: Optional[str] = None
    code: Optional[str] = None
    language: Optional[str] = None
    studentName: Optional[str] = None


class AnalyzeTranscriptResponse(BaseModel):
    success: bool = True
    analysis: AnalysisResult
    originalCode: Optional[str] = None
    transcript: str
    studentInfo: StudentInfo
    timestamp: datetime
