"""
Ribbon API payload models.

Ribbon is the voice interview platform. Its interview listing returns each
interview either flat or wrapped in an `interview_data` object, with status
and flow id at either level. Both shapes are normalized into InterviewRecord
right after the call returns.
"""
import json
from datetime import datetime, timezone
from typing import Any, Optional, Union
from pydantic import BaseModel, ConfigDict, field_validator

from .interview import InterviewRecord


class RibbonInterviewData(BaseModel):
    """Flat interview shape (also used as the nested `interview_data` payload)."""
    model_config = ConfigDict(extra="allow")

    interview_id: Optional[str] = None
    interview_flow_id: Optional[str] = None
    status: Optional[str] = None
    transcript: Optional[str] = None
    completed_at: Optional[Union[datetime, str]] = None

    @field_validator("transcript", mode="before")
    @classmethod
    def _stringify_transcript(cls, value: Any) -> Optional[str]:
        if value is None or isinstance(value, str):
            return value
        return json.dumps(value, ensure_ascii=False)

    @field_validator("completed_at", mode="before")
    @classmethod
    def _blank_completed_at(cls, value: Any) -> Any:
        return value or None


class RibbonNestedInterview(BaseModel):
    """Wrapped interview shape with fields split between root and `interview_data`."""
    model_config = ConfigDict(extra="allow")

    interview_id: Optional[str] = None
    interview_flow_id: Optional[str] = None
    status: Optional[str] = None
    interview_data: RibbonInterviewData


def _parse_completed_at(value: Optional[Union[datetime, str]]) -> Optional[datetime]:
    if value is None:
        return None
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return None
    # Naive timestamps are treated as UTC so records stay comparable
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value


def normalize_interview(raw: dict) -> Optional[InterviewRecord]:
    """
    Convert one raw listing entry into an InterviewRecord.

    Root-level status and flow id win over nested ones; the nested id wins
    over the root id. Entries without any interview id are dropped.
    """
    if isinstance(raw.get("interview_data"), dict):
        nested = RibbonNestedInterview.model_validate(raw)
        data = nested.interview_data
        interview_id = data.interview_id or nested.interview_id
        flow_id = nested.interview_flow_id or data.interview_flow_id
        status = nested.status or data.status
    else:
        data = RibbonInterviewData.model_validate(raw)
        interview_id = data.interview_id
        flow_id = data.interview_flow_id
        status = data.status

    if not interview_id:
        return None

    return InterviewRecord(
        interview_id=interview_id,
        interview_flow_id=flow_id,
        status=status,
        transcript=data.transcript,
        completed_at=_parse_completed_at(data.completed_at),
    )


class RibbonFlowCreated(BaseModel):
    model_config = ConfigDict(extra="allow")

    interview_flow_id: str


class RibbonInterviewCreated(BaseModel):
    model_config = ConfigDict(extra="allow")

    interview_id: str
    interview_link: Optional[str] = None
