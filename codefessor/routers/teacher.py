"""
Teacher dashboard endpoints.
"""
from fastapi import APIRouter, Depends, Query

from codefessor.config import RECENT_INTERVIEWS_LIMIT
from codefessor.dependencies import get_analysis_service
from codefessor.models.teacher import InterviewDetailResponse, RecentInterviewsResponse
from codefessor.services import AnalysisService

router = APIRouter(prefix="/teacher", tags=["Teacher"])


@router.get("/recent-interviews", response_model=RecentInterviewsResponse)
async def recent_interviews(
    limit: int = Query(RECENT_INTERVIEWS_LIMIT, ge=1, le=100),
    service: AnalysisService = Depends(get_analysis_service),
):
    """Most recently completed interviews with the simplified verdict."""
    return await service.get_recent_interviews(limit)


@router.get("/interview/{interview_id}", response_model=InterviewDetailResponse)
async def interview_detail(
    interview_id: str,
    service: AnalysisService = Depends(get_analysis_service),
):
    """Full analysis, code and transcript for one completed interview."""
    return await service.get_interview_detail(interview_id)
