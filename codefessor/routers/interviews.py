"""
Student-facing interview endpoints: status polling and manual checks.
"""
from fastapi import APIRouter, Depends

from codefessor.dependencies import get_analysis_service
from codefessor.models.interview import InterviewStatusResponse, ManualCheckResponse
from codefessor.services import AnalysisService

router = APIRouter(tags=["Interviews"])


@router.get("/interview-status/{interview_id}", response_model=InterviewStatusResponse)
async def get_interview_status(
    interview_id: str,
    service: AnalysisService = Depends(get_analysis_service),
):
    """Poll an interview. Completed interviews include the authorship analysis."""
    return await service.get_interview_status(interview_id)


@router.get("/manual-check/{interview_id}", response_model=ManualCheckResponse)
async def manual_check(
    interview_id: str,
    service: AnalysisService = Depends(get_analysis_service),
):
    """Debug lookup of one interview straight from Ribbon."""
    return await service.manual_check(interview_id)
