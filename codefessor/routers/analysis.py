"""
Ad-hoc authorship analysis endpoint.
"""
from fastapi import APIRouter, Depends

from codefessor.dependencies import get_analysis_service
from codefessor.exceptions import ValidationError
from codefessor.models.analysis import AnalyzeTranscriptRequest, AnalyzeTranscriptResponse
from codefessor.services import AnalysisService

router = APIRouter(tags=["Analysis"])


@router.post("/analyze-ai-detection", response_model=AnalyzeTranscriptResponse)
async def analyze_ai_detection(
    request: AnalyzeTranscriptRequest,
    service: AnalysisService = Depends(get_analysis_service),
):
    """Judge a transcript (and optional code) directly. The result is not cached."""
    if not request.transcript:
        raise ValidationError("Transcript is required", field="transcript")

    return await service.analyze_transcript(
        request.transcript,
        code=request.code,
        language=request.language,
        student_name=request.studentName,
    )
