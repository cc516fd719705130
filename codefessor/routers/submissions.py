"""
Code submission endpoint.
"""
from fastapi import APIRouter, Depends

from codefessor.dependencies import get_submission_service
from codefessor.exceptions import ValidationError
from codefessor.models.interview import CodeSubmission, SubmitCodeRequest, SubmitCodeResponse
from codefessor.services import SubmissionService

router = APIRouter(tags=["Submissions"])


@router.post("/submit-code", response_model=SubmitCodeResponse)
async def submit_code(
    request: SubmitCodeRequest,
    service: SubmissionService = Depends(get_submission_service),
):
    """
    Generate interview questions about the submitted code and create a
    Ribbon voice interview for the student.
    """
    if not (request.code and request.language and request.studentName and request.studentEmail):
        raise ValidationError("Missing required fields")

    submission = CodeSubmission(
        code=request.code,
        language=request.language,
        student_name=request.studentName,
        student_email=request.studentEmail,
    )
    return await service.submit_code(submission)
