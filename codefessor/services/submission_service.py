"""
Submission service - turns submitted code into a voice interview.
"""
import logging
from datetime import datetime, timezone

from question_generator import generate_code_questions
from codefessor.models.interview import CodeSubmission, InterviewSession, SubmitCodeResponse
from codefessor.repositories.session_repo import InterviewSessionRepository

logger = logging.getLogger(__name__)


class SubmissionService:
    """
    Orchestrates a submission: generate questions, create the Ribbon flow and
    interview, and remember the submission for the later analysis.
    """

    def __init__(self, llm, ribbon, sessions: InterviewSessionRepository):
        self.llm = llm
        self.ribbon = ribbon
        self.sessions = sessions

    async def submit_code(self, submission: CodeSubmission) -> SubmitCodeResponse:
        logger.info(f"[SUBMIT] Creating interview flow for {submission.student_name} - {submission.language}")

        questions = await generate_code_questions(submission.code, submission.language, self.llm)
        flow_id = await self.ribbon.create_interview_flow(
            questions,
            title=f"Code Understanding Assessment - {submission.language}",
        )
        interview = await self.ribbon.create_interview(
            flow_id,
            submission.student_email,
            submission.student_name,
        )

        self.sessions.put(InterviewSession(
            interview_id=interview.interview_id,
            interview_flow_id=flow_id,
            submission=submission,
            created_at=datetime.now(timezone.utc),
        ))
        logger.info(f"[SUBMIT] Interview {interview.interview_id} ready for {submission.student_name}")

        return SubmitCodeResponse(
            sessionId=interview.interview_id,
            interviewId=interview.interview_id,
            interviewLink=interview.interview_link,
        )
