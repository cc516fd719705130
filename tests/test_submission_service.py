"""
Tests for the submission pipeline.

Run with: pytest tests/test_submission_service.py -v
"""
import json

import pytest

from codefessor.exceptions import GenerationFailedError
from codefessor.models.interview import CodeSubmission
from codefessor.services.submission_service import SubmissionService
from conftest import SIX_QUESTIONS, FakeLLM, FakeRibbon

SUBMISSION = CodeSubmission(
    code="fn main() { println!(\"hi\"); }",
    language="Rust",
    student_name="Grace Brewster Hopper",
    student_email="grace@example.com",
)


class TestSubmitCode:

    @pytest.mark.asyncio
    async def test_creates_flow_interview_and_session(self, fake_ribbon, sessions):
        service = SubmissionService(FakeLLM(SIX_QUESTIONS), fake_ribbon.service(), sessions)

        response = await service.submit_code(SUBMISSION)

        assert response.success is True
        assert response.interviewId == "iv-new"
        assert response.sessionId == "iv-new"
        assert response.interviewLink == "https://ribbon.test/i/iv-new"

        flow_body = json.loads(fake_ribbon.requests[0].content)
        assert flow_body["title"] == "Code Understanding Assessment - Rust"
        assert len(flow_body["questions"]) == 6

        interview_body = json.loads(fake_ribbon.requests[1].content)
        assert interview_body["interviewee_first_name"] == "Grace"
        assert interview_body["interviewee_last_name"] == "Brewster Hopper"

        session = sessions.get("iv-new")
        assert session.interview_flow_id == "flow-1"
        assert session.submission.code == SUBMISSION.code

    @pytest.mark.asyncio
    async def test_generation_failure_creates_nothing(self, fake_ribbon, sessions):
        service = SubmissionService(FakeLLM("Sorry, no questions."), fake_ribbon.service(), sessions)

        with pytest.raises(GenerationFailedError):
            await service.submit_code(SUBMISSION)

        assert fake_ribbon.requests == []
        assert len(sessions) == 0
