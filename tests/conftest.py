"""
Pytest fixtures for Codefessor tests.

Ribbon is served by an httpx.MockTransport and Gemini by a scripted fake,
so no test touches the network.
"""
import json

import httpx
import pytest

from codefessor.repositories import AnalysisResultRepository, InterviewSessionRepository
from codefessor.services.ribbon_service import RibbonService

RIBBON_TEST_URL = "https://ribbon.test/v1"

JUDGE_JSON = json.dumps({
    "score": 82,
    "confidence": "high",
    "reasoning": "Explained the retry loop and the off-by-one they fixed.",
    "redFlags": [],
    "humanIndicators": ["Mentioned debugging the loop bounds"],
    "keyObservations": ["Answers match the code"],
    "indecisive": False,
    "suspiciousPhrases": [],
})

SIX_QUESTIONS = json.dumps([f"Question {i}?" for i in range(1, 7)])


class FakeLLM:
    """
    Scripted stand-in for GeminiService.

    Each generate_text call consumes the next scripted item: strings are
    returned, exceptions are raised. The last item repeats once the script
    runs out.
    """

    def __init__(self, *responses):
        self.responses = list(responses)
        self.prompts = []

    async def generate_text(self, prompt: str, temperature: float = 0.2) -> str:
        self.prompts.append(prompt)
        item = self.responses.pop(0) if len(self.responses) > 1 else self.responses[0]
        if isinstance(item, Exception):
            raise item
        return item

    @property
    def calls(self) -> int:
        return len(self.prompts)


class FakeRibbon:
    """
    Mock Ribbon backend for httpx.MockTransport.

    Holds the raw interview listing and records every request.
    """

    def __init__(self, interviews=None):
        self.interviews = list(interviews or [])
        self.requests = []
        self.list_status = 200

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path

        if request.method == "GET" and path == "/v1/interviews":
            if self.list_status != 200:
                return httpx.Response(self.list_status, text="upstream says no")
            return httpx.Response(200, json={"interviews": self.interviews})
        if request.method == "POST" and path == "/v1/interview-flows":
            return httpx.Response(200, json={"interview_flow_id": "flow-1"})
        if request.method == "POST" and path == "/v1/interviews":
            return httpx.Response(
                200,
                json={"interview_id": "iv-new", "interview_link": "https://ribbon.test/i/iv-new"},
            )
        return httpx.Response(404, json={"error": "not found"})

    def service(self) -> RibbonService:
        return RibbonService(
            api_key="test-key",
            base_url=RIBBON_TEST_URL,
            timeout=5,
            transport=httpx.MockTransport(self.handler),
        )


def completed_interview(interview_id: str, transcript="I wrote this over a weekend.", completed_at="2024-05-01T10:00:00Z"):
    """Raw listing entry in the nested shape."""
    return {
        "status": "completed",
        "interview_flow_id": "flow-1",
        "interview_data": {
            "interview_id": interview_id,
            "transcript": transcript,
            "completed_at": completed_at,
        },
    }


@pytest.fixture
def fake_ribbon():
    return FakeRibbon()


@pytest.fixture
def sessions():
    return InterviewSessionRepository()


@pytest.fixture
def results(tmp_path):
    return AnalysisResultRepository(str(tmp_path / "analysis_results.json"))
