"""
Endpoint tests through the FastAPI app with Ribbon and Gemini replaced.

Run with: pytest tests/test_api.py -v
"""
import pytest
from fastapi.testclient import TestClient

from app import app
from codefessor.dependencies import get_gemini, get_result_repo, get_ribbon, get_session_repo
from codefessor.exceptions import QuotaExceededError
from codefessor.repositories import AnalysisResultRepository, InterviewSessionRepository
from conftest import JUDGE_JSON, SIX_QUESTIONS, FakeLLM, FakeRibbon, completed_interview


@pytest.fixture
def backend():
    """Overridable pieces of the app, reset per test."""
    state = {
        "llm": FakeLLM(JUDGE_JSON),
        "ribbon": FakeRibbon([
            completed_interview("iv-1"),
            {"interview_id": "iv-2", "status": "in_progress"},
        ]),
        "results": AnalysisResultRepository(None),
        "sessions": InterviewSessionRepository(),
    }
    app.dependency_overrides[get_gemini] = lambda: state["llm"]
    app.dependency_overrides[get_ribbon] = lambda: state["ribbon"].service()
    app.dependency_overrides[get_result_repo] = lambda: state["results"]
    app.dependency_overrides[get_session_repo] = lambda: state["sessions"]
    yield state
    app.dependency_overrides.clear()


@pytest.fixture
def client(backend):
    return TestClient(app)


def test_health(client):
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.json()["status"] == "OK"


class TestSubmitCode:

    def test_missing_fields(self, client):
        response = client.post("/api/submit-code", json={"code": "x = 1", "language": "Python"})

        assert response.status_code == 400
        assert response.json()["error"] == "Missing required fields"

    def test_submit_and_debug_sessions(self, client, backend):
        backend["llm"] = FakeLLM(SIX_QUESTIONS)
        response = client.post("/api/submit-code", json={
            "code": "x = 1",
            "language": "Python",
            "studentName": "Ada Lovelace",
            "studentEmail": "ada@example.com",
        })

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["interviewId"] == "iv-new"
        assert body["interviewLink"] == "https://ribbon.test/i/iv-new"
        assert "questions" not in body

        debug = client.get("/api/debug/sessions").json()
        assert debug["sessionCount"] == 1
        assert debug["sessions"][0]["hasCode"] is True
        assert "code" not in debug["sessions"][0]

    def test_generation_failure(self, client, backend):
        backend["llm"] = FakeLLM("no questions")
        response = client.post("/api/submit-code", json={
            "code": "x = 1",
            "language": "Python",
            "studentName": "Ada",
            "studentEmail": "ada@example.com",
        })

        assert response.status_code == 502
        assert backend["ribbon"].requests == []


class TestInterviewStatus:

    def test_completed(self, client):
        body = client.get("/api/interview-status/iv-1").json()

        assert body["status"] == "completed"
        assert body["analysis"]["score"] == 82
        assert body["analysis"]["aiLikelihood"] == "likely human-written"
        assert body["sessionLost"] is True

    def test_pending(self, client):
        assert client.get("/api/interview-status/iv-404").json()["status"] == "pending"

    def test_quota_exceeded(self, client, backend):
        backend["llm"] = FakeLLM(QuotaExceededError("Gemini", "429"))
        response = client.get("/api/interview-status/iv-1")

        assert response.status_code == 503
        assert response.json()["details"]["retryAfter"] == "24h"


class TestTeacher:

    def test_recent_interviews(self, client):
        body = client.get("/api/teacher/recent-interviews").json()

        assert body["success"] is True
        assert body["totalAvailable"] == 2
        assert body["totalProcessed"] == 1
        assert body["interviews"][0]["interviewId"] == "iv-1"
        assert body["interviews"][0]["aiLikelihood"] == "likely human-written"

    def test_detail_not_found(self, client):
        assert client.get("/api/teacher/interview/iv-404").status_code == 404

    def test_detail_not_completed(self, client):
        response = client.get("/api/teacher/interview/iv-2")
        assert response.status_code == 400
        assert response.json()["error"] == "Interview not completed"

    def test_detail(self, client):
        body = client.get("/api/teacher/interview/iv-1").json()
        assert body["analysis"]["score"] == 82
        assert body["interviewFlowId"] == "flow-1"


class TestAnalyzeAiDetection:

    def test_transcript_required(self, client):
        response = client.post("/api/analyze-ai-detection", json={"code": "x = 1"})

        assert response.status_code == 400
        assert response.json()["error"] == "Transcript is required"

    def test_analyze(self, client, backend):
        response = client.post("/api/analyze-ai-detection", json={"transcript": "I wrote it.", "studentName": "Ada"})

        assert response.status_code == 200
        assert response.json()["analysis"]["score"] == 82
        assert len(backend["results"]) == 0


def test_manual_check(client):
    body = client.get("/api/manual-check/iv-1").json()
    assert body["found"] is True
    assert body["status"] == "completed"


def test_test_ribbon(client):
    body = client.get("/api/test-ribbon").json()
    assert body["interviewCount"] == 2
    assert {"id": "iv-2", "flowId": None, "status": "in_progress"} in body["interviews"]
