"""
Health and diagnostics endpoints.
"""
import logging
from datetime import datetime, timezone
from fastapi import APIRouter, Depends

from codefessor.dependencies import get_gemini, get_ribbon, get_session_repo
from codefessor.repositories import InterviewSessionRepository
from codefessor.services import GeminiService, RibbonService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])


@router.get("/health")
async def health_check():
    """Liveness check, does not touch Ribbon or Gemini."""
    return {"status": "OK", "timestamp": datetime.now(timezone.utc).isoformat()}


@router.get("/test-ribbon")
async def test_ribbon(ribbon: RibbonService = Depends(get_ribbon)):
    """List interviews on the Ribbon account to verify the API key and connectivity."""
    logger.info("Testing Ribbon API connection...")
    records = await ribbon.list_interviews()
    return {
        "status": "OK",
        "message": "Ribbon API connection successful",
        "interviewCount": len(records),
        "interviews": [
            {"id": r.interview_id, "flowId": r.interview_flow_id, "status": r.status}
            for r in records
        ],
    }


@router.get("/test-gemini")
async def test_gemini(gemini: GeminiService = Depends(get_gemini)):
    """Send a one-line prompt to Gemini."""
    logger.info("Testing Gemini API with current key...")
    text = await gemini.generate_text('Say "API key working" if you can respond.')
    return {
        "success": True,
        "response": text,
        "message": "Gemini API key is working correctly",
    }


@router.get("/debug/sessions")
async def debug_sessions(sessions: InterviewSessionRepository = Depends(get_session_repo)):
    """Summaries of the in-memory submission sessions, without the code."""
    return {
        "sessionCount": len(sessions),
        "sessions": [
            {
                "sessionId": s.interview_id,
                "studentName": s.submission.student_name,
                "language": s.submission.language,
                "createdAt": s.created_at.isoformat(),
                "hasCode": bool(s.submission.code),
            }
            for s in sessions.list_all()
        ],
    }
