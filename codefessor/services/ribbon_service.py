"""
Ribbon Service - Voice interview platform integration.

Creates interview flows (question templates) and per-student interviews, and
lists interviews to poll for completion and transcripts.
"""
import logging
from typing import Any, Optional

import httpx

from codefessor.config import (
    RIBBON_API_KEY,
    RIBBON_BASE_URL,
    RIBBON_TIMEOUT,
    RIBBON_LIST_LIMIT,
    ORG_NAME,
    INTERVIEW_TYPE,
)
from codefessor.exceptions import QuotaExceededError, UpstreamUnavailableError
from codefessor.models.interview import InterviewRecord
from codefessor.models.ribbon import RibbonFlowCreated, RibbonInterviewCreated, normalize_interview

logger = logging.getLogger(__name__)

SERVICE_NAME = "Ribbon"


def split_name(full_name: str) -> tuple[str, str]:
    """Split on the first space: "Ada King Lovelace" -> ("Ada", "King Lovelace")."""
    first_name, _, last_name = full_name.strip().partition(" ")
    return first_name, last_name.strip()


class RibbonService:
    """
    Service for the Ribbon interview REST API.

    Every call opens its own httpx.AsyncClient. Pass `transport` to route
    requests somewhere else (tests use httpx.MockTransport).
    """

    def __init__(
        self,
        api_key: Optional[str] = RIBBON_API_KEY,
        base_url: str = RIBBON_BASE_URL,
        timeout: float = RIBBON_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.transport = transport

    async def _request(self, method: str, path: str, **kwargs) -> Any:
        if not self.api_key:
            raise UpstreamUnavailableError(SERVICE_NAME, "RIBBON_API_KEY not configured")

        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Accept": "application/json",
        }
        try:
            async with httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                transport=self.transport,
            ) as client:
                response = await client.request(method, path, headers=headers, **kwargs)
        except httpx.HTTPError as e:
            logger.error(f"[RIBBON] {method} {path} failed: {e}")
            raise UpstreamUnavailableError(SERVICE_NAME, f"{type(e).__name__}: {e}")

        if response.status_code >= 400:
            body = response.text[:500]
            logger.error(f"[RIBBON] {method} {path} returned {response.status_code}: {body}")
            if response.status_code == 429:
                raise QuotaExceededError(SERVICE_NAME, f"HTTP 429: {body}")
            raise UpstreamUnavailableError(
                SERVICE_NAME,
                f"HTTP {response.status_code}: {body}",
                details={"upstreamStatus": response.status_code},
            )

        try:
            return response.json()
        except ValueError:
            raise UpstreamUnavailableError(SERVICE_NAME, f"Invalid JSON from {path}")

    async def create_interview_flow(self, questions: list[str], title: str) -> str:
        """
        Create a reusable interview flow holding the questions.

        Returns:
            The Ribbon interview_flow_id
        """
        flow_data = {
            "org_name": ORG_NAME,
            "title": title,
            "questions": questions,
            "interview_type": INTERVIEW_TYPE,
            "is_video_enabled": True,
        }
        logger.info(f"[RIBBON] Creating interview flow '{title}' with {len(questions)} questions")

        data = await self._request("POST", "/interview-flows", json=flow_data)
        flow = RibbonFlowCreated.model_validate(data)

        logger.info(f"[RIBBON] Interview flow created: {flow.interview_flow_id}")
        return flow.interview_flow_id

    async def create_interview(self, interview_flow_id: str, email: str, full_name: str) -> RibbonInterviewCreated:
        """Create one interviewee's instance of a flow and return its id and link."""
        first_name, last_name = split_name(full_name)
        payload = {
            "interview_flow_id": interview_flow_id,
            "interviewee_email_address": email,
            "interviewee_first_name": first_name,
            "interviewee_last_name": last_name,
        }

        data = await self._request("POST", "/interviews", json=payload)
        interview = RibbonInterviewCreated.model_validate(data)

        logger.info(f"[RIBBON] Interview created: {interview.interview_id} (flow {interview_flow_id})")
        return interview

    async def list_interviews(self) -> list[InterviewRecord]:
        """Fetch every interview on the account, normalized."""
        data = await self._request("GET", "/interviews", params={"limit": RIBBON_LIST_LIMIT})
        raw_interviews = data.get("interviews") if isinstance(data, dict) else None
        raw_interviews = raw_interviews or []

        records = []
        for raw in raw_interviews:
            if not isinstance(raw, dict):
                continue
            record = normalize_interview(raw)
            if record is not None:
                records.append(record)

        logger.info(f"[RIBBON] {len(records)} interviews found")
        return records

    async def get_interview(self, interview_id: str) -> Optional[InterviewRecord]:
        """
        Find one interview by id.

        Ribbon has no single-interview lookup, so this scans the full list.
        Returns None when the id is not listed (yet).
        """
        for record in await self.list_interviews():
            if record.interview_id == interview_id:
                logger.info(f"[RIBBON] Found interview {interview_id} with status: {record.status}")
                return record

        logger.info(f"[RIBBON] Interview {interview_id} not found in API response")
        return None


_ribbon_service: Optional[RibbonService] = None


def get_ribbon_service() -> RibbonService:
    """Get or create the Ribbon service singleton."""
    global _ribbon_service
    if _ribbon_service is None:
        _ribbon_service = RibbonService()
    return _ribbon_service
