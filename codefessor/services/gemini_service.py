"""
Gemini Service - text generation for question synthesis and authorship analysis.

Wraps the google-genai async client behind a single `generate_text(prompt)`
call and maps upstream failures onto the application's exception taxonomy.
"""
import logging
from typing import Optional

import httpx
from google import genai
from google.genai import errors, types

from codefessor.config import GEMINI_API_KEY, GEMINI_MODEL
from codefessor.exceptions import QuotaExceededError, UpstreamUnavailableError

logger = logging.getLogger(__name__)

SERVICE_NAME = "Gemini"

QUOTA_MARKERS = ("429", "quota", "rate limit", "resource_exhausted", "resource exhausted")


def is_quota_error(message: str, code: Optional[int] = None) -> bool:
    """True when an upstream error looks like a quota or rate-limit rejection."""
    if code == 429:
        return True
    lowered = (message or "").lower()
    return any(marker in lowered for marker in QUOTA_MARKERS)


class GeminiService:
    """
    Thin async wrapper around the Gemini generate_content API.

    The client is created lazily so the app can start without a key.
    """

    def __init__(
        self,
        api_key: Optional[str] = GEMINI_API_KEY,
        model: str = GEMINI_MODEL,
        client: Optional[genai.Client] = None,
    ):
        self.api_key = api_key
        self.model = model
        self._client = client

    def _get_client(self) -> genai.Client:
        if self._client is None:
            if not self.api_key:
                raise UpstreamUnavailableError(SERVICE_NAME, "GEMINI_API_KEY not configured")
            self._client = genai.Client(api_key=self.api_key)
        return self._client

    async def generate_text(self, prompt: str, temperature: float = 0.2) -> str:
        """
        Send one prompt and return the concatenated text parts of the answer.

        Raises:
            QuotaExceededError: On 429 / quota / rate-limit rejections
            UpstreamUnavailableError: On any other API or transport failure,
                or when the model returns no text
        """
        client = self._get_client()

        try:
            response = await client.aio.models.generate_content(
                model=self.model,
                contents=[types.Content(role="user", parts=[types.Part(text=prompt)])],
                config=types.GenerateContentConfig(temperature=temperature),
            )
        except errors.APIError as e:
            detail = f"{e.code} {e.status or ''}: {e.message or e}".strip()
            if is_quota_error(str(e), e.code):
                logger.warning(f"[GEMINI] Quota exceeded: {detail}")
                raise QuotaExceededError(SERVICE_NAME, detail)
            logger.error(f"[GEMINI] API error: {detail}")
            raise UpstreamUnavailableError(SERVICE_NAME, detail)
        except httpx.HTTPError as e:
            logger.error(f"[GEMINI] Transport error: {e}")
            raise UpstreamUnavailableError(SERVICE_NAME, f"{type(e).__name__}: {e}")

        response_text = ""
        if response and response.candidates and response.candidates[0].content:
            for part in response.candidates[0].content.parts or []:
                # Skip thinking parts, they would corrupt JSON parsing
                if getattr(part, "thought", False):
                    continue
                if getattr(part, "text", None):
                    response_text += part.text

        if not response_text:
            logger.error(f"[GEMINI] Empty response from {self.model}")
            raise UpstreamUnavailableError(SERVICE_NAME, "Empty response from model")

        logger.info(f"[GEMINI] Response: {len(response_text)} chars")
        return response_text


_gemini_service: Optional[GeminiService] = None


def get_gemini_service() -> GeminiService:
    """Get or create the Gemini service singleton."""
    global _gemini_service
    if _gemini_service is None:
        _gemini_service = GeminiService()
    return _gemini_service
