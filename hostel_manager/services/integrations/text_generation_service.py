"""
Client for the Gemini ``generateContent`` REST endpoint.

Every failure (missing API key, transport error, non-2xx status,
unparseable body, empty text) surfaces as ``GenerationError``; callers
decide whether a fallback applies. Nothing is retried.
"""

from datetime import date
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Optional

import httpx

from hostel_manager.config.settings import settings
from hostel_manager.core.exceptions import GenerationError
from hostel_manager.core.logging import get_logger
from hostel_manager.schemas.assistant import ChatMessage
from hostel_manager.utils.formatters import CurrencyFormatter, DateTimeFormatter

logger = get_logger(__name__)

# Reserve output tokens when a thinking model is given a small output budget
THINKING_BUDGET = 100


class TextGenerationService:
    """Async text generation over httpx."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = settings.GEMINI_API_KEY if api_key is None else api_key
        self.model = model or settings.GEMINI_MODEL
        self.base_url = (base_url or settings.GEMINI_BASE_URL).rstrip("/")
        self.timeout = timeout or settings.GENERATION_TIMEOUT_SECONDS
        self._transport = transport

    async def generate_text(
        self,
        contents: List[Dict[str, Any]],
        generation_config: Optional[Dict[str, Any]] = None,
    ) -> str:
        """
        Send ``contents`` and return the concatenated text of the first candidate.

        Raises:
            GenerationError: On any failure
        """
        if not self.api_key:
            raise GenerationError("Text generation is not configured", {"reason": "missing_api_key"})

        body: Dict[str, Any] = {"contents": contents}
        if generation_config:
            body["generationConfig"] = generation_config

        url = f"{self.base_url}/models/{self.model}:generateContent"
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.post(url, params={"key": self.api_key}, json=body)
                response.raise_for_status()
                payload = response.json()
        except httpx.HTTPStatusError as e:
            logger.error(f"Text generation returned HTTP {e.response.status_code}")
            raise GenerationError(
                "Text generation request was rejected",
                {"status_code": e.response.status_code},
            ) from e
        except httpx.HTTPError as e:
            logger.error(f"Text generation request failed: {e}")
            raise GenerationError("Text generation service is unreachable", {"reason": type(e).__name__}) from e
        except ValueError as e:
            raise GenerationError("Text generation returned an invalid response") from e

        text = self._extract_text(payload)
        if not text:
            raise GenerationError("Text generation returned no text", {"reason": "empty_response"})
        return text

    @staticmethod
    def _extract_text(payload: Any) -> str:
        """First candidate's text parts joined; "" for any body of another shape."""
        if not isinstance(payload, dict):
            return ""
        candidates = payload.get("candidates")
        if not isinstance(candidates, list) or not candidates or not isinstance(candidates[0], dict):
            return ""
        content = candidates[0].get("content")
        parts = content.get("parts") if isinstance(content, dict) else None
        if not isinstance(parts, list):
            return ""
        texts = [part.get("text") for part in parts if isinstance(part, dict)]
        return "".join(text for text in texts if isinstance(text, str)).strip()

    @staticmethod
    def _user_turn(text: str) -> List[Dict[str, Any]]:
        return [{"role": "user", "parts": [{"text": text}]}]

    async def generate_notice(self, keywords: Iterable[str]) -> str:
        prompt = (
            "Generate a concise, friendly, and well-formatted notice for a ladies' hostel "
            f"notice board based on the following keywords. The hostel is named '{settings.HOSTEL_NAME}'. "
            f"The notice should be clear and easy to read. Keywords: \"{', '.join(keywords)}\""
        )
        return await self.generate_text(
            self._user_turn(prompt),
            {
                "temperature": 0.7,
                "topP": 1,
                "topK": 1,
                "maxOutputTokens": 256,
                "thinkingConfig": {"thinkingBudget": THINKING_BUDGET},
            },
        )

    async def generate_payment_reminder(self, resident_name: str, amount: Decimal, due_date: date) -> str:
        prompt = (
            f"Generate a polite but firm reminder message for a resident of '{settings.HOSTEL_NAME}' "
            "about an overdue rent payment. The message should be suitable for SMS or a short email.\n\n"
            "Details for the reminder:\n"
            f"- Resident Name: {resident_name}\n"
            f"- Overdue Amount: {CurrencyFormatter.format_amount(amount, settings.CURRENCY)}\n"
            f"- Original Due Date: {DateTimeFormatter.format_date(due_date)}\n\n"
            "The tone should be professional and courteous, but make it clear that the payment is now "
            "overdue and requires prompt attention. "
            f"Sign off from \"{settings.HOSTEL_SIGNATURE}\"."
        )
        return await self.generate_text(
            self._user_turn(prompt),
            {
                "temperature": 0.8,
                "maxOutputTokens": 256,
                "thinkingConfig": {"thinkingBudget": THINKING_BUDGET},
            },
        )

    async def chat(self, messages: Iterable[ChatMessage]) -> str:
        contents = [{"role": m.role, "parts": [{"text": m.text}]} for m in messages]
        return await self.generate_text(contents)
