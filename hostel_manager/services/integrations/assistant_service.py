"""
Admin assistant chat.
"""

from typing import List

from hostel_manager.core.exceptions import GenerationError
from hostel_manager.core.logging import get_logger
from hostel_manager.schemas.assistant import ChatMessage, ChatResponse
from hostel_manager.services.integrations.text_generation_service import TextGenerationService

logger = get_logger(__name__)

CHAT_FALLBACK_REPLY = "Sorry, I encountered an error. Please try again."


class AssistantService:
    """Forwards the conversation; a failed generation yields the fixed apology."""

    def __init__(self, generator: TextGenerationService):
        self.generator = generator

    async def chat(self, messages: List[ChatMessage]) -> ChatResponse:
        try:
            reply = await self.generator.chat(messages)
        except GenerationError as e:
            logger.warning(f"Assistant reply unavailable: {e.message}", extra={"error_details": e.details})
            return ChatResponse(reply=CHAT_FALLBACK_REPLY, source="fallback")
        return ChatResponse(reply=reply, source="generated")
