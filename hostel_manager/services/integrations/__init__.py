from hostel_manager.services.integrations.assistant_service import CHAT_FALLBACK_REPLY, AssistantService
from hostel_manager.services.integrations.text_generation_service import TextGenerationService

__all__ = ["TextGenerationService", "AssistantService", "CHAT_FALLBACK_REPLY"]
