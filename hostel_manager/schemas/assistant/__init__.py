from hostel_manager.schemas.assistant.assistant import ChatMessage, ChatRequest, ChatResponse

__all__ = ["ChatMessage", "ChatRequest", "ChatResponse"]
