"""
Admin assistant chat.
"""

from fastapi import APIRouter, Depends

from hostel_manager.api.deps import get_admin_principal, get_text_generator
from hostel_manager.schemas.assistant import ChatRequest, ChatResponse
from hostel_manager.services.integrations import AssistantService, TextGenerationService

router = APIRouter(prefix="/assistant", tags=["Assistant"], dependencies=[Depends(get_admin_principal)])


@router.post("/chat", response_model=ChatResponse)
async def chat(payload: ChatRequest, generator: TextGenerationService = Depends(get_text_generator)):
    return await AssistantService(generator).chat(payload.messages)
