"""
Admin assistant chat schemas.
"""

from __future__ import annotations

from typing import List, Literal

from pydantic import Field

from hostel_manager.schemas.common.base import BaseSchema

__all__ = ["ChatMessage", "ChatRequest", "ChatResponse"]


class ChatMessage(BaseSchema):
    role: Literal["user", "model"]
    text: str = Field(..., min_length=1)


class ChatRequest(BaseSchema):
    messages: List[ChatMessage] = Field(..., min_length=1)


class ChatResponse(BaseSchema):
    reply: str
    source: Literal["generated", "fallback"]
