"""
Room and cot schemas.
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import Field

from hostel_manager.schemas.common.base import BaseCreateSchema, BaseResponseSchema

__all__ = ["RoomCreate", "CotCreate", "CotResponse", "RoomResponse"]


class RoomCreate(BaseCreateSchema):
    name: str = Field(..., min_length=1, max_length=100, examples=["Room 101"])


class CotCreate(BaseCreateSchema):
    name: str = Field(..., min_length=1, max_length=100, examples=["Cot A"])
    room_id: str = Field(..., min_length=1)


class CotResponse(BaseResponseSchema):
    name: str
    room_id: str
    resident_id: Optional[str] = None
    is_occupied: bool


class RoomResponse(BaseResponseSchema):
    name: str
    cots: List[CotResponse] = Field(default_factory=list)
