"""
Shared pydantic configuration for request and response bodies.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Annotated, Optional

from pydantic import BaseModel, ConfigDict, Field

__all__ = [
    "BaseSchema",
    "BaseCreateSchema",
    "BaseResponseSchema",
    "MoneyAmount",
]

# Rupee amounts: two decimal places, never negative
MoneyAmount = Annotated[Decimal, Field(max_digits=12, decimal_places=2, ge=0)]


class BaseSchema(BaseModel):
    """
    Reads ORM objects directly and accepts both field names and aliases.

    Enums stay Enum members in Python and dump to their values in JSON.
    """

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
        str_strip_whitespace=True,
        validate_assignment=True,
    )


class BaseCreateSchema(BaseSchema):
    """Incoming payloads."""


class BaseResponseSchema(BaseSchema):
    id: str = Field(..., description="Record id")
    created_at: Optional[datetime] = Field(default=None, description="When the record was created")
