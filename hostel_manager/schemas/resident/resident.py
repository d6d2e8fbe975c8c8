"""
Resident schemas: the full resident record used for create/update, status
changes, meal plans and room history.
"""

from __future__ import annotations

from datetime import date as Date
from decimal import Decimal
from typing import Optional

from pydantic import EmailStr, Field, field_validator

from hostel_manager.models.base import ResidentRole, ResidentStatus, ResidentType
from hostel_manager.schemas.common.base import (
    BaseCreateSchema,
    BaseResponseSchema,
    BaseSchema,
    MoneyAmount,
)

__all__ = [
    "MealPlan",
    "ResidentWrite",
    "ResidentResponse",
    "ResidentStatusChange",
    "RoomHistoryResponse",
]


class MealPlan(BaseSchema):
    """Three independent meal opt-ins."""

    breakfast: bool = False
    lunch: bool = False
    dinner: bool = False


class ResidentWrite(BaseCreateSchema):
    """
    Full resident record accepted by create and update.

    ``cot_id`` may be null, unchanged or a new cot; the occupancy service
    keeps the cot side in agreement.
    """

    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr = Field(..., description="Portal login, together with phone")
    phone: Optional[str] = Field(default=None, max_length=20)
    date_of_birth: Optional[Date] = None
    type: ResidentType = ResidentType.STUDENT
    role: ResidentRole = ResidentRole.RESIDENT
    user_id: Optional[str] = None
    guardian_name: Optional[str] = Field(default=None, max_length=255)
    guardian_phone: Optional[str] = Field(default=None, max_length=20)
    national_id_number: Optional[str] = Field(default=None, max_length=32)
    cot_id: Optional[str] = None
    rent: MoneyAmount = Decimal("0")
    deposit_amount: MoneyAmount = Decimal("0")
    meal_plan: MealPlan = Field(default_factory=MealPlan)

    @field_validator("phone", "guardian_phone", "guardian_name", "national_id_number", "cot_id", "user_id")
    @classmethod
    def blank_to_none(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not v.strip():
            return None
        return v

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.lower()


class ResidentResponse(BaseResponseSchema):
    user_id: Optional[str] = None
    role: ResidentRole
    name: str
    date_of_birth: Optional[Date] = None
    type: ResidentType
    national_id_number: Optional[str] = None
    phone: Optional[str] = None
    email: str
    guardian_name: Optional[str] = None
    guardian_phone: Optional[str] = None
    cot_id: Optional[str] = None
    rent: Decimal
    deposit_amount: Decimal
    meal_plan: MealPlan
    status: ResidentStatus


class ResidentStatusChange(BaseSchema):
    status: ResidentStatus
    effective_date: Optional[Date] = None


class RoomHistoryResponse(BaseResponseSchema):
    resident_id: str
    room_name: str
    cot_name: str
    start_date: Date
    end_date: Optional[Date] = None