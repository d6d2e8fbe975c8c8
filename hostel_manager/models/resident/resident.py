# hostel_manager/models/resident/resident.py
"""
Resident model.

A resident occupies at most one cot. ``cot_id`` mirrors ``Cot.resident_id``;
the two sides are kept in agreement by the occupancy service, not by a
database constraint, so no foreign key is declared on this side.
"""

from datetime import date
from decimal import Decimal
from typing import Optional

from sqlalchemy import Boolean, Date, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from hostel_manager.models.base import (
    ResidentRole,
    ResidentStatus,
    ResidentType,
    TimestampModel,
    enum_column,
)

__all__ = ["Resident"]


class Resident(TimestampModel):
    """Person occupying, or formerly occupying, a cot."""

    __tablename__ = "residents"

    user_id: Mapped[Optional[str]] = mapped_column(String(36), nullable=True)
    role: Mapped[ResidentRole] = mapped_column(
        enum_column(ResidentRole),
        nullable=False,
        default=ResidentRole.RESIDENT,
    )

    # Identity
    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    date_of_birth: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    type: Mapped[ResidentType] = mapped_column(
        enum_column(ResidentType),
        nullable=False,
        default=ResidentType.STUDENT,
    )
    national_id_number: Mapped[Optional[str]] = mapped_column(String(32), nullable=True)

    # Contact; email + phone double as resident portal credentials
    phone: Mapped[Optional[str]] = mapped_column(String(20), nullable=True, index=True)
    email: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    guardian_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    guardian_phone: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)

    # Occupancy
    cot_id: Mapped[Optional[str]] = mapped_column(String(36), nullable=True, index=True)

    # Billing
    rent: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False, default=Decimal("0"))
    deposit_amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False, default=Decimal("0"))

    # Meal plan
    meal_breakfast: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    meal_lunch: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    meal_dinner: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    status: Mapped[ResidentStatus] = mapped_column(
        enum_column(ResidentStatus),
        nullable=False,
        default=ResidentStatus.ACTIVE,
        index=True,
    )

    @property
    def is_active(self) -> bool:
        return self.status == ResidentStatus.ACTIVE

    @property
    def meal_plan(self) -> dict:
        return {
            "breakfast": bool(self.meal_breakfast),
            "lunch": bool(self.meal_lunch),
            "dinner": bool(self.meal_dinner),
        }
