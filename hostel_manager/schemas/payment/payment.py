"""
Payment and expense schemas.
"""

from __future__ import annotations

from datetime import date as Date
from decimal import Decimal
from typing import Literal, Optional

from pydantic import Field

from hostel_manager.models.base import ExpenseCategory, PaymentStatus
from hostel_manager.schemas.common.base import (
    BaseCreateSchema,
    BaseResponseSchema,
    BaseSchema,
    MoneyAmount,
)

__all__ = [
    "PaymentCreate",
    "PaymentStatusUpdate",
    "PaymentResponse",
    "ReminderResponse",
    "ExpenseCreate",
    "ExpenseResponse",
]


class PaymentCreate(BaseCreateSchema):
    """
    New payment for a resident.

    The status is not accepted from the caller; it is derived from the due
    date at creation.
    """

    resident_id: str = Field(..., min_length=1)
    amount: MoneyAmount = Field(..., gt=0)
    date: Date = Field(..., description="Due date")
    description: str = Field(default="", max_length=500, examples=["Rent for March"])


class PaymentStatusUpdate(BaseSchema):
    status: PaymentStatus


class PaymentResponse(BaseResponseSchema):
    resident_id: str
    amount: Decimal
    date: Date = Field(..., validation_alias="due_date")
    status: PaymentStatus
    effective_status: Optional[PaymentStatus] = Field(
        default=None,
        description="Stored status, with a Due payment past its date reported as Overdue",
    )
    description: str = ""


class ReminderResponse(BaseSchema):
    payment_id: str
    text: str
    source: Literal["generated", "template"]


class ExpenseCreate(BaseCreateSchema):
    date: Date
    category: ExpenseCategory
    description: str = Field(default="", max_length=500)
    amount: MoneyAmount = Field(..., gt=0)


class ExpenseResponse(BaseResponseSchema):
    date: Date = Field(..., validation_alias="expense_date")
    category: ExpenseCategory
    description: str = ""
    amount: Decimal
