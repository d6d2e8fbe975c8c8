# hostel_manager/models/payment/payment.py
"""
Rent payments and hostel expenses.
"""

from datetime import date
from decimal import Decimal

from sqlalchemy import Date, ForeignKey, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from hostel_manager.models.base import (
    ExpenseCategory,
    PaymentStatus,
    TimestampModel,
    enum_column,
)

__all__ = ["Payment", "Expense"]


class Payment(TimestampModel):
    """
    Amount owed by a resident for a due date.

    The status is fixed at creation (Due or Overdue) and only moves to Paid
    through an explicit confirmation.
    """

    __tablename__ = "payments"

    resident_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("residents.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    due_date: Mapped[date] = mapped_column("date", Date, nullable=False, index=True)
    status: Mapped[PaymentStatus] = mapped_column(
        enum_column(PaymentStatus),
        nullable=False,
        default=PaymentStatus.DUE,
        index=True,
    )
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")


class Expense(TimestampModel):
    """Money spent running the hostel."""

    __tablename__ = "expenses"

    expense_date: Mapped[date] = mapped_column("date", Date, nullable=False, index=True)
    category: Mapped[ExpenseCategory] = mapped_column(
        enum_column(ExpenseCategory),
        nullable=False,
        index=True,
    )
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
