"""
Derived, non-persisted views: monthly stats, financial summary, meal counts
and the dashboard snapshot that bundles them.
"""

from __future__ import annotations

from datetime import date as Date
from decimal import Decimal
from typing import Dict, List, Optional

from pydantic import Field

from hostel_manager.schemas.common.base import BaseSchema

__all__ = [
    "Stats",
    "IncomeChange",
    "MealCounts",
    "MonthlyAmount",
    "FinancialSummary",
    "DashboardSnapshot",
]


class Stats(BaseSchema):
    """Counters for one reference month."""

    total_residents: int = Field(..., description="Active residents")
    occupied_cots: int
    total_cots: int
    due_payments: int = Field(..., description="Due payments dated in the reference month")
    overdue_payments: int = Field(..., description="Overdue payments dated in the reference month")
    income_this_month: Decimal
    income_last_month: Decimal
    total_meals: int = 0


class IncomeChange(BaseSchema):
    """
    Month-over-month income change.

    ``percentage`` is None exactly when ``is_new_income`` is set: there was
    no income last month to compare against.
    """

    percentage: Optional[float] = None
    is_new_income: bool = False


class MealCounts(BaseSchema):
    breakfast: int = 0
    lunch: int = 0
    dinner: int = 0


class MonthlyAmount(BaseSchema):
    month: str = Field(..., examples=["2024-03"])
    income: Decimal = Decimal("0")
    expenses: Decimal = Decimal("0")


class FinancialSummary(BaseSchema):
    start_date: Date
    end_date: Date
    months: List[MonthlyAmount]
    total_income: Decimal
    total_expenses: Decimal
    net_profit: Decimal
    payment_status_breakdown: Dict[str, int]
    expenses_by_category: Dict[str, Decimal]


class DashboardSnapshot(BaseSchema):
    """Everything the admin dashboard renders, computed in one pass."""

    reference_month: str
    stats: Stats
    income_change: IncomeChange
    meal_counts: MealCounts
    new_feedback: int
    outstanding_overdue: int = Field(..., description="Overdue payments across all months")
