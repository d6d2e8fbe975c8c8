"""
Billing and occupancy aggregation.

The ``compute_*`` functions are pure: they read attributes off whatever
entities they are given and never touch the session, so the same inputs
always give the same figures. ``StatsService`` loads the collections and
feeds them through.
"""

from collections import Counter
from datetime import date
from decimal import Decimal
from typing import Iterable, Optional, Tuple

from dateutil.relativedelta import relativedelta
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from hostel_manager.models.base import ExpenseCategory, PaymentStatus, ResidentStatus
from hostel_manager.repositories.communication import FeedbackRepository
from hostel_manager.repositories.payment import ExpenseRepository, PaymentRepository
from hostel_manager.repositories.resident import ResidentRepository
from hostel_manager.repositories.room import CotRepository
from hostel_manager.schemas.analytics import (
    DashboardSnapshot,
    FinancialSummary,
    IncomeChange,
    MealCounts,
    MonthlyAmount,
    Stats,
)
from hostel_manager.services.base import BaseService, ServiceResult

ZERO = Decimal("0")
SUMMARY_WINDOWS = (6, 12)


def _month_key(value: date) -> Tuple[int, int]:
    return value.year, value.month


def previous_month(reference_date: date) -> date:
    """First day of the calendar month before ``reference_date`` (January -> December)."""
    return reference_date.replace(day=1) - relativedelta(months=1)


def _amount(value) -> Decimal:
    return value if isinstance(value, Decimal) else Decimal(str(value))


def compute_stats(residents: Iterable, cots: Iterable, payments: Iterable, reference_date: date) -> Stats:
    """
    Monthly counters for the month containing ``reference_date``.

    Income sums Paid payments by due-date month. Due and Overdue are counted
    for the reference month only; outstanding payments from other months
    are not included.
    """
    this_month = _month_key(reference_date)
    last_month = _month_key(previous_month(reference_date))

    income_this = ZERO
    income_last = ZERO
    due = 0
    overdue = 0
    for payment in payments:
        month = _month_key(payment.due_date)
        if payment.status == PaymentStatus.PAID:
            if month == this_month:
                income_this += _amount(payment.amount)
            elif month == last_month:
                income_last += _amount(payment.amount)
        elif month == this_month:
            if payment.status == PaymentStatus.DUE:
                due += 1
            elif payment.status == PaymentStatus.OVERDUE:
                overdue += 1

    cots = list(cots)
    return Stats(
        total_residents=sum(1 for r in residents if r.status == ResidentStatus.ACTIVE),
        occupied_cots=sum(1 for c in cots if c.resident_id is not None),
        total_cots=len(cots),
        due_payments=due,
        overdue_payments=overdue,
        income_this_month=income_this,
        income_last_month=income_last,
        total_meals=0,
    )


def percentage_change(current, previous) -> IncomeChange:
    """
    Month-over-month change in percent.

    No previous income with some current income is reported as new income
    rather than a ratio.
    """
    current = _amount(current)
    previous = _amount(previous)
    if previous > 0:
        return IncomeChange(percentage=float((current - previous) / previous * 100))
    if current > 0:
        return IncomeChange(percentage=None, is_new_income=True)
    return IncomeChange(percentage=0.0)


def compute_financial_summary(
    payments: Iterable,
    expenses: Iterable,
    reference_date: date,
    months: int = 6,
) -> FinancialSummary:
    """
    Income and expense series over the ``months`` calendar months ending
    with the reference month.

    Raises:
        ValueError: If ``months`` is not 6 or 12
    """
    if months not in SUMMARY_WINDOWS:
        raise ValueError(f"months must be one of {SUMMARY_WINDOWS}, got {months}")

    first_of_month = reference_date.replace(day=1)
    start = first_of_month - relativedelta(months=months - 1)
    end = first_of_month + relativedelta(months=1, days=-1)

    series = {}
    for offset in range(months):
        month_start = start + relativedelta(months=offset)
        series[_month_key(month_start)] = MonthlyAmount(month=month_start.strftime("%Y-%m"))

    breakdown = Counter({status.value: 0 for status in PaymentStatus})
    total_income = ZERO
    for payment in payments:
        if not start <= payment.due_date <= end:
            continue
        breakdown[payment.status.value] += 1
        if payment.status == PaymentStatus.PAID:
            amount = _amount(payment.amount)
            series[_month_key(payment.due_date)].income += amount
            total_income += amount

    by_category = {category.value: ZERO for category in ExpenseCategory}
    total_expenses = ZERO
    for expense in expenses:
        if not start <= expense.expense_date <= end:
            continue
        amount = _amount(expense.amount)
        series[_month_key(expense.expense_date)].expenses += amount
        by_category[expense.category.value] += amount
        total_expenses += amount

    return FinancialSummary(
        start_date=start,
        end_date=end,
        months=list(series.values()),
        total_income=total_income,
        total_expenses=total_expenses,
        net_profit=total_income - total_expenses,
        payment_status_breakdown=dict(breakdown),
        expenses_by_category=by_category,
    )


def compute_meal_counts(residents: Iterable) -> MealCounts:
    """Active residents opted into each meal."""
    counts = MealCounts()
    for resident in residents:
        if resident.status != ResidentStatus.ACTIVE:
            continue
        counts.breakfast += int(bool(resident.meal_breakfast))
        counts.lunch += int(bool(resident.meal_lunch))
        counts.dinner += int(bool(resident.meal_dinner))
    return counts


class StatsService(BaseService):
    """Loads the collections and computes the dashboard views."""

    def __init__(self, db_session: Session):
        super().__init__(db_session)
        self.residents = ResidentRepository(db_session)
        self.cots = CotRepository(db_session)
        self.payments = PaymentRepository(db_session)
        self.expenses = ExpenseRepository(db_session)
        self.feedback = FeedbackRepository(db_session)

    def dashboard(self, reference_date: Optional[date] = None) -> ServiceResult[DashboardSnapshot]:
        reference_date = reference_date or date.today()
        try:
            residents = self.residents.find_all()
            payments = self.payments.find_all()
            stats = compute_stats(residents, self.cots.find_all(), payments, reference_date)
            snapshot = DashboardSnapshot(
                reference_month=reference_date.strftime("%Y-%m"),
                stats=stats,
                income_change=percentage_change(stats.income_this_month, stats.income_last_month),
                meal_counts=compute_meal_counts(residents),
                new_feedback=self.feedback.count_new(),
                outstanding_overdue=sum(1 for p in payments if p.status == PaymentStatus.OVERDUE),
            )
            return ServiceResult.success(snapshot)
        except SQLAlchemyError as e:
            return self._handle_exception(e, "compute dashboard")

    def financial_summary(
        self,
        reference_date: Optional[date] = None,
        months: int = 6,
    ) -> ServiceResult[FinancialSummary]:
        if months not in SUMMARY_WINDOWS:
            return ServiceResult.validation_failure(
                f"months must be one of {', '.join(str(m) for m in SUMMARY_WINDOWS)}",
                field="months",
            )
        try:
            summary = compute_financial_summary(
                self.payments.find_all(),
                self.expenses.find_all(),
                reference_date or date.today(),
                months,
            )
            return ServiceResult.success(summary)
        except SQLAlchemyError as e:
            return self._handle_exception(e, "compute financial summary")

    def meal_counts(self) -> ServiceResult[MealCounts]:
        try:
            return ServiceResult.success(compute_meal_counts(self.residents.find_all()))
        except SQLAlchemyError as e:
            return self._handle_exception(e, "compute meal counts")
