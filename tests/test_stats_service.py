from datetime import date
from decimal import Decimal
from types import SimpleNamespace

import pytest

from hostel_manager.models import Expense, Feedback, Payment
from hostel_manager.models.base import (
    ExpenseCategory,
    FeedbackCategory,
    FeedbackStatus,
    PaymentStatus,
    ResidentStatus,
)
from hostel_manager.services.analytics import (
    StatsService,
    compute_financial_summary,
    compute_meal_counts,
    compute_stats,
    percentage_change,
    previous_month,
)


def payment(amount, due, status):
    return SimpleNamespace(amount=Decimal(str(amount)), due_date=due, status=status)


def expense(amount, spent, category):
    return SimpleNamespace(amount=Decimal(str(amount)), expense_date=spent, category=category)


def resident(status=ResidentStatus.ACTIVE, breakfast=False, lunch=False, dinner=False):
    return SimpleNamespace(status=status, meal_breakfast=breakfast, meal_lunch=lunch, meal_dinner=dinner)


def test_monthly_stats_example():
    payments = [
        payment(8000, date(2024, 3, 5), PaymentStatus.PAID),
        payment(8000, date(2024, 2, 5), PaymentStatus.PAID),
        payment(1500, date(2024, 3, 10), PaymentStatus.DUE),
    ]

    stats = compute_stats([], [], payments, date(2024, 3, 20))

    assert stats.income_this_month == Decimal("8000")
    assert stats.income_last_month == Decimal("8000")
    assert stats.due_payments == 1
    assert stats.overdue_payments == 0
    assert percentage_change(stats.income_this_month, stats.income_last_month).percentage == 0.0


def test_outstanding_payments_from_other_months_are_not_counted():
    payments = [
        payment(1500, date(2024, 2, 10), PaymentStatus.DUE),
        payment(1500, date(2024, 1, 10), PaymentStatus.OVERDUE),
        payment(1500, date(2024, 3, 1), PaymentStatus.OVERDUE),
    ]

    stats = compute_stats([], [], payments, date(2024, 3, 20))

    assert (stats.due_payments, stats.overdue_payments) == (0, 1)


def test_january_compares_with_december():
    payments = [
        payment(6000, date(2024, 1, 5), PaymentStatus.PAID),
        payment(4000, date(2023, 12, 5), PaymentStatus.PAID),
        payment(9999, date(2024, 12, 5), PaymentStatus.PAID),
    ]

    stats = compute_stats([], [], payments, date(2024, 1, 15))

    assert previous_month(date(2024, 1, 15)) == date(2023, 12, 1)
    assert stats.income_this_month == Decimal("6000")
    assert stats.income_last_month == Decimal("4000")
    assert percentage_change(stats.income_this_month, stats.income_last_month).percentage == pytest.approx(50.0)


def test_occupancy_counters():
    residents = [resident(), resident(ResidentStatus.VACATED), resident(ResidentStatus.DELETED), resident()]
    cots = [SimpleNamespace(resident_id="r1"), SimpleNamespace(resident_id=None), SimpleNamespace(resident_id="r2")]

    stats = compute_stats(residents, cots, [], date(2024, 3, 1))

    assert stats.total_residents == 2
    assert (stats.occupied_cots, stats.total_cots) == (2, 3)
    assert stats.total_meals == 0


def test_new_income_is_not_a_ratio():
    change = percentage_change(Decimal("5000"), Decimal("0"))

    assert change.is_new_income is True
    assert change.percentage is None


def test_no_income_either_month_is_zero_change():
    change = percentage_change(Decimal("0"), Decimal("0"))

    assert change.percentage == 0.0
    assert change.is_new_income is False


def test_income_drop_is_negative():
    assert percentage_change(Decimal("6000"), Decimal("8000")).percentage == pytest.approx(-25.0)


def test_financial_summary_window_and_totals():
    payments = [
        payment(8000, date(2024, 3, 5), PaymentStatus.PAID),
        payment(7000, date(2023, 10, 5), PaymentStatus.PAID),
        payment(1500, date(2024, 2, 10), PaymentStatus.DUE),
        payment(9000, date(2023, 9, 30), PaymentStatus.PAID),
    ]
    expenses = [
        expense(2000, date(2024, 3, 2), ExpenseCategory.UTILITIES),
        expense(500, date(2024, 1, 15), ExpenseCategory.FOOD_SUPPLIES),
        expense(700, date(2024, 4, 1), ExpenseCategory.MAINTENANCE),
    ]

    summary = compute_financial_summary(payments, expenses, date(2024, 3, 20), months=6)

    assert summary.start_date == date(2023, 10, 1)
    assert summary.end_date == date(2024, 3, 31)
    assert [m.month for m in summary.months] == ["2023-10", "2023-11", "2023-12", "2024-01", "2024-02", "2024-03"]
    assert summary.total_income == Decimal("15000")
    assert summary.total_expenses == Decimal("2500")
    assert summary.net_profit == Decimal("12500")
    assert summary.payment_status_breakdown == {"Paid": 2, "Due": 1, "Overdue": 0}
    assert summary.expenses_by_category["Utilities"] == Decimal("2000")
    assert summary.expenses_by_category["Staff Salary"] == Decimal("0")
    assert summary.months[0].income == Decimal("7000")
    assert summary.months[-1].expenses == Decimal("2000")


def test_twelve_month_window_spans_year():
    summary = compute_financial_summary([], [], date(2024, 2, 29), months=12)

    assert summary.start_date == date(2023, 3, 1)
    assert summary.end_date == date(2024, 2, 29)
    assert len(summary.months) == 12


def test_financial_summary_rejects_other_windows():
    with pytest.raises(ValueError):
        compute_financial_summary([], [], date(2024, 3, 1), months=3)


def test_meal_counts_only_active_residents():
    residents = [
        resident(breakfast=True, dinner=True),
        resident(breakfast=True, lunch=True),
        resident(ResidentStatus.VACATED, breakfast=True, lunch=True, dinner=True),
    ]

    counts = compute_meal_counts(residents)

    assert (counts.breakfast, counts.lunch, counts.dinner) == (2, 1, 1)


def test_dashboard_snapshot(db_session, make_resident):
    holder = make_resident()
    db_session.add_all([
        Payment(resident_id=holder.id, amount=Decimal("8000"), due_date=date(2024, 3, 5), status=PaymentStatus.PAID),
        Payment(resident_id=holder.id, amount=Decimal("1500"), due_date=date(2023, 11, 5), status=PaymentStatus.OVERDUE),
        Feedback(
            resident_id=holder.id,
            resident_name=holder.name,
            message="Hot water is not working",
            category=FeedbackCategory.COMPLAINT,
            status=FeedbackStatus.NEW,
            feedback_date=date(2024, 3, 6),
        ),
    ])
    db_session.commit()

    snapshot = StatsService(db_session).dashboard(date(2024, 3, 15)).unwrap()

    assert snapshot.reference_month == "2024-03"
    assert snapshot.stats.total_residents == 1
    assert snapshot.stats.overdue_payments == 0
    assert snapshot.income_change.is_new_income is True
    assert snapshot.meal_counts.breakfast == 1
    assert snapshot.new_feedback == 1
    assert snapshot.outstanding_overdue == 1


def test_financial_summary_service_validates_window(db_session):
    db_session.add(Expense(
        expense_date=date(2024, 3, 1),
        category=ExpenseCategory.STAFF_SALARY,
        description="Cook",
        amount=Decimal("12000"),
    ))
    db_session.commit()
    service = StatsService(db_session)

    assert service.financial_summary(date(2024, 3, 15), months=7).error_code.value == "VALIDATION_ERROR"
    summary = service.financial_summary(date(2024, 3, 15), months=12).unwrap()
    assert summary.total_expenses == Decimal("12000")
