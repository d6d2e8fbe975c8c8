from datetime import date
from decimal import Decimal

import pytest

from hostel_manager.core.exceptions import ErrorCode
from hostel_manager.models import Payment
from hostel_manager.models.base import ExpenseCategory, FeedbackStatus, PaymentStatus
from hostel_manager.schemas.communication import FeedbackCreate, NoticeCreate
from hostel_manager.schemas.payment import ExpenseCreate, PaymentCreate
from hostel_manager.services.communication import FeedbackService, NoticeService
from hostel_manager.services.payment import ExpenseService, PaymentService, effective_status, initial_status


@pytest.mark.parametrize(
    "due, expected",
    [
        (date(2024, 3, 9), PaymentStatus.OVERDUE),
        (date(2024, 3, 10), PaymentStatus.DUE),
        (date(2024, 4, 1), PaymentStatus.DUE),
    ],
)
def test_initial_status_from_due_date(due, expected):
    assert initial_status(due, today=date(2024, 3, 10)) == expected


def test_effective_status_reports_late_due_as_overdue():
    late = Payment(due_date=date(2024, 3, 1), status=PaymentStatus.DUE)
    paid = Payment(due_date=date(2024, 3, 1), status=PaymentStatus.PAID)

    assert effective_status(late, today=date(2024, 3, 2)) == PaymentStatus.OVERDUE
    assert effective_status(late, today=date(2024, 3, 1)) == PaymentStatus.DUE
    assert effective_status(paid, today=date(2024, 5, 1)) == PaymentStatus.PAID


def test_add_payment_sets_status(db_session, make_resident):
    resident = make_resident()
    service = PaymentService(db_session)

    payment = service.add_payment(
        PaymentCreate(resident_id=resident.id, amount=Decimal("8000"), date=date(2024, 3, 5), description="Rent"),
        today=date(2024, 3, 10),
    ).unwrap()

    assert payment.status == PaymentStatus.OVERDUE
    assert payment.due_date == date(2024, 3, 5)
    assert [p.id for p in service.list_payments(resident.id).unwrap()] == [payment.id]


def test_add_payment_for_unknown_resident(db_session):
    result = PaymentService(db_session).add_payment(
        PaymentCreate(resident_id="nobody", amount=Decimal("100"), date=date(2024, 3, 5))
    )

    assert result.error_code == ErrorCode.NOT_FOUND


def test_resident_confirms_only_own_payment(db_session, make_resident):
    owner = make_resident()
    other = make_resident()
    service = PaymentService(db_session)
    payment = service.add_payment(
        PaymentCreate(resident_id=owner.id, amount=Decimal("8000"), date=date(2024, 3, 5)),
        today=date(2024, 3, 1),
    ).unwrap()

    assert service.confirm_payment(payment.id, other.id).error_code == ErrorCode.NOT_FOUND
    assert service.confirm_payment(payment.id, owner.id).unwrap().status == PaymentStatus.PAID


def test_admin_status_update(db_session, make_resident):
    resident = make_resident()
    service = PaymentService(db_session)
    payment = service.add_payment(
        PaymentCreate(resident_id=resident.id, amount=Decimal("1500"), date=date(2024, 3, 5)),
        today=date(2024, 3, 1),
    ).unwrap()

    updated = service.update_status(payment.id, PaymentStatus.OVERDUE).unwrap()

    assert updated.status == PaymentStatus.OVERDUE
    assert service.update_status("missing", PaymentStatus.PAID).error_code == ErrorCode.NOT_FOUND


def test_amount_must_be_positive():
    with pytest.raises(ValueError):
        PaymentCreate(resident_id="r1", amount=Decimal("0"), date=date(2024, 3, 5))


def test_expenses_recorded(db_session):
    service = ExpenseService(db_session)

    expense = service.add_expense(ExpenseCreate(
        date=date(2024, 3, 3),
        category=ExpenseCategory.FOOD_SUPPLIES,
        description="Vegetables",
        amount=Decimal("2450.50"),
    )).unwrap()

    assert expense.expense_date == date(2024, 3, 3)
    assert len(service.list_expenses().unwrap()) == 1


def test_feedback_submitted_as_new(db_session, make_resident):
    resident = make_resident(name="Kavya")
    service = FeedbackService(db_session)

    item = service.submit(resident, FeedbackCreate(message="Wi-Fi is slow"), today=date(2024, 3, 8)).unwrap()

    assert item.status == FeedbackStatus.NEW
    assert item.resident_name == "Kavya"
    assert item.feedback_date == date(2024, 3, 8)

    assert service.mark_status(item.id, FeedbackStatus.VIEWED).unwrap().status == FeedbackStatus.VIEWED


def test_notices_create_and_delete(db_session):
    service = NoticeService(db_session)

    notice = service.create(NoticeCreate(title="Water", content="No water on Sunday", date=date(2024, 3, 9))).unwrap()

    assert notice.notice_date == date(2024, 3, 9)
    assert service.delete(notice.id).unwrap() is True
    assert service.list_notices().unwrap() == []
    assert service.delete(notice.id).error_code == ErrorCode.NOT_FOUND
