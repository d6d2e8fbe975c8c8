"""
Payment service.

A payment's status is fixed when it is created (Overdue when the due date
has already passed, Due otherwise) and afterwards only changes through an
explicit status update. ``effective_status`` gives the read-time view in
which a Due payment past its date counts as Overdue.
"""

from datetime import date
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from hostel_manager.models import Payment
from hostel_manager.models.base import PaymentStatus
from hostel_manager.repositories.payment import PaymentRepository
from hostel_manager.repositories.resident import ResidentRepository
from hostel_manager.schemas.payment import PaymentCreate
from hostel_manager.services.base import BaseService, ServiceResult


def initial_status(due_date: date, today: date) -> PaymentStatus:
    return PaymentStatus.OVERDUE if due_date < today else PaymentStatus.DUE


def effective_status(payment: Payment, today: Optional[date] = None) -> PaymentStatus:
    today = today or date.today()
    if payment.status == PaymentStatus.DUE and payment.due_date < today:
        return PaymentStatus.OVERDUE
    return payment.status


class PaymentService(BaseService):

    def __init__(self, db_session: Session):
        super().__init__(db_session)
        self.payments = PaymentRepository(db_session)
        self.residents = ResidentRepository(db_session)

    def list_payments(self, resident_id: Optional[str] = None) -> ServiceResult[List[Payment]]:
        try:
            if resident_id:
                return ServiceResult.success(self.payments.find_for_resident(resident_id))
            return ServiceResult.success(self.payments.find_all())
        except SQLAlchemyError as e:
            return self._handle_exception(e, "list payments")

    def add_payment(self, data: PaymentCreate, today: Optional[date] = None) -> ServiceResult[Payment]:
        today = today or date.today()
        try:
            with self.transaction():
                if self.residents.find_by_id(data.resident_id) is None:
                    return ServiceResult.not_found("Resident", data.resident_id)
                payment = self.payments.create(Payment(
                    resident_id=data.resident_id,
                    amount=data.amount,
                    due_date=data.date,
                    status=initial_status(data.date, today),
                    description=data.description,
                ))
            self._logger.info(
                f"Payment created: {payment.id}",
                extra={"resident_id": data.resident_id, "payment_status": payment.status.value},
            )
            return ServiceResult.success(payment, message="Payment added")
        except SQLAlchemyError as e:
            return self._handle_exception(e, "add payment", data.resident_id)

    def update_status(
        self,
        payment_id: str,
        status: PaymentStatus,
        resident_id: Optional[str] = None,
    ) -> ServiceResult[Payment]:
        """Set a payment's status; moving to Paid is the payment confirmation."""
        try:
            with self.transaction():
                payment = self.payments.lock_by_id(payment_id)
                if payment is None or (resident_id and payment.resident_id != resident_id):
                    return ServiceResult.not_found("Payment", payment_id)
                previous = payment.status
                self.payments.update(payment, {"status": status})
            self._logger.info(
                f"Payment {payment_id} status changed",
                extra={"from_status": previous.value, "to_status": status.value},
            )
            return ServiceResult.success(payment, message=f"Payment marked {status.value}")
        except SQLAlchemyError as e:
            return self._handle_exception(e, "update payment status", payment_id)

    def confirm_payment(self, payment_id: str, resident_id: str) -> ServiceResult[Payment]:
        """Resident-side confirmation of one of their own payments."""
        return self.update_status(payment_id, PaymentStatus.PAID, resident_id=resident_id)
