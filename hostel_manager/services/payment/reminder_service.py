"""
Payment reminder text.

Generated text is preferred; when generation fails the fixed template is
used instead so a reminder is always produced.
"""

from datetime import date
from decimal import Decimal
from typing import Tuple

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from starlette.concurrency import run_in_threadpool

from hostel_manager.config.settings import settings
from hostel_manager.core.exceptions import GenerationError
from hostel_manager.models import Payment, Resident
from hostel_manager.repositories.payment import PaymentRepository
from hostel_manager.repositories.resident import ResidentRepository
from hostel_manager.schemas.payment import ReminderResponse
from hostel_manager.services.base import BaseService, ServiceResult
from hostel_manager.services.integrations import TextGenerationService
from hostel_manager.utils.formatters import CurrencyFormatter, DateTimeFormatter


def reminder_template(name: str, amount: Decimal, due_date: date) -> str:
    return (
        f"Dear {name}, this is a reminder that your payment of "
        f"{CurrencyFormatter.format_amount(amount, settings.CURRENCY)} was due on "
        f"{DateTimeFormatter.format_date(due_date)}. Please make the payment at your earliest "
        f"convenience. Thank you, {settings.HOSTEL_SIGNATURE}."
    )


class ReminderService(BaseService):

    def __init__(self, db_session: Session, generator: TextGenerationService):
        super().__init__(db_session)
        self.generator = generator
        self.payments = PaymentRepository(db_session)
        self.residents = ResidentRepository(db_session)

    async def payment_reminder(self, payment_id: str) -> ServiceResult[ReminderResponse]:
        """
        Reminder text for a payment.

        The session is synchronous, so the lookups run in the threadpool and
        only the generation request is awaited on the event loop.
        """
        loaded = await run_in_threadpool(self._load_payment, payment_id)
        if not loaded.is_success:
            return loaded
        payment, resident = loaded.data

        try:
            text = await self.generator.generate_payment_reminder(resident.name, payment.amount, payment.due_date)
            source = "generated"
        except GenerationError as e:
            self._logger.warning(
                f"Reminder generation failed, using template: {e.message}",
                extra={"payment_id": payment_id},
            )
            text = reminder_template(resident.name, payment.amount, payment.due_date)
            source = "template"

        return ServiceResult.success(ReminderResponse(payment_id=payment_id, text=text, source=source))

    def _load_payment(self, payment_id: str) -> ServiceResult[Tuple[Payment, Resident]]:
        try:
            payment = self.payments.find_by_id(payment_id)
            if payment is None:
                return ServiceResult.not_found("Payment", payment_id)
            resident = self.residents.find_by_id(payment.resident_id)
            if resident is None:
                return ServiceResult.not_found("Resident", payment.resident_id)
            return ServiceResult.success((payment, resident))
        except SQLAlchemyError as e:
            return self._handle_exception(e, "load payment for reminder", payment_id)
