"""
Loads the entity snapshots a document needs and renders it.
"""

from dataclasses import dataclass
from datetime import date
from typing import Optional, Tuple

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from hostel_manager.core.exceptions import GenerationError
from hostel_manager.models import Resident
from hostel_manager.models.base import ResidentStatus
from hostel_manager.repositories.payment import PaymentRepository
from hostel_manager.repositories.resident import ResidentRepository
from hostel_manager.repositories.room import CotRepository
from hostel_manager.services.base import BaseService, ErrorCode, ServiceError, ServiceResult
from hostel_manager.services.documents.pdf_service import PdfService
from hostel_manager.services.file import LogoService

RESIDENT_DOCUMENT_KINDS = ("statement", "welcome", "vacate")


@dataclass
class GeneratedDocument:
    filename: str
    content: bytes
    media_type: str = "application/pdf"


def _slug(name: str) -> str:
    return "_".join(name.split()) or "resident"


class DocumentService(BaseService):

    def __init__(
        self,
        db_session: Session,
        logos: Optional[LogoService] = None,
        today: Optional[date] = None,
    ):
        super().__init__(db_session)
        self.residents = ResidentRepository(db_session)
        self.cots = CotRepository(db_session)
        self.payments = PaymentRepository(db_session)
        self.logos = logos or LogoService()
        self.today = today or date.today()
        self.pdf = PdfService(today=self.today)

    def resident_document(self, resident_id: str, kind: str) -> ServiceResult[GeneratedDocument]:
        """Render the payment statement, welcome letter or vacate certificate."""
        if kind not in RESIDENT_DOCUMENT_KINDS:
            return ServiceResult.validation_failure(
                f"Unknown document kind '{kind}'",
                field="kind",
                details={"allowed": list(RESIDENT_DOCUMENT_KINDS)},
            )
        try:
            resident = self.residents.find_by_id(resident_id)
            if resident is None:
                return ServiceResult.not_found("Resident", resident_id)
            if kind == "vacate" and resident.status != ResidentStatus.VACATED:
                return ServiceResult.invalid_state(
                    "A vacate certificate is only issued for vacated residents",
                    details={"resident_id": resident_id, "status": resident.status.value},
                )
            room_name, cot_name = self._assignment(resident)
            payments = self.payments.find_for_resident(resident_id) if kind == "statement" else []
        except SQLAlchemyError as e:
            return self._handle_exception(e, f"load data for {kind} document", resident_id)

        logo = self.logos.read_optional()
        stamp = self.today.isoformat()
        try:
            if kind == "statement":
                content = self.pdf.payment_statement(resident, payments, room_name, cot_name, logo)
                filename = f"{_slug(resident.name)}_Payment_Statement_{stamp}.pdf"
            elif kind == "welcome":
                content = self.pdf.welcome_letter(resident, room_name, cot_name, logo)
                filename = f"{_slug(resident.name)}_Welcome_Letter_{stamp}.pdf"
            else:
                content = self.pdf.vacate_letter(resident, logo)
                filename = f"{_slug(resident.name)}_Vacate_Certificate_{stamp}.pdf"
        except GenerationError as e:
            return self._generation_failure(e)

        self._logger.info(f"Rendered {kind} document for resident {resident_id}")
        return ServiceResult.success(GeneratedDocument(filename=filename, content=content))

    def payment_invoice(self, payment_id: str, resident_id: Optional[str] = None) -> ServiceResult[GeneratedDocument]:
        try:
            payment = self.payments.find_by_id(payment_id)
            if payment is None or (resident_id and payment.resident_id != resident_id):
                return ServiceResult.not_found("Payment", payment_id)
            resident = self.residents.find_by_id(payment.resident_id)
            if resident is None:
                return ServiceResult.not_found("Resident", payment.resident_id)
        except SQLAlchemyError as e:
            return self._handle_exception(e, "load data for invoice", payment_id)

        try:
            content = self.pdf.invoice(payment, resident, self.logos.read_optional())
        except GenerationError as e:
            return self._generation_failure(e)
        return ServiceResult.success(GeneratedDocument(filename=f"Invoice_INV-{payment.id}.pdf", content=content))

    def _assignment(self, resident: Resident) -> Tuple[Optional[str], Optional[str]]:
        if not resident.cot_id:
            return None, None
        cot = self.cots.find_by_id(resident.cot_id)
        if cot is None:
            return None, None
        return cot.room.name, cot.name

    @staticmethod
    def _generation_failure(error: GenerationError) -> ServiceResult:
        return ServiceResult.failure(
            ServiceError(code=ErrorCode.GENERATION_FAILED, message=error.message, details=error.details)
        )
