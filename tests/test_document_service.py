from datetime import date
from decimal import Decimal

import pytest

from hostel_manager.core.exceptions import ErrorCode
from hostel_manager.models.base import ResidentStatus
from hostel_manager.schemas.payment import PaymentCreate
from hostel_manager.services.documents import DocumentService
from hostel_manager.services.payment import PaymentService


@pytest.fixture
def documents(db_session, logo_service):
    return DocumentService(db_session, logos=logo_service, today=date(2024, 3, 15))


@pytest.fixture
def tenant(occupancy, room_with_cots, resident_data):
    _, (cot_a, _) = room_with_cots
    return occupancy.assign_or_update_resident(resident_data(name="Lakshmi & Co", cot_id=cot_a.id)).unwrap()


def test_statement_pdf(db_session, documents, tenant):
    PaymentService(db_session).add_payment(
        PaymentCreate(resident_id=tenant.id, amount=Decimal("8000"), date=date(2024, 3, 5), description="<March rent>"),
        today=date(2024, 3, 1),
    ).unwrap()

    document = documents.resident_document(tenant.id, "statement").unwrap()

    assert document.content.startswith(b"%PDF")
    assert document.filename == "Lakshmi_&_Co_Payment_Statement_2024-03-15.pdf"
    assert document.media_type == "application/pdf"


def test_welcome_letter_pdf(documents, tenant):
    assert documents.resident_document(tenant.id, "welcome").unwrap().content.startswith(b"%PDF")


def test_vacate_certificate_requires_vacated(occupancy, documents, tenant):
    assert documents.resident_document(tenant.id, "vacate").error_code == ErrorCode.INVALID_STATE

    occupancy.change_resident_status(tenant.id, ResidentStatus.VACATED).unwrap()

    document = documents.resident_document(tenant.id, "vacate").unwrap()
    assert document.filename.endswith("_Vacate_Certificate_2024-03-15.pdf")


def test_unknown_document_kind(documents, tenant):
    assert documents.resident_document(tenant.id, "receipt").error_code == ErrorCode.VALIDATION_ERROR


def test_invoice_scoped_to_resident(db_session, documents, tenant, make_resident):
    payment = PaymentService(db_session).add_payment(
        PaymentCreate(resident_id=tenant.id, amount=Decimal("1500"), date=date(2024, 3, 5)),
        today=date(2024, 3, 1),
    ).unwrap()
    stranger = make_resident()

    invoice = documents.payment_invoice(payment.id).unwrap()

    assert invoice.filename == f"Invoice_INV-{payment.id}.pdf"
    assert invoice.content.startswith(b"%PDF")
    assert documents.payment_invoice(payment.id, resident_id=stranger.id).error_code == ErrorCode.NOT_FOUND
