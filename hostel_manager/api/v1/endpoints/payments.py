"""
Payments: creation, status changes, reminders and invoices.
"""

from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from hostel_manager.api.deps import get_admin_principal, get_db, get_logo_service, get_text_generator
from hostel_manager.models import Payment
from hostel_manager.schemas.payment import (
    PaymentCreate,
    PaymentResponse,
    PaymentStatusUpdate,
    ReminderResponse,
)
from hostel_manager.services.documents import DocumentService
from hostel_manager.services.file import LogoService
from hostel_manager.services.integrations import TextGenerationService
from hostel_manager.services.payment import PaymentService, ReminderService, effective_status

router = APIRouter(prefix="/payments", tags=["Payments"], dependencies=[Depends(get_admin_principal)])


def to_response(payment: Payment, today: Optional[date] = None) -> PaymentResponse:
    response = PaymentResponse.model_validate(payment)
    response.effective_status = effective_status(payment, today)
    return response


def invoice_response(document) -> Response:
    return Response(
        content=document.content,
        media_type=document.media_type,
        headers={"Content-Disposition": f'attachment; filename="{document.filename}"'},
    )


@router.get("", response_model=List[PaymentResponse])
def list_payments(resident_id: Optional[str] = None, db: Session = Depends(get_db)):
    payments = PaymentService(db).list_payments(resident_id).unwrap()
    today = date.today()
    return [to_response(p, today) for p in payments]


@router.post("", response_model=PaymentResponse, status_code=201)
def create_payment(payload: PaymentCreate, db: Session = Depends(get_db)):
    return to_response(PaymentService(db).add_payment(payload).unwrap())


@router.patch("/{payment_id}/status", response_model=PaymentResponse)
def update_payment_status(payment_id: str, payload: PaymentStatusUpdate, db: Session = Depends(get_db)):
    return to_response(PaymentService(db).update_status(payment_id, payload.status).unwrap())


@router.post("/{payment_id}/reminder", response_model=ReminderResponse)
async def payment_reminder(
    payment_id: str,
    db: Session = Depends(get_db),
    generator: TextGenerationService = Depends(get_text_generator),
):
    result = await ReminderService(db, generator).payment_reminder(payment_id)
    return result.unwrap()


@router.get("/{payment_id}/invoice")
def payment_invoice(
    payment_id: str,
    db: Session = Depends(get_db),
    logos: LogoService = Depends(get_logo_service),
):
    return invoice_response(DocumentService(db, logos=logos).payment_invoice(payment_id).unwrap())
