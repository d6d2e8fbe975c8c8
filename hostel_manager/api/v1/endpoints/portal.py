"""
Resident self-service portal.

Every endpoint acts on the signed-in resident only; another resident's
records are reported as not found.
"""

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from hostel_manager.api.deps import get_current_resident, get_db, get_logo_service
from hostel_manager.api.v1.endpoints.payments import invoice_response, to_response
from hostel_manager.models import Resident
from hostel_manager.schemas.communication import FeedbackCreate, FeedbackResponse, NoticeResponse
from hostel_manager.schemas.payment import PaymentResponse
from hostel_manager.schemas.resident import ResidentResponse
from hostel_manager.services.communication import FeedbackService, NoticeService
from hostel_manager.services.documents import DocumentService
from hostel_manager.services.file import LogoService
from hostel_manager.services.payment import PaymentService

router = APIRouter(prefix="/portal", tags=["Resident Portal"])


@router.get("/me", response_model=ResidentResponse)
def read_me(resident: Resident = Depends(get_current_resident)):
    return ResidentResponse.model_validate(resident)


@router.get("/payments", response_model=List[PaymentResponse])
def my_payments(resident: Resident = Depends(get_current_resident), db: Session = Depends(get_db)):
    return [to_response(p) for p in PaymentService(db).list_payments(resident.id).unwrap()]


@router.post("/payments/{payment_id}/confirm", response_model=PaymentResponse)
def confirm_payment(
    payment_id: str,
    resident: Resident = Depends(get_current_resident),
    db: Session = Depends(get_db),
):
    return to_response(PaymentService(db).confirm_payment(payment_id, resident.id).unwrap())


@router.get("/payments/{payment_id}/invoice")
def my_invoice(
    payment_id: str,
    resident: Resident = Depends(get_current_resident),
    db: Session = Depends(get_db),
    logos: LogoService = Depends(get_logo_service),
):
    document = DocumentService(db, logos=logos).payment_invoice(payment_id, resident_id=resident.id).unwrap()
    return invoice_response(document)


@router.get("/feedback", response_model=List[FeedbackResponse])
def my_feedback(resident: Resident = Depends(get_current_resident), db: Session = Depends(get_db)):
    return [FeedbackResponse.model_validate(f) for f in FeedbackService(db).list_feedback(resident.id).unwrap()]


@router.post("/feedback", response_model=FeedbackResponse, status_code=201)
def submit_feedback(
    payload: FeedbackCreate,
    resident: Resident = Depends(get_current_resident),
    db: Session = Depends(get_db),
):
    return FeedbackResponse.model_validate(FeedbackService(db).submit(resident, payload).unwrap())


@router.get("/notices", response_model=List[NoticeResponse])
def notices(resident: Resident = Depends(get_current_resident), db: Session = Depends(get_db)):
    return [NoticeResponse.model_validate(n) for n in NoticeService(db).list_notices().unwrap()]
