"""
Feedback inbox and notice board (admin side).
"""

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from hostel_manager.api.deps import get_admin_principal, get_db, get_text_generator
from hostel_manager.schemas.communication import (
    FeedbackResponse,
    FeedbackStatusUpdate,
    GeneratedNotice,
    NoticeCreate,
    NoticeGenerateRequest,
    NoticeResponse,
)
from hostel_manager.services.communication import FeedbackService, NoticeService
from hostel_manager.services.integrations import TextGenerationService

router = APIRouter(tags=["Communication"], dependencies=[Depends(get_admin_principal)])


@router.get("/feedback", response_model=List[FeedbackResponse])
def list_feedback(db: Session = Depends(get_db)):
    return [FeedbackResponse.model_validate(f) for f in FeedbackService(db).list_feedback().unwrap()]


@router.patch("/feedback/{feedback_id}/status", response_model=FeedbackResponse)
def update_feedback_status(feedback_id: str, payload: FeedbackStatusUpdate, db: Session = Depends(get_db)):
    return FeedbackResponse.model_validate(FeedbackService(db).mark_status(feedback_id, payload.status).unwrap())


@router.get("/notices", response_model=List[NoticeResponse])
def list_notices(db: Session = Depends(get_db)):
    return [NoticeResponse.model_validate(n) for n in NoticeService(db).list_notices().unwrap()]


@router.post("/notices", response_model=NoticeResponse, status_code=201)
def create_notice(payload: NoticeCreate, db: Session = Depends(get_db)):
    return NoticeResponse.model_validate(NoticeService(db).create(payload).unwrap())


@router.delete("/notices/{notice_id}", status_code=204)
def delete_notice(notice_id: str, db: Session = Depends(get_db)):
    NoticeService(db).delete(notice_id).unwrap()


@router.post("/notices/generate", response_model=GeneratedNotice)
async def generate_notice(
    payload: NoticeGenerateRequest,
    generator: TextGenerationService = Depends(get_text_generator),
):
    """Draft notice text from keywords; generation failures are returned as errors."""
    content = await generator.generate_notice(payload.keywords)
    return GeneratedNotice(keywords=payload.keywords, content=content)
