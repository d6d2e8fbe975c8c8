"""
Resident feedback.
"""

from datetime import date
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from hostel_manager.models import Feedback, Resident
from hostel_manager.models.base import FeedbackStatus
from hostel_manager.repositories.communication import FeedbackRepository
from hostel_manager.schemas.communication import FeedbackCreate
from hostel_manager.services.base import BaseService, ServiceResult


class FeedbackService(BaseService):

    def __init__(self, db_session: Session):
        super().__init__(db_session)
        self.feedback = FeedbackRepository(db_session)

    def list_feedback(self, resident_id: Optional[str] = None) -> ServiceResult[List[Feedback]]:
        try:
            if resident_id:
                return ServiceResult.success(self.feedback.find_for_resident(resident_id))
            return ServiceResult.success(self.feedback.find_all())
        except SQLAlchemyError as e:
            return self._handle_exception(e, "list feedback")

    def submit(
        self,
        resident: Resident,
        data: FeedbackCreate,
        today: Optional[date] = None,
    ) -> ServiceResult[Feedback]:
        """Record feedback as New, dated today, with the resident's name copied in."""
        try:
            with self.transaction():
                item = self.feedback.create(Feedback(
                    resident_id=resident.id,
                    resident_name=resident.name,
                    message=data.message,
                    category=data.category,
                    status=FeedbackStatus.NEW,
                    feedback_date=today or date.today(),
                ))
            self._logger.info(f"Feedback submitted: {item.id}", extra={"resident_id": resident.id})
            return ServiceResult.success(item, message="Feedback submitted")
        except SQLAlchemyError as e:
            return self._handle_exception(e, "submit feedback", resident.id)

    def mark_status(self, feedback_id: str, status: FeedbackStatus) -> ServiceResult[Feedback]:
        try:
            with self.transaction():
                item = self.feedback.find_by_id(feedback_id)
                if item is None:
                    return ServiceResult.not_found("Feedback", feedback_id)
                self.feedback.update(item, {"status": status})
            return ServiceResult.success(item)
        except SQLAlchemyError as e:
            return self._handle_exception(e, "update feedback status", feedback_id)
