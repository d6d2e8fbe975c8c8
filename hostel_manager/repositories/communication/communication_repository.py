"""
Feedback and notice repositories, both newest first.
"""

from typing import List

from sqlalchemy.orm import Session

from hostel_manager.models import Feedback, Notice
from hostel_manager.models.base import FeedbackStatus
from hostel_manager.repositories.base import BaseRepository


class FeedbackRepository(BaseRepository[Feedback]):

    default_order_by = (Feedback.feedback_date.desc(), Feedback.created_at.desc())

    def __init__(self, session: Session):
        super().__init__(Feedback, session)

    def find_for_resident(self, resident_id: str) -> List[Feedback]:
        return self.find_by_criteria({"resident_id": resident_id})

    def count_new(self) -> int:
        return self.count(status=FeedbackStatus.NEW)


class NoticeRepository(BaseRepository[Notice]):

    default_order_by = (Notice.notice_date.desc(), Notice.created_at.desc())

    def __init__(self, session: Session):
        super().__init__(Notice, session)
