"""
Notice board.
"""

from datetime import date
from typing import List

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from hostel_manager.models import Notice
from hostel_manager.repositories.communication import NoticeRepository
from hostel_manager.schemas.communication import NoticeCreate
from hostel_manager.services.base import BaseService, ServiceResult


class NoticeService(BaseService):

    def __init__(self, db_session: Session):
        super().__init__(db_session)
        self.notices = NoticeRepository(db_session)

    def list_notices(self) -> ServiceResult[List[Notice]]:
        try:
            return ServiceResult.success(self.notices.find_all())
        except SQLAlchemyError as e:
            return self._handle_exception(e, "list notices")

    def create(self, data: NoticeCreate) -> ServiceResult[Notice]:
        try:
            with self.transaction():
                notice = self.notices.create(Notice(
                    title=data.title,
                    content=data.content,
                    notice_date=data.date or date.today(),
                ))
            self._logger.info(f"Notice published: {notice.id}")
            return ServiceResult.success(notice, message="Notice published")
        except SQLAlchemyError as e:
            return self._handle_exception(e, "create notice")

    def delete(self, notice_id: str) -> ServiceResult[bool]:
        try:
            with self.transaction():
                notice = self.notices.find_by_id(notice_id)
                if notice is None:
                    return ServiceResult.not_found("Notice", notice_id)
                self.notices.delete(notice)
            self._logger.info(f"Notice deleted: {notice_id}")
            return ServiceResult.success(True)
        except SQLAlchemyError as e:
            return self._handle_exception(e, "delete notice", notice_id)
