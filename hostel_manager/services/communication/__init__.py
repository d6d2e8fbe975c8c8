from hostel_manager.services.communication.feedback_service import FeedbackService
from hostel_manager.services.communication.notice_service import NoticeService

__all__ = ["FeedbackService", "NoticeService"]
