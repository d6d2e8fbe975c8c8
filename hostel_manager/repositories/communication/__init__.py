from hostel_manager.repositories.communication.communication_repository import (
    FeedbackRepository,
    NoticeRepository,
)

__all__ = ["FeedbackRepository", "NoticeRepository"]
