from hostel_manager.schemas.communication.communication import (
    FeedbackCreate,
    FeedbackResponse,
    FeedbackStatusUpdate,
    GeneratedNotice,
    NoticeCreate,
    NoticeGenerateRequest,
    NoticeResponse,
)

__all__ = [
    "FeedbackCreate",
    "FeedbackStatusUpdate",
    "FeedbackResponse",
    "NoticeCreate",
    "NoticeResponse",
    "NoticeGenerateRequest",
    "GeneratedNotice",
]
