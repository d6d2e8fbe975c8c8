# hostel_manager/models/communication/communication.py
"""
Resident feedback and admin notices.
"""

from datetime import date

from sqlalchemy import Date, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from hostel_manager.models.base import (
    FeedbackCategory,
    FeedbackStatus,
    TimestampModel,
    enum_column,
)

__all__ = ["Feedback", "Notice"]


class Feedback(TimestampModel):
    """Message submitted by a resident; the name is a snapshot."""

    __tablename__ = "feedback"

    resident_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("residents.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    resident_name: Mapped[str] = mapped_column(String(255), nullable=False)
    message: Mapped[str] = mapped_column(Text, nullable=False)
    feedback_date: Mapped[date] = mapped_column("date", Date, nullable=False, index=True)
    status: Mapped[FeedbackStatus] = mapped_column(
        enum_column(FeedbackStatus),
        nullable=False,
        default=FeedbackStatus.NEW,
    )
    category: Mapped[FeedbackCategory] = mapped_column(
        enum_column(FeedbackCategory),
        nullable=False,
        default=FeedbackCategory.GENERAL,
    )


class Notice(TimestampModel):
    """Admin-authored broadcast, read-only to residents."""

    __tablename__ = "notices"

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    notice_date: Mapped[date] = mapped_column("date", Date, nullable=False, index=True)
