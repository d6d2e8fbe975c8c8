"""
Feedback and notice schemas.
"""

from __future__ import annotations

from datetime import date as Date
from typing import List

from pydantic import Field

from hostel_manager.models.base import FeedbackCategory, FeedbackStatus
from hostel_manager.schemas.common.base import BaseCreateSchema, BaseResponseSchema, BaseSchema

__all__ = [
    "FeedbackCreate",
    "FeedbackStatusUpdate",
    "FeedbackResponse",
    "NoticeCreate",
    "NoticeResponse",
    "NoticeGenerateRequest",
    "GeneratedNotice",
]


class FeedbackCreate(BaseCreateSchema):
    message: str = Field(..., min_length=1, max_length=2000)
    category: FeedbackCategory = FeedbackCategory.GENERAL


class FeedbackStatusUpdate(BaseSchema):
    status: FeedbackStatus


class FeedbackResponse(BaseResponseSchema):
    resident_id: str
    resident_name: str
    message: str
    date: Date = Field(..., validation_alias="feedback_date")
    status: FeedbackStatus
    category: FeedbackCategory


class NoticeCreate(BaseCreateSchema):
    title: str = Field(..., min_length=1, max_length=255)
    content: str = Field(..., min_length=1)
    date: Date | None = Field(default=None, description="Defaults to today")


class NoticeResponse(BaseResponseSchema):
    title: str
    content: str
    date: Date = Field(..., validation_alias="notice_date")


class NoticeGenerateRequest(BaseSchema):
    keywords: List[str] = Field(..., min_length=1, examples=[["water supply", "Sunday", "maintenance"]])


class GeneratedNotice(BaseSchema):
    keywords: List[str]
    content: str
