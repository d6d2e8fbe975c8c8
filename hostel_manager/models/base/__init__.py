"""
Base model package: declarative base, abstract models and enums.
"""

from hostel_manager.models.base.base_model import (
    Base,
    BaseModel,
    TimestampModel,
    enum_column,
    new_id,
)
from hostel_manager.models.base.enums import (
    ExpenseCategory,
    FeedbackCategory,
    FeedbackStatus,
    PaymentStatus,
    ResidentRole,
    ResidentStatus,
    ResidentType,
)

__all__ = [
    "Base",
    "BaseModel",
    "TimestampModel",
    "enum_column",
    "new_id",
    "ExpenseCategory",
    "FeedbackCategory",
    "FeedbackStatus",
    "PaymentStatus",
    "ResidentRole",
    "ResidentStatus",
    "ResidentType",
]
