"""
ORM models. Importing this package registers every table on ``Base.metadata``.
"""

from hostel_manager.models.auth import AdminUser, RevokedToken
from hostel_manager.models.base import Base
from hostel_manager.models.communication import Feedback, Notice
from hostel_manager.models.payment import Expense, Payment
from hostel_manager.models.resident import Resident, RoomHistory
from hostel_manager.models.room import Cot, Room

__all__ = [
    "Base",
    "AdminUser",
    "RevokedToken",
    "Feedback",
    "Notice",
    "Expense",
    "Payment",
    "Resident",
    "RoomHistory",
    "Cot",
    "Room",
]
