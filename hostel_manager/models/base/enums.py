"""
Database enums shared by the ORM models and the Pydantic schemas.

Values are the labels stored in the database and shown to users.
"""

import enum


class ResidentRole(str, enum.Enum):
    """Portal role of a resident row."""
    ADMIN = "admin"
    RESIDENT = "resident"


class ResidentType(str, enum.Enum):
    """Resident category."""
    STUDENT = "Student"
    WORKING_WOMEN = "Working Women"


class ResidentStatus(str, enum.Enum):
    """Resident lifecycle state; Deleted is a soft, restorable delete."""
    ACTIVE = "Active"
    VACATED = "Vacated"
    DELETED = "Deleted"


class PaymentStatus(str, enum.Enum):
    """Payment lifecycle state."""
    PAID = "Paid"
    DUE = "Due"
    OVERDUE = "Overdue"


class ExpenseCategory(str, enum.Enum):
    """Closed set of expense categories."""
    FOOD_SUPPLIES = "Food Supplies"
    UTILITIES = "Utilities"
    MAINTENANCE = "Maintenance"
    STAFF_SALARY = "Staff Salary"
    MISCELLANEOUS = "Miscellaneous"


class FeedbackStatus(str, enum.Enum):
    NEW = "New"
    VIEWED = "Viewed"


class FeedbackCategory(str, enum.Enum):
    GENERAL = "General"
    COMPLAINT = "Complaint"
    REQUEST = "Request"


__all__ = [
    "ResidentRole",
    "ResidentType",
    "ResidentStatus",
    "PaymentStatus",
    "ExpenseCategory",
    "FeedbackStatus",
    "FeedbackCategory",
]
