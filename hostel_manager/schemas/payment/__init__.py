from hostel_manager.schemas.payment.payment import (
    ExpenseCreate,
    ExpenseResponse,
    PaymentCreate,
    PaymentResponse,
    PaymentStatusUpdate,
    ReminderResponse,
)

__all__ = [
    "PaymentCreate",
    "PaymentStatusUpdate",
    "PaymentResponse",
    "ReminderResponse",
    "ExpenseCreate",
    "ExpenseResponse",
]
