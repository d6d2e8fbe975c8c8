from hostel_manager.services.payment.expense_service import ExpenseService
from hostel_manager.services.payment.payment_service import (
    PaymentService,
    effective_status,
    initial_status,
)
from hostel_manager.services.payment.reminder_service import ReminderService, reminder_template

__all__ = [
    "PaymentService",
    "ExpenseService",
    "ReminderService",
    "effective_status",
    "initial_status",
    "reminder_template",
]
