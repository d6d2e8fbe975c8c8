from hostel_manager.repositories.payment.payment_repository import (
    ExpenseRepository,
    PaymentRepository,
)

__all__ = ["PaymentRepository", "ExpenseRepository"]
