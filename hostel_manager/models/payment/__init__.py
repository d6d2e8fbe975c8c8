from hostel_manager.models.payment.payment import Expense, Payment

__all__ = ["Payment", "Expense"]
