"""
Payment and expense repositories, both newest first.
"""

from typing import List

from sqlalchemy.orm import Session

from hostel_manager.models import Expense, Payment
from hostel_manager.repositories.base import BaseRepository


class PaymentRepository(BaseRepository[Payment]):

    default_order_by = (Payment.due_date.desc(),)

    def __init__(self, session: Session):
        super().__init__(Payment, session)

    def find_for_resident(self, resident_id: str) -> List[Payment]:
        return self.find_by_criteria({"resident_id": resident_id})


class ExpenseRepository(BaseRepository[Expense]):

    default_order_by = (Expense.expense_date.desc(),)

    def __init__(self, session: Session):
        super().__init__(Expense, session)
