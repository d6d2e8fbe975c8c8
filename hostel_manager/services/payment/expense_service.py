"""
Expense service.
"""

from typing import List

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from hostel_manager.models import Expense
from hostel_manager.repositories.payment import ExpenseRepository
from hostel_manager.schemas.payment import ExpenseCreate
from hostel_manager.services.base import BaseService, ServiceResult


class ExpenseService(BaseService):

    def __init__(self, db_session: Session):
        super().__init__(db_session)
        self.expenses = ExpenseRepository(db_session)

    def list_expenses(self) -> ServiceResult[List[Expense]]:
        try:
            return ServiceResult.success(self.expenses.find_all())
        except SQLAlchemyError as e:
            return self._handle_exception(e, "list expenses")

    def add_expense(self, data: ExpenseCreate) -> ServiceResult[Expense]:
        try:
            with self.transaction():
                expense = self.expenses.create(Expense(
                    expense_date=data.date,
                    category=data.category,
                    description=data.description,
                    amount=data.amount,
                ))
            self._logger.info(f"Expense recorded: {expense.id}", extra={"category": data.category.value})
            return ServiceResult.success(expense, message="Expense added")
        except SQLAlchemyError as e:
            return self._handle_exception(e, "add expense")
