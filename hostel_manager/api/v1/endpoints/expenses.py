"""
Expenses.
"""

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from hostel_manager.api.deps import get_admin_principal, get_db
from hostel_manager.schemas.payment import ExpenseCreate, ExpenseResponse
from hostel_manager.services.payment import ExpenseService

router = APIRouter(prefix="/expenses", tags=["Expenses"], dependencies=[Depends(get_admin_principal)])


@router.get("", response_model=List[ExpenseResponse])
def list_expenses(db: Session = Depends(get_db)):
    return [ExpenseResponse.model_validate(e) for e in ExpenseService(db).list_expenses().unwrap()]


@router.post("", response_model=ExpenseResponse, status_code=201)
def create_expense(payload: ExpenseCreate, db: Session = Depends(get_db)):
    return ExpenseResponse.model_validate(ExpenseService(db).add_expense(payload).unwrap())
