"""
Dashboard: monthly stats, financial summary and meal counts.
"""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from hostel_manager.api.deps import get_admin_principal, get_db
from hostel_manager.schemas.analytics import DashboardSnapshot, FinancialSummary, MealCounts
from hostel_manager.services.analytics import StatsService

router = APIRouter(prefix="/dashboard", tags=["Dashboard"], dependencies=[Depends(get_admin_principal)])

MONTH_PATTERN = r"^\d{4}-(0[1-9]|1[0-2])$"


def _reference_date(month: Optional[str]) -> date:
    if not month:
        return date.today()
    year, month_number = (int(part) for part in month.split("-"))
    return date(year, month_number, 1)


@router.get("", response_model=DashboardSnapshot)
def dashboard(
    month: Optional[str] = Query(None, pattern=MONTH_PATTERN, description="Reference month, YYYY-MM"),
    db: Session = Depends(get_db),
):
    return StatsService(db).dashboard(_reference_date(month)).unwrap()


@router.get("/financials", response_model=FinancialSummary)
def financials(
    months: int = Query(6, description="Window length: 6 or 12 months"),
    month: Optional[str] = Query(None, pattern=MONTH_PATTERN),
    db: Session = Depends(get_db),
):
    return StatsService(db).financial_summary(_reference_date(month), months).unwrap()


@router.get("/meals", response_model=MealCounts)
def meal_counts(db: Session = Depends(get_db)):
    return StatsService(db).meal_counts().unwrap()
