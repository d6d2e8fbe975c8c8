from hostel_manager.schemas.analytics.analytics import (
    DashboardSnapshot,
    FinancialSummary,
    IncomeChange,
    MealCounts,
    MonthlyAmount,
    Stats,
)

__all__ = [
    "Stats",
    "IncomeChange",
    "MealCounts",
    "MonthlyAmount",
    "FinancialSummary",
    "DashboardSnapshot",
]
