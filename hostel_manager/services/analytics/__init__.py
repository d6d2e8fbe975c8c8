from hostel_manager.services.analytics.stats_service import (
    StatsService,
    compute_financial_summary,
    compute_meal_counts,
    compute_stats,
    percentage_change,
    previous_month,
)

__all__ = [
    "StatsService",
    "compute_stats",
    "percentage_change",
    "compute_financial_summary",
    "compute_meal_counts",
    "previous_month",
]
