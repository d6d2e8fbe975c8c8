from hostel_manager.schemas.resident.resident import (
    MealPlan,
    ResidentResponse,
    ResidentStatusChange,
    ResidentWrite,
    RoomHistoryResponse,
)

__all__ = [
    "MealPlan",
    "ResidentWrite",
    "ResidentResponse",
    "ResidentStatusChange",
    "RoomHistoryResponse",
]
