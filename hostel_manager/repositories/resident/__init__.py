from hostel_manager.repositories.resident.resident_repository import (
    ResidentRepository,
    RoomHistoryRepository,
)

__all__ = ["ResidentRepository", "RoomHistoryRepository"]
