from hostel_manager.models.resident.resident import Resident
from hostel_manager.models.resident.room_history import RoomHistory

__all__ = ["Resident", "RoomHistory"]
