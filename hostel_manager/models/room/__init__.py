from hostel_manager.models.room.room import Cot, Room

__all__ = ["Room", "Cot"]
