from hostel_manager.repositories.room.room_repository import CotRepository, RoomRepository

__all__ = ["RoomRepository", "CotRepository"]
