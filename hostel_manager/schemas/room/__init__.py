from hostel_manager.schemas.room.room import CotCreate, CotResponse, RoomCreate, RoomResponse

__all__ = ["RoomCreate", "CotCreate", "CotResponse", "RoomResponse"]
