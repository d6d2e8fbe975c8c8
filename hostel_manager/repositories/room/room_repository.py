"""
Room and cot repositories.
"""

from typing import List, Optional

from sqlalchemy import or_, select
from sqlalchemy.orm import Session

from hostel_manager.models import Cot, Room
from hostel_manager.repositories.base import BaseRepository


class RoomRepository(BaseRepository[Room]):
    """Rooms listed by name."""

    default_order_by = (Room.name,)

    def __init__(self, session: Session):
        super().__init__(Room, session)


class CotRepository(BaseRepository[Cot]):
    """Cots listed by name."""

    default_order_by = (Cot.name,)

    def __init__(self, session: Session):
        super().__init__(Cot, session)

    def find_by_room(self, room_id: str) -> List[Cot]:
        return self.find_by_criteria({"room_id": room_id})

    def find_occupied_in_room(self, room_id: str) -> List[Cot]:
        stmt = (
            select(Cot)
            .where(Cot.room_id == room_id, Cot.resident_id.is_not(None))
            .order_by(*self.default_order_by)
        )
        return list(self.db.execute(stmt).scalars().all())

    def find_by_resident(self, resident_id: str) -> List[Cot]:
        """Every cot whose back-reference points at the resident."""
        return self.find_by_criteria({"resident_id": resident_id})

    def find_available(self, for_resident_id: Optional[str] = None) -> List[Cot]:
        """
        Cots a resident may be assigned to: unoccupied ones, plus the cot
        the given resident already holds.
        """
        condition = Cot.resident_id.is_(None)
        if for_resident_id:
            condition = or_(condition, Cot.resident_id == for_resident_id)
        stmt = select(Cot).where(condition).order_by(*self.default_order_by)
        return list(self.db.execute(stmt).scalars().all())
