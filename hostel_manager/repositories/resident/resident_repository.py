"""
Resident and room-history repositories.
"""

from typing import List

from sqlalchemy import select
from sqlalchemy.orm import Session

from hostel_manager.models import Resident, RoomHistory
from hostel_manager.models.base import ResidentStatus
from hostel_manager.repositories.base import BaseRepository


class ResidentRepository(BaseRepository[Resident]):
    """Residents listed by name."""

    default_order_by = (Resident.name,)

    def __init__(self, session: Session):
        super().__init__(Resident, session)

    def find_by_credentials(self, email: str, phone: str) -> List[Resident]:
        """
        Exact match on stored email and phone.

        Returns every match; callers decide what more than one means.
        """
        stmt = select(Resident).where(Resident.email == email, Resident.phone == phone)
        return list(self.db.execute(stmt).scalars().all())

    def find_by_status(self, status: ResidentStatus) -> List[Resident]:
        return self.find_by_criteria({"status": status})


class RoomHistoryRepository(BaseRepository[RoomHistory]):
    """Assignment periods, newest first."""

    default_order_by = (RoomHistory.start_date.desc(),)

    def __init__(self, session: Session):
        super().__init__(RoomHistory, session)

    def find_for_resident(self, resident_id: str) -> List[RoomHistory]:
        return self.find_by_criteria({"resident_id": resident_id})

    def find_open_for_resident(self, resident_id: str) -> List[RoomHistory]:
        stmt = select(RoomHistory).where(
            RoomHistory.resident_id == resident_id,
            RoomHistory.end_date.is_(None),
        )
        return list(self.db.execute(stmt).scalars().all())
