# hostel_manager/models/resident/room_history.py
"""
Room history: append-only log of a resident's cot assignments.

Room and cot names are snapshots taken at assignment time, so renaming or
deleting a room later does not rewrite history.
"""

from datetime import date
from typing import Optional

from sqlalchemy import Date, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from hostel_manager.models.base import BaseModel

__all__ = ["RoomHistory"]


class RoomHistory(BaseModel):
    """One assignment period; ``end_date`` is None for the current one."""

    __tablename__ = "room_history"

    resident_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("residents.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    room_name: Mapped[str] = mapped_column(String(100), nullable=False)
    cot_name: Mapped[str] = mapped_column(String(100), nullable=False)
    start_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    end_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
