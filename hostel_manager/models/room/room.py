# hostel_manager/models/room/room.py
"""
Room and cot models.

A cot is the unit of occupancy; ``Cot.resident_id`` is the back-reference
to the active resident sleeping in it.
"""

from typing import List, Optional

from sqlalchemy import ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from hostel_manager.models.base import TimestampModel

__all__ = ["Room", "Cot"]


class Room(TimestampModel):
    """Room with its cots; deleting a room removes its cots."""

    __tablename__ = "rooms"

    name: Mapped[str] = mapped_column(String(100), nullable=False, index=True)

    cots: Mapped[List["Cot"]] = relationship(
        "Cot",
        back_populates="room",
        cascade="all, delete-orphan",
        order_by="Cot.name",
    )


class Cot(TimestampModel):
    """Single sleeping space within a room."""

    __tablename__ = "cots"

    name: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    room_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("rooms.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    resident_id: Mapped[Optional[str]] = mapped_column(
        String(36),
        ForeignKey("residents.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    room: Mapped["Room"] = relationship("Room", back_populates="cots")

    @property
    def is_occupied(self) -> bool:
        return self.resident_id is not None
