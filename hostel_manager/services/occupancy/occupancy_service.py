"""
Occupancy service: keeps ``Resident.cot_id`` and ``Cot.resident_id`` in
agreement and guards destructive room/cot operations.

Every command runs as one transaction. The resident row and any cot rows it
touches are loaded with row locks, re-validated, and written together, so a
failure part-way leaves nothing behind.

Invariants maintained here:
    - an Active resident with ``cot_id = c`` is the resident of cot ``c``
    - a cot's ``resident_id`` only ever names an Active resident
    - a non-Active resident has ``cot_id = None``
    - at most one cot names a given resident
    - a resident has at most one open room-history entry
"""

from datetime import date
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from hostel_manager.models import Cot, Resident, Room, RoomHistory
from hostel_manager.models.base import ResidentStatus
from hostel_manager.repositories.resident import ResidentRepository, RoomHistoryRepository
from hostel_manager.repositories.room import CotRepository, RoomRepository
from hostel_manager.schemas.resident import MealPlan, ResidentWrite
from hostel_manager.services.base import BaseService, ServiceResult

# (current, target) pairs; a request for the current status is a no-op
ALLOWED_TRANSITIONS = frozenset({
    (ResidentStatus.ACTIVE, ResidentStatus.VACATED),
    (ResidentStatus.VACATED, ResidentStatus.ACTIVE),
    (ResidentStatus.ACTIVE, ResidentStatus.DELETED),
    (ResidentStatus.DELETED, ResidentStatus.ACTIVE),
})


def is_transition_allowed(current: ResidentStatus, target: ResidentStatus) -> bool:
    return current == target or (current, target) in ALLOWED_TRANSITIONS


class OccupancyService(BaseService):
    """Resident, room and cot commands."""

    def __init__(self, db_session: Session):
        super().__init__(db_session)
        self.residents = ResidentRepository(db_session)
        self.rooms = RoomRepository(db_session)
        self.cots = CotRepository(db_session)
        self.history = RoomHistoryRepository(db_session)

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def list_residents(self, status: Optional[ResidentStatus] = None) -> ServiceResult[List[Resident]]:
        try:
            if status is None:
                return ServiceResult.success(self.residents.find_all())
            return ServiceResult.success(self.residents.find_by_status(status))
        except SQLAlchemyError as e:
            return self._handle_exception(e, "list residents")

    def get_resident(self, resident_id: str) -> ServiceResult[Resident]:
        try:
            resident = self.residents.find_by_id(resident_id)
            if resident is None:
                return ServiceResult.not_found("Resident", resident_id)
            return ServiceResult.success(resident)
        except SQLAlchemyError as e:
            return self._handle_exception(e, "get resident", resident_id)

    def list_rooms(self) -> ServiceResult[List[Room]]:
        try:
            return ServiceResult.success(self.rooms.find_all())
        except SQLAlchemyError as e:
            return self._handle_exception(e, "list rooms")

    def list_cots(self, room_id: Optional[str] = None) -> ServiceResult[List[Cot]]:
        try:
            if room_id:
                return ServiceResult.success(self.cots.find_by_room(room_id))
            return ServiceResult.success(self.cots.find_all())
        except SQLAlchemyError as e:
            return self._handle_exception(e, "list cots")

    def list_available_cots(self, for_resident_id: Optional[str] = None) -> ServiceResult[List[Cot]]:
        """Candidate cots for an assignment: unoccupied, or held by ``for_resident_id``."""
        try:
            return ServiceResult.success(self.cots.find_available(for_resident_id))
        except SQLAlchemyError as e:
            return self._handle_exception(e, "list available cots")

    def room_history(self, resident_id: str) -> ServiceResult[List[RoomHistory]]:
        try:
            if self.residents.find_by_id(resident_id) is None:
                return ServiceResult.not_found("Resident", resident_id)
            return ServiceResult.success(self.history.find_for_resident(resident_id))
        except SQLAlchemyError as e:
            return self._handle_exception(e, "list room history", resident_id)

    # -------------------------------------------------------------------------
    # Resident commands
    # -------------------------------------------------------------------------

    def assign_or_update_resident(
        self,
        data: ResidentWrite,
        resident_id: Optional[str] = None,
        effective_date: Optional[date] = None,
    ) -> ServiceResult[Resident]:
        """
        Create a resident, or update one, and bring the cot links in line
        with ``data.cot_id``.

        When the cot changes the new cot is pointed at the resident, the
        previous cot is released, and the room history is closed and
        reopened on ``effective_date``. A target cot held by somebody else
        is refused with a conflict.
        """
        effective_date = effective_date or date.today()
        try:
            with self.transaction():
                resident = None
                previous_cot_id = None
                if resident_id:
                    resident = self.residents.lock_by_id(resident_id)
                    if resident is None:
                        return ServiceResult.not_found("Resident", resident_id)
                    previous_cot_id = resident.cot_id

                new_cot_id = data.cot_id
                cot_changed = new_cot_id != previous_cot_id
                new_cot = None

                if cot_changed and new_cot_id:
                    if resident is not None and not resident.is_active:
                        return ServiceResult.invalid_state(
                            f"Only active residents can be assigned a cot (status: {resident.status.value})",
                            details={"resident_id": resident.id, "status": resident.status.value},
                        )
                    new_cot = self.cots.lock_by_id(new_cot_id)
                    if new_cot is None:
                        return ServiceResult.not_found("Cot", new_cot_id)
                    if new_cot.resident_id is not None and new_cot.resident_id != resident_id:
                        return ServiceResult.conflict(
                            f"Cot {new_cot.name} is already occupied",
                            details={"cot_id": new_cot.id, "resident_id": new_cot.resident_id},
                        )

                fields = self._resident_fields(data)
                if resident is None:
                    resident = self.residents.create(Resident(status=ResidentStatus.ACTIVE, **fields))
                    self._logger.info(f"Resident created: {resident.id}")
                else:
                    self.residents.update(resident, fields)
                    self._logger.info(f"Resident updated: {resident.id}")

                if cot_changed:
                    self._move_resident(resident, previous_cot_id, new_cot, effective_date)

            return ServiceResult.success(resident, message="Resident saved")
        except SQLAlchemyError as e:
            return self._handle_exception(e, "save resident", resident_id)

    def change_resident_status(
        self,
        resident_id: str,
        new_status: ResidentStatus,
        effective_date: Optional[date] = None,
    ) -> ServiceResult[Resident]:
        """
        Move a resident through Active / Vacated / Deleted.

        Leaving Active releases the cot, clears ``cot_id`` and closes the
        open room-history entry. Returning to Active assigns no cot.
        """
        effective_date = effective_date or date.today()
        try:
            with self.transaction():
                resident = self.residents.lock_by_id(resident_id)
                if resident is None:
                    return ServiceResult.not_found("Resident", resident_id)

                current = resident.status
                if current == new_status:
                    return ServiceResult.success(resident, message="Status unchanged")
                if not is_transition_allowed(current, new_status):
                    return ServiceResult.invalid_state(
                        f"Cannot change resident status from {current.value} to {new_status.value}",
                        details={"resident_id": resident_id, "from": current.value, "to": new_status.value},
                    )

                self._apply_status(resident, new_status, effective_date)

            return ServiceResult.success(resident, message=f"Resident marked {new_status.value}")
        except SQLAlchemyError as e:
            return self._handle_exception(e, "change resident status", resident_id)

    def restore_resident(self, resident_id: str) -> ServiceResult[Resident]:
        """Bring a Deleted resident back to Active, without a cot."""
        try:
            with self.transaction():
                resident = self.residents.lock_by_id(resident_id)
                if resident is None:
                    return ServiceResult.not_found("Resident", resident_id)
                if resident.status != ResidentStatus.DELETED:
                    return ServiceResult.invalid_state(
                        f"Only deleted residents can be restored (status: {resident.status.value})",
                        details={"resident_id": resident_id, "status": resident.status.value},
                    )
                self._apply_status(resident, ResidentStatus.ACTIVE, date.today())
            return ServiceResult.success(resident, message="Resident restored")
        except SQLAlchemyError as e:
            return self._handle_exception(e, "restore resident", resident_id)

    def update_meal_plan(self, resident_id: str, meal_plan: MealPlan) -> ServiceResult[Resident]:
        try:
            with self.transaction():
                resident = self.residents.find_by_id(resident_id)
                if resident is None:
                    return ServiceResult.not_found("Resident", resident_id)
                self.residents.update(resident, {
                    "meal_breakfast": meal_plan.breakfast,
                    "meal_lunch": meal_plan.lunch,
                    "meal_dinner": meal_plan.dinner,
                })
            return ServiceResult.success(resident, message="Meal plan updated")
        except SQLAlchemyError as e:
            return self._handle_exception(e, "update meal plan", resident_id)

    # -------------------------------------------------------------------------
    # Room and cot commands
    # -------------------------------------------------------------------------

    def add_room(self, name: str) -> ServiceResult[Room]:
        try:
            with self.transaction():
                room = self.rooms.create(Room(name=name))
            self._logger.info(f"Room created: {room.id}")
            return ServiceResult.success(room, message="Room created")
        except SQLAlchemyError as e:
            return self._handle_exception(e, "create room")

    def add_cot(self, name: str, room_id: str) -> ServiceResult[Cot]:
        try:
            with self.transaction():
                if self.rooms.find_by_id(room_id) is None:
                    return ServiceResult.not_found("Room", room_id)
                cot = self.cots.create(Cot(name=name, room_id=room_id))
            self._logger.info(f"Cot created: {cot.id}")
            return ServiceResult.success(cot, message="Cot created")
        except SQLAlchemyError as e:
            return self._handle_exception(e, "create cot")

    def delete_room(self, room_id: str) -> ServiceResult[bool]:
        """Delete a room and its cots; refused while any of its cots is occupied."""
        try:
            with self.transaction():
                room = self.rooms.lock_by_id(room_id)
                if room is None:
                    return ServiceResult.not_found("Room", room_id)
                occupied = self.cots.find_occupied_in_room(room_id)
                if occupied:
                    return ServiceResult.conflict(
                        "Room has occupied cots",
                        details={"room_id": room_id, "occupied_cot_ids": [cot.id for cot in occupied]},
                    )
                self.rooms.delete(room)
            self._logger.info(f"Room deleted: {room_id}")
            return ServiceResult.success(True, message="Room deleted")
        except SQLAlchemyError as e:
            return self._handle_exception(e, "delete room", room_id)

    def delete_cot(self, cot_id: str) -> ServiceResult[bool]:
        try:
            with self.transaction():
                cot = self.cots.lock_by_id(cot_id)
                if cot is None:
                    return ServiceResult.not_found("Cot", cot_id)
                if cot.is_occupied:
                    return ServiceResult.conflict(
                        f"Cot {cot.name} is occupied",
                        details={"cot_id": cot_id, "resident_id": cot.resident_id},
                    )
                self.cots.delete(cot)
            self._logger.info(f"Cot deleted: {cot_id}")
            return ServiceResult.success(True, message="Cot deleted")
        except SQLAlchemyError as e:
            return self._handle_exception(e, "delete cot", cot_id)

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    @staticmethod
    def _resident_fields(data: ResidentWrite) -> dict:
        fields = data.model_dump(exclude={"meal_plan"})
        fields["meal_breakfast"] = data.meal_plan.breakfast
        fields["meal_lunch"] = data.meal_plan.lunch
        fields["meal_dinner"] = data.meal_plan.dinner
        return fields

    def _apply_status(self, resident: Resident, new_status: ResidentStatus, effective_date: date) -> None:
        """Set the status on a locked resident; leaving Active drops the cot and closes history."""
        previous = resident.status
        if new_status != ResidentStatus.ACTIVE:
            self._release_cots(resident)
            self._close_history(resident.id, effective_date)
            resident.cot_id = None

        resident.status = new_status
        self.db.flush()
        self._logger.info(
            f"Resident {resident.id} status changed",
            extra={"from_status": previous.value, "to_status": new_status.value},
        )

    def _move_resident(
        self,
        resident: Resident,
        previous_cot_id: Optional[str],
        new_cot: Optional[Cot],
        effective_date: date,
    ) -> None:
        """Point ``new_cot`` at the resident and release every other cot naming them."""
        keep_id = new_cot.id if new_cot is not None else None
        self._release_cots(resident, keep_cot_id=keep_id)

        if new_cot is not None:
            self.cots.update(new_cot, {"resident_id": resident.id})

        self._close_history(resident.id, effective_date)
        if new_cot is not None:
            self.history.create(RoomHistory(
                resident_id=resident.id,
                room_name=new_cot.room.name,
                cot_name=new_cot.name,
                start_date=effective_date,
            ))

        self._logger.info(
            f"Resident {resident.id} moved",
            extra={"from_cot": previous_cot_id, "to_cot": keep_id},
        )

    def _release_cots(self, resident: Resident, keep_cot_id: Optional[str] = None) -> None:
        for cot in self.cots.find_by_resident(resident.id):
            if cot.id != keep_cot_id:
                self.cots.update(cot, {"resident_id": None})

    def _close_history(self, resident_id: str, end_date: date) -> None:
        for entry in self.history.find_open_for_resident(resident_id):
            self.history.update(entry, {"end_date": max(end_date, entry.start_date)})
