from datetime import date

import pytest

from hostel_manager.core.exceptions import ErrorCode
from hostel_manager.models import Cot, Resident, Room, RoomHistory
from hostel_manager.models.base import ResidentStatus
from hostel_manager.schemas.resident import MealPlan
from hostel_manager.services.occupancy import is_transition_allowed


def cot_holders(db_session):
    return {cot.name: cot.resident_id for cot in db_session.query(Cot).all()}


def history_for(db_session, resident_id):
    return (
        db_session.query(RoomHistory)
        .filter(RoomHistory.resident_id == resident_id)
        .order_by(RoomHistory.start_date)
        .all()
    )


def test_new_resident_takes_cot_and_opens_history(db_session, occupancy, room_with_cots, resident_data):
    _, (cot_a, _) = room_with_cots

    resident = occupancy.assign_or_update_resident(
        resident_data(cot_id=cot_a.id), effective_date=date(2024, 3, 1)
    ).unwrap()

    assert resident.status == ResidentStatus.ACTIVE
    assert resident.cot_id == cot_a.id
    assert cot_holders(db_session) == {"A": resident.id, "B": None}

    (entry,) = history_for(db_session, resident.id)
    assert (entry.room_name, entry.cot_name) == ("Room 101", "A")
    assert entry.start_date == date(2024, 3, 1)
    assert entry.end_date is None


def test_reassignment_moves_both_links(db_session, occupancy, room_with_cots, resident_data):
    _, (cot_a, cot_b) = room_with_cots
    resident = occupancy.assign_or_update_resident(
        resident_data(cot_id=cot_a.id), effective_date=date(2024, 3, 1)
    ).unwrap()

    occupancy.assign_or_update_resident(
        resident_data(cot_id=cot_b.id), resident_id=resident.id, effective_date=date(2024, 4, 15)
    ).unwrap()

    assert cot_holders(db_session) == {"A": None, "B": resident.id}
    first, second = history_for(db_session, resident.id)
    assert first.cot_name == "A" and first.end_date == date(2024, 4, 15)
    assert second.cot_name == "B" and second.end_date is None


def test_occupied_cot_is_refused_without_side_effects(db_session, occupancy, room_with_cots, resident_data):
    _, (cot_a, _) = room_with_cots
    holder = occupancy.assign_or_update_resident(resident_data(cot_id=cot_a.id)).unwrap()

    result = occupancy.assign_or_update_resident(resident_data(cot_id=cot_a.id))

    assert not result.is_success
    assert result.error_code == ErrorCode.CONFLICT
    assert "already occupied" in result.error.message
    assert db_session.query(Resident).count() == 1
    assert cot_holders(db_session)["A"] == holder.id


def test_unknown_cot_is_not_found(occupancy, resident_data):
    result = occupancy.assign_or_update_resident(resident_data(cot_id="missing-cot"))

    assert result.error_code == ErrorCode.NOT_FOUND


def test_update_without_cot_change_keeps_history(db_session, occupancy, room_with_cots, resident_data):
    _, (cot_a, _) = room_with_cots
    resident = occupancy.assign_or_update_resident(resident_data(cot_id=cot_a.id)).unwrap()

    updated = occupancy.assign_or_update_resident(
        resident_data(name="Renamed", cot_id=cot_a.id), resident_id=resident.id
    ).unwrap()

    assert updated.name == "Renamed"
    assert len(history_for(db_session, resident.id)) == 1
    assert cot_holders(db_session)["A"] == resident.id


def test_clearing_cot_releases_it(db_session, occupancy, room_with_cots, resident_data):
    _, (cot_a, _) = room_with_cots
    resident = occupancy.assign_or_update_resident(
        resident_data(cot_id=cot_a.id), effective_date=date(2024, 3, 1)
    ).unwrap()

    occupancy.assign_or_update_resident(
        resident_data(cot_id=None), resident_id=resident.id, effective_date=date(2024, 3, 20)
    ).unwrap()

    assert cot_holders(db_session)["A"] is None
    (entry,) = history_for(db_session, resident.id)
    assert entry.end_date == date(2024, 3, 20)


def test_vacate_releases_cot_and_closes_history(db_session, occupancy, room_with_cots, resident_data):
    _, (cot_a, _) = room_with_cots
    resident = occupancy.assign_or_update_resident(
        resident_data(cot_id=cot_a.id), effective_date=date(2024, 3, 1)
    ).unwrap()

    vacated = occupancy.change_resident_status(
        resident.id, ResidentStatus.VACATED, effective_date=date(2024, 6, 30)
    ).unwrap()

    assert vacated.status == ResidentStatus.VACATED
    assert vacated.cot_id is None
    assert cot_holders(db_session)["A"] is None
    (entry,) = history_for(db_session, resident.id)
    assert entry.end_date == date(2024, 6, 30)


def test_vacating_twice_is_a_no_op(db_session, occupancy, room_with_cots, resident_data):
    _, (cot_a, _) = room_with_cots
    resident = occupancy.assign_or_update_resident(resident_data(cot_id=cot_a.id)).unwrap()
    occupancy.change_resident_status(resident.id, ResidentStatus.VACATED).unwrap()

    again = occupancy.change_resident_status(resident.id, ResidentStatus.VACATED)

    assert again.is_success
    assert again.message == "Status unchanged"
    assert again.data.status == ResidentStatus.VACATED


def test_history_end_never_precedes_start(db_session, occupancy, room_with_cots, resident_data):
    _, (cot_a, _) = room_with_cots
    resident = occupancy.assign_or_update_resident(
        resident_data(cot_id=cot_a.id), effective_date=date(2024, 3, 10)
    ).unwrap()

    occupancy.change_resident_status(resident.id, ResidentStatus.VACATED, effective_date=date(2024, 3, 1)).unwrap()

    (entry,) = history_for(db_session, resident.id)
    assert entry.end_date == date(2024, 3, 10)


@pytest.mark.parametrize(
    "current, target, allowed",
    [
        (ResidentStatus.ACTIVE, ResidentStatus.VACATED, True),
        (ResidentStatus.VACATED, ResidentStatus.ACTIVE, True),
        (ResidentStatus.ACTIVE, ResidentStatus.DELETED, True),
        (ResidentStatus.DELETED, ResidentStatus.ACTIVE, True),
        (ResidentStatus.VACATED, ResidentStatus.DELETED, False),
        (ResidentStatus.DELETED, ResidentStatus.VACATED, False),
        (ResidentStatus.DELETED, ResidentStatus.DELETED, True),
    ],
)
def test_transition_table(current, target, allowed):
    assert is_transition_allowed(current, target) is allowed


def test_disallowed_transition_is_rejected(occupancy, make_resident):
    resident = make_resident()
    occupancy.change_resident_status(resident.id, ResidentStatus.VACATED).unwrap()

    result = occupancy.change_resident_status(resident.id, ResidentStatus.DELETED)

    assert result.error_code == ErrorCode.INVALID_STATE


def test_cot_cannot_be_assigned_to_inactive_resident(db_session, occupancy, room_with_cots, resident_data):
    _, (cot_a, _) = room_with_cots
    resident = occupancy.assign_or_update_resident(resident_data()).unwrap()
    occupancy.change_resident_status(resident.id, ResidentStatus.VACATED).unwrap()

    result = occupancy.assign_or_update_resident(resident_data(cot_id=cot_a.id), resident_id=resident.id)

    assert result.error_code == ErrorCode.INVALID_STATE
    assert cot_holders(db_session)["A"] is None


def test_restore_only_from_deleted(occupancy, make_resident):
    resident = make_resident()

    assert occupancy.restore_resident(resident.id).error_code == ErrorCode.INVALID_STATE

    occupancy.change_resident_status(resident.id, ResidentStatus.DELETED).unwrap()
    restored = occupancy.restore_resident(resident.id).unwrap()

    assert restored.status == ResidentStatus.ACTIVE
    assert restored.cot_id is None


def test_soft_delete_releases_cot_and_closes_history(db_session, occupancy, room_with_cots, resident_data):
    _, (cot_a, _) = room_with_cots
    resident = occupancy.assign_or_update_resident(
        resident_data(cot_id=cot_a.id), effective_date=date(2024, 3, 1)
    ).unwrap()

    deleted = occupancy.change_resident_status(
        resident.id, ResidentStatus.DELETED, effective_date=date(2024, 5, 31)
    ).unwrap()

    assert deleted.status == ResidentStatus.DELETED
    assert deleted.cot_id is None
    assert cot_holders(db_session) == {"A": None, "B": None}
    (entry,) = history_for(db_session, resident.id)
    assert entry.end_date == date(2024, 5, 31)


def assert_links_consistent(db_session):
    residents = db_session.query(Resident).all()
    cots = db_session.query(Cot).all()
    holders = [cot.resident_id for cot in cots if cot.resident_id is not None]

    assert len(holders) == len(set(holders))
    by_id = {r.id: r for r in residents}
    for cot in cots:
        if cot.resident_id is not None:
            holder = by_id[cot.resident_id]
            assert holder.cot_id == cot.id
            assert holder.status == ResidentStatus.ACTIVE
    for resident in residents:
        if resident.cot_id is not None:
            assert resident.status == ResidentStatus.ACTIVE
            assert db_session.get(Cot, resident.cot_id).resident_id == resident.id
        else:
            assert resident.id not in holders


def test_cot_links_stay_consistent_across_a_sequence(db_session, occupancy, room_with_cots, resident_data):
    room, (cot_a, cot_b) = room_with_cots
    cot_c = occupancy.add_cot("C", room.id).unwrap()

    asha = occupancy.assign_or_update_resident(resident_data(name="Asha", cot_id=cot_a.id)).unwrap()
    bina = occupancy.assign_or_update_resident(resident_data(name="Bina", cot_id=cot_b.id)).unwrap()
    assert_links_consistent(db_session)

    # refused move into an occupied cot leaves everything in place
    refused = occupancy.assign_or_update_resident(resident_data(cot_id=cot_a.id), resident_id=bina.id)
    assert refused.error_code == ErrorCode.CONFLICT
    assert_links_consistent(db_session)

    occupancy.assign_or_update_resident(resident_data(name="Asha", cot_id=cot_c.id), resident_id=asha.id).unwrap()
    assert_links_consistent(db_session)

    occupancy.assign_or_update_resident(resident_data(name="Bina", cot_id=cot_a.id), resident_id=bina.id).unwrap()
    assert_links_consistent(db_session)

    occupancy.change_resident_status(asha.id, ResidentStatus.VACATED).unwrap()
    occupancy.change_resident_status(bina.id, ResidentStatus.DELETED).unwrap()
    assert_links_consistent(db_session)

    occupancy.restore_resident(bina.id).unwrap()
    occupancy.assign_or_update_resident(resident_data(name="Bina", cot_id=cot_c.id), resident_id=bina.id).unwrap()
    assert_links_consistent(db_session)

    assert cot_holders(db_session) == {"A": None, "B": None, "C": bina.id}


def test_delete_room_refused_while_occupied(db_session, occupancy, room_with_cots, resident_data):
    room, (cot_a, _) = room_with_cots
    resident = occupancy.assign_or_update_resident(resident_data(cot_id=cot_a.id)).unwrap()

    result = occupancy.delete_room(room.id)

    assert result.error_code == ErrorCode.CONFLICT
    assert result.error.details["occupied_cot_ids"] == [cot_a.id]
    assert db_session.query(Room).count() == 1
    assert db_session.query(Cot).count() == 2
    assert cot_holders(db_session) == {"A": resident.id, "B": None}
    db_session.refresh(resident)
    assert resident.cot_id == cot_a.id

    occupancy.change_resident_status(resident.id, ResidentStatus.VACATED).unwrap()
    assert occupancy.delete_room(room.id).unwrap() is True
    assert db_session.query(Room).count() == 0
    assert db_session.query(Cot).count() == 0


def test_delete_cot_refused_while_occupied(occupancy, room_with_cots, resident_data):
    _, (cot_a, cot_b) = room_with_cots
    occupancy.assign_or_update_resident(resident_data(cot_id=cot_a.id)).unwrap()

    assert occupancy.delete_cot(cot_a.id).error_code == ErrorCode.CONFLICT
    assert occupancy.delete_cot(cot_b.id).unwrap() is True


def test_add_cot_requires_room(occupancy):
    assert occupancy.add_cot("A", "missing-room").error_code == ErrorCode.NOT_FOUND


def test_available_cots_include_own_cot(occupancy, room_with_cots, resident_data):
    _, (cot_a, cot_b) = room_with_cots
    resident = occupancy.assign_or_update_resident(resident_data(cot_id=cot_a.id)).unwrap()

    free = {c.id for c in occupancy.list_available_cots().unwrap()}
    own = {c.id for c in occupancy.list_available_cots(resident.id).unwrap()}

    assert free == {cot_b.id}
    assert own == {cot_a.id, cot_b.id}


def test_update_meal_plan(occupancy, make_resident):
    resident = make_resident()

    updated = occupancy.update_meal_plan(resident.id, MealPlan(breakfast=False, lunch=True, dinner=True)).unwrap()

    assert (updated.meal_breakfast, updated.meal_lunch, updated.meal_dinner) == (False, True, True)


def test_list_residents_by_status(occupancy, make_resident):
    active = make_resident()
    gone = make_resident()
    occupancy.change_resident_status(gone.id, ResidentStatus.DELETED).unwrap()

    listed = occupancy.list_residents(ResidentStatus.ACTIVE).unwrap()

    assert [r.id for r in listed] == [active.id]
