from datetime import date

import pytest

from clinic_scheduler.application.exceptions import (
    InvalidTimeError,
    OutOfOperatingHoursError,
    SlotConflictError,
)
from clinic_scheduler.application.use_cases.conflicts import check_conflict
from clinic_scheduler.application.use_cases.reschedule import format_slot_id, parse_slot_id, resolve_drop
from clinic_scheduler.domain.entities.appointment import AppointmentStatus

MONDAY = date(2025, 1, 13)
TUESDAY = date(2025, 1, 14)


def test_drop_onto_occupied_hour_conflicts(appointment_factory):
    """Mon 10:00 (45min) dropped at 11:00 collides with 11:00-11:30."""
    moved = appointment_factory(MONDAY, "10:00", duration=45)
    blocker = appointment_factory(MONDAY, "11:00", duration=30)

    with pytest.raises(SlotConflictError) as exc_info:
        resolve_drop(moved, MONDAY, 11, [moved, blocker])

    conflict = exc_info.value.conflict
    assert conflict is not None
    assert conflict.existing_appointment == blocker
    assert conflict.overlap_minutes == 30


def test_drop_on_own_slot_never_conflicts(appointment_factory):
    moved = appointment_factory(MONDAY, "10:15", duration=60)

    resolution = resolve_drop(moved, MONDAY, 10, [moved])

    assert resolution.date == MONDAY
    assert resolution.time == "10:15"


def test_drop_keeps_minutes_unless_overridden(appointment_factory):
    moved = appointment_factory(MONDAY, "10:45", duration=30)

    assert resolve_drop(moved, TUESDAY, 14, [moved]).time == "14:45"
    assert resolve_drop(moved, TUESDAY, 14, [moved], minute=0).time == "14:00"


def test_drop_next_to_booking_is_allowed(appointment_factory):
    moved = appointment_factory(MONDAY, "09:00", duration=30)
    neighbour = appointment_factory(TUESDAY, "12:30", duration=30)

    resolution = resolve_drop(moved, TUESDAY, 12, [moved, neighbour])

    assert resolution.time == "12:00"


def test_cancelled_and_other_days_do_not_block(appointment_factory):
    moved = appointment_factory(MONDAY, "09:00")
    others = [
        appointment_factory(TUESDAY, "11:00", status=AppointmentStatus.CANCELLED),
        appointment_factory(MONDAY, "11:00"),
    ]

    assert resolve_drop(moved, TUESDAY, 11, [moved, *others]).date == TUESDAY


def test_staff_partitioned_drop(appointment_factory):
    moved = appointment_factory(MONDAY, "09:00", staff_id="staff_a")
    other_staff = appointment_factory(TUESDAY, "11:00", staff_id="staff_b")

    assert resolve_drop(moved, TUESDAY, 11, [moved, other_staff], staff_partitioned=True).time == "11:00"
    with pytest.raises(SlotConflictError):
        resolve_drop(moved, TUESDAY, 11, [moved, other_staff])


def test_drop_outside_operating_hours(appointment_factory):
    moved = appointment_factory(MONDAY, "10:00", duration=60)

    with pytest.raises(OutOfOperatingHoursError):
        resolve_drop(moved, MONDAY, 17, [moved], minute=30, open_time="09:00", close_time="18:00")
    with pytest.raises(OutOfOperatingHoursError):
        resolve_drop(moved, MONDAY, 8, [moved], open_time="09:00", close_time="18:00")
    with pytest.raises(OutOfOperatingHoursError):
        resolve_drop(moved, MONDAY, 23, [moved], minute=30)


def test_out_of_hours_is_a_slot_conflict(appointment_factory):
    moved = appointment_factory(MONDAY, "10:00", duration=60)
    with pytest.raises(SlotConflictError):
        resolve_drop(moved, MONDAY, 20, [moved], open_time="09:00", close_time="18:00")


def test_drop_does_not_mutate_inputs(appointment_factory):
    moved = appointment_factory(MONDAY, "10:00", duration=45)
    blocker = appointment_factory(MONDAY, "11:00")
    snapshot = [moved, blocker]

    with pytest.raises(SlotConflictError):
        resolve_drop(moved, MONDAY, 11, snapshot)

    assert moved.time == "10:00"
    assert snapshot == [moved, blocker]


def test_check_conflict_excludes_id(appointment_factory):
    appt = appointment_factory(MONDAY, "10:00", id="a1")

    assert check_conflict(MONDAY, "10:00", 30, [appt]) is not None
    assert check_conflict(MONDAY, "10:00", 30, [appt], exclude_id="a1") is None


def test_slot_id_round_trip():
    assert parse_slot_id("slot-2025-1-13-9") == (MONDAY, 9)
    assert parse_slot_id(format_slot_id(MONDAY, 14)) == (MONDAY, 14)


@pytest.mark.parametrize("slot_id", ["", "slot-2025-13-01-10", "slot-2025-01-13-24", "cell-2025-01-13-10"])
def test_invalid_slot_ids(slot_id):
    with pytest.raises(InvalidTimeError):
        parse_slot_id(slot_id)
