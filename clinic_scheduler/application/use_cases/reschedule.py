from __future__ import annotations

import re
from collections.abc import Iterable
from datetime import date

from clinic_scheduler.application.exceptions import (
    InvalidTimeError,
    OutOfOperatingHoursError,
    SlotConflictError,
)
from clinic_scheduler.application.use_cases.conflicts import check_conflict
from clinic_scheduler.application.utils.time_utils import minutes_to_time, time_to_minutes
from clinic_scheduler.domain.entities.appointment import Appointment
from clinic_scheduler.domain.entities.time_slot import DropResolution

_SLOT_ID = re.compile(r"^slot-(\d{4})-(\d{1,2})-(\d{1,2})-(\d{1,2})$")


def parse_slot_id(slot_id: str) -> tuple[date, int]:
    """Decode a calendar drop target id of the form slot-YYYY-MM-DD-HH."""
    match = _SLOT_ID.match(slot_id or "")
    if not match:
        raise InvalidTimeError(f"Invalid slot id: {slot_id!r}")
    year, month, day, hour = (int(g) for g in match.groups())
    try:
        target = date(year, month, day)
    except ValueError as e:
        raise InvalidTimeError(f"Invalid slot id: {slot_id!r}") from e
    if not 0 <= hour <= 23:
        raise InvalidTimeError(f"Invalid slot id: {slot_id!r}")
    return target, hour


def format_slot_id(day: date, hour: int) -> str:
    return f"slot-{day.isoformat()}-{hour:02d}"


def ensure_within_hours(time: str, duration: int, open_time: str, close_time: str) -> None:
    start = time_to_minutes(time)
    if start < time_to_minutes(open_time):
        raise OutOfOperatingHoursError(f"{time} is before opening at {open_time}")
    if start + duration > time_to_minutes(close_time):
        raise OutOfOperatingHoursError(f"{time} + {duration}min runs past closing at {close_time}")


def resolve_drop(
    appointment: Appointment,
    destination_date: date,
    destination_hour: int,
    appointments: Iterable[Appointment],
    minute: int | None = None,
    open_time: str | None = None,
    close_time: str | None = None,
    staff_partitioned: bool = False,
) -> DropResolution:
    """New (date, time) for an appointment dropped on a calendar cell.

    The original minute offset is kept unless `minute` is given. Duration,
    service and status never change. Raises SlotConflictError when the
    destination overlaps another booking; nothing is mutated either way.
    """
    if not 0 <= destination_hour <= 23:
        raise InvalidTimeError(f"Invalid hour: {destination_hour}")
    if minute is None:
        minute = time_to_minutes(appointment.time) % 60
    elif not 0 <= minute <= 59:
        raise InvalidTimeError(f"Invalid minute: {minute}")

    new_time = minutes_to_time(destination_hour * 60 + minute)
    if time_to_minutes(new_time) + appointment.duration > 24 * 60:
        raise OutOfOperatingHoursError(f"{new_time} + {appointment.duration}min crosses midnight")

    if open_time is not None and close_time is not None:
        ensure_within_hours(new_time, appointment.duration, open_time, close_time)

    conflict = check_conflict(
        destination_date,
        new_time,
        appointment.duration,
        appointments,
        exclude_id=appointment.id,
        staff_id=appointment.staff_id if staff_partitioned else None,
    )
    if conflict is not None:
        existing = conflict.existing_appointment
        raise SlotConflictError(
            f"{destination_date.isoformat()} {new_time} overlaps {existing.patient_name} at {existing.time}",
            conflict=conflict,
        )

    return DropResolution(date=destination_date, time=new_time)
