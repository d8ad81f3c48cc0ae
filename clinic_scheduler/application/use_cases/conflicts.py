from __future__ import annotations

from collections.abc import Iterable
from datetime import date

from clinic_scheduler.application.utils.time_utils import overlap_minutes, overlaps, time_to_minutes
from clinic_scheduler.domain.entities.appointment import Appointment
from clinic_scheduler.domain.entities.time_slot import SlotConflict


def interval_of(appointment: Appointment) -> tuple[int, int]:
    start = time_to_minutes(appointment.time)
    return (start, start + appointment.duration)


def blocking_appointments(
    appointments: Iterable[Appointment],
    day: date,
    staff_id: str | None = None,
    exclude_id: str | None = None,
) -> list[Appointment]:
    """Non-cancelled appointments on `day` that can block a new booking.

    With a staff filter, appointments of other staff members are ignored;
    unassigned appointments still block.
    """
    result: list[Appointment] = []
    for appointment in appointments:
        if not appointment.occupies_slot:
            continue
        if exclude_id is not None and appointment.id == exclude_id:
            continue
        if appointment.date != day:
            continue
        if staff_id is not None and appointment.staff_id not in (None, staff_id):
            continue
        result.append(appointment)
    return result


def check_conflict(
    day: date,
    time: str,
    duration: int,
    appointments: Iterable[Appointment],
    exclude_id: str | None = None,
    staff_id: str | None = None,
) -> SlotConflict | None:
    """First appointment overlapping [time, time + duration) on `day`, or None."""
    start = time_to_minutes(time)
    end = start + duration

    for appointment in blocking_appointments(appointments, day, staff_id, exclude_id):
        appt_start, appt_end = interval_of(appointment)
        if overlaps(start, end, appt_start, appt_end):
            return SlotConflict(
                existing_appointment=appointment,
                overlap_minutes=overlap_minutes(start, end, appt_start, appt_end),
            )
    return None
