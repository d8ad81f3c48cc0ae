from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import date

from clinic_scheduler.application.ports.appointment_store import AppointmentStorePort
from clinic_scheduler.application.use_cases.conflicts import blocking_appointments, interval_of
from clinic_scheduler.application.utils.time_utils import minutes_to_time, overlaps, time_to_minutes
from clinic_scheduler.domain.entities.appointment import Appointment
from clinic_scheduler.domain.entities.time_slot import TimeSlot
from clinic_scheduler.domain.entities.working_hours import WorkingHours

DEFAULT_SLOT_INTERVAL = 30


def get_available_slots(
    day: date,
    duration: int,
    appointments: Iterable[Appointment],
    staff_id: str | None = None,
    open_time: str = "08:00",
    close_time: str = "20:00",
    interval: int = DEFAULT_SLOT_INTERVAL,
) -> list[TimeSlot]:
    """Every candidate start in [open, close - duration], stepping by `interval`.

    Unavailable candidates are returned too, flagged `available=False`, so the
    caller can render them disabled.
    """
    if duration <= 0:
        raise ValueError("duration must be positive")
    if interval <= 0:
        raise ValueError("interval must be positive")

    open_minutes = time_to_minutes(open_time)
    close_minutes = time_to_minutes(close_time)
    busy = [interval_of(a) for a in blocking_appointments(appointments, day, staff_id)]

    slots: list[TimeSlot] = []
    start = open_minutes
    while start + duration <= close_minutes:
        end = start + duration
        blocked = any(overlaps(start, end, b_start, b_end) for b_start, b_end in busy)
        slots.append(TimeSlot(time=minutes_to_time(start), available=not blocked))
        start += interval

    return slots


class AvailabilityUseCase:
    def __init__(
        self,
        store: AppointmentStorePort,
        working_hours: WorkingHours,
        interval: int = DEFAULT_SLOT_INTERVAL,
        clinic_id: str | None = None,
    ) -> None:
        self._store = store
        self._working_hours = working_hours
        self._interval = interval
        self._clinic_id = clinic_id
        self._logger = logging.getLogger(__name__)

    def execute(self, day: date, duration: int, staff_id: str | None = None) -> list[TimeSlot]:
        window = self._working_hours.hours_for(day)
        if window is None:
            self._logger.info("Clinic closed", extra={"date": day.isoformat(), "reason": "closed_day"})
            return []

        appointments = self._store.list_appointments(day, day, self._clinic_id)
        slots = get_available_slots(
            day,
            duration,
            appointments,
            staff_id=staff_id,
            open_time=window[0],
            close_time=window[1],
            interval=self._interval,
        )
        self._logger.debug(
            "Computed slots",
            extra={"date": day.isoformat(), "staff_id": staff_id, "count": len(slots)},
        )
        return slots
