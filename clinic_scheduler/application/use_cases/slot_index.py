from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from datetime import date
from functools import lru_cache
from types import MappingProxyType

from clinic_scheduler.application.utils.time_utils import hour_of, time_to_minutes
from clinic_scheduler.domain.entities.appointment import Appointment

SlotKey = tuple[int, int, int, int]  # (year, month, day, hour)
DayKey = tuple[int, int, int]  # (year, month, day)


def slot_key(day: date, hour: int) -> SlotKey:
    return (day.year, day.month, day.day, hour)


def day_key(day: date) -> DayKey:
    return (day.year, day.month, day.day)


@dataclass(frozen=True)
class SlotIndex:
    """Appointments grouped by calendar cell, for per-cell lookups while rendering a grid.

    Cancelled appointments stay in the cell buckets (history popovers) but are
    left out of the per-day counts used for badges.
    """

    hours: tuple[int, ...]
    by_slot: Mapping[SlotKey, tuple[Appointment, ...]] = field(default_factory=lambda: MappingProxyType({}))
    count_by_day: Mapping[DayKey, int] = field(default_factory=lambda: MappingProxyType({}))

    def appointments_for(self, day: date, hour: int) -> tuple[Appointment, ...]:
        return self.by_slot.get(slot_key(day, hour), ())

    def count_for(self, day: date) -> int:
        return self.count_by_day.get(day_key(day), 0)

    @staticmethod
    def offset_fraction(appointment: Appointment) -> float:
        """Vertical position inside the hour cell, 0.0 at the top."""
        return (time_to_minutes(appointment.time) % 60) / 60


def build_slot_index(
    appointments: Iterable[Appointment],
    start_hour: int = 8,
    end_hour: int = 20,
) -> SlotIndex:
    """Index appointments by (year, month, day, hour).

    Every appointment lands under the key of its own date and start hour,
    including hours outside the visible grid rows. Results are memoized on the
    appointment values, so rebuilding for an unchanged list is a cache hit.
    The returned mappings are read-only views shared between cache hits.
    """
    return _build_slot_index(tuple(appointments), start_hour, end_hour)


@lru_cache(maxsize=32)
def _build_slot_index(
    appointments: tuple[Appointment, ...],
    start_hour: int,
    end_hour: int,
) -> SlotIndex:
    buckets: dict[SlotKey, list[tuple[int, Appointment]]] = {}
    counts: dict[DayKey, int] = {}

    for appointment in appointments:
        start = time_to_minutes(appointment.time)
        key = slot_key(appointment.date, hour_of(appointment.time))
        buckets.setdefault(key, []).append((start, appointment))

        if appointment.occupies_slot:
            dkey = day_key(appointment.date)
            counts[dkey] = counts.get(dkey, 0) + 1

    # sort is stable, so equal times keep input order
    by_slot = {
        key: tuple(appt for _, appt in sorted(entries, key=lambda entry: entry[0]))
        for key, entries in buckets.items()
    }

    return SlotIndex(
        hours=tuple(range(start_hour, end_hour + 1)),
        by_slot=MappingProxyType(by_slot),
        count_by_day=MappingProxyType(counts),
    )
