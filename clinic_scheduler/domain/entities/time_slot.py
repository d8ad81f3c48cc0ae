from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from clinic_scheduler.domain.entities.appointment import Appointment


@dataclass(frozen=True)
class TimeSlot:
    time: str  # HH:MM
    available: bool


@dataclass(frozen=True)
class SlotConflict:
    existing_appointment: Appointment
    overlap_minutes: int


@dataclass(frozen=True)
class DropResolution:
    date: date
    time: str
