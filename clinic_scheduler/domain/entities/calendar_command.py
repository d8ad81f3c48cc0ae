from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Union

from clinic_scheduler.domain.entities.appointment import AppointmentUpdate


@dataclass(frozen=True)
class Move:
    appointment_id: str
    destination_date: date
    destination_hour: int
    minute: int | None = None


@dataclass(frozen=True)
class Cancel:
    appointment_id: str


@dataclass(frozen=True)
class Edit:
    appointment_id: str
    update: AppointmentUpdate


@dataclass(frozen=True)
class ViewDetails:
    appointment_id: str


CalendarCommand = Union[Move, Cancel, Edit, ViewDetails]
