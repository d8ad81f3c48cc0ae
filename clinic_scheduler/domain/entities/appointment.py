from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum


class AppointmentStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    NO_SHOW = "no-show"


class DeclarationStatus(str, Enum):
    NOT_REQUIRED = "not_required"
    REQUIRED = "required"
    PENDING = "pending"
    RECEIVED = "received"


@dataclass(frozen=True)
class Appointment:
    id: str
    patient_id: str
    patient_name: str
    service_id: str
    service_name: str
    date: date
    time: str  # HH:MM, 24h
    duration: int  # minutes
    status: AppointmentStatus = AppointmentStatus.PENDING
    notes: str | None = None
    staff_id: str | None = None  # None means clinic-wide
    declaration_status: DeclarationStatus | None = None

    @property
    def occupies_slot(self) -> bool:
        return self.status != AppointmentStatus.CANCELLED


@dataclass(frozen=True)
class AppointmentInput:
    """Fields needed to create an appointment. The store assigns the id."""

    patient_id: str
    patient_name: str
    service_id: str
    service_name: str
    date: date
    time: str
    duration: int
    status: AppointmentStatus = AppointmentStatus.PENDING
    notes: str | None = None
    staff_id: str | None = None


@dataclass(frozen=True)
class AppointmentUpdate:
    """Partial update. Fields left as None are not changed."""

    patient_id: str | None = None
    patient_name: str | None = None
    service_id: str | None = None
    service_name: str | None = None
    date: date | None = None
    time: str | None = None
    duration: int | None = None
    status: AppointmentStatus | None = None
    notes: str | None = None
    staff_id: str | None = None

    def changes(self) -> dict[str, object]:
        return {key: value for key, value in self.__dict__.items() if value is not None}
