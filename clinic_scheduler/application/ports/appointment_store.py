from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date

from clinic_scheduler.domain.entities.appointment import (
    Appointment,
    AppointmentInput,
    AppointmentStatus,
    AppointmentUpdate,
)


class AppointmentStorePort(ABC):
    @abstractmethod
    def list_appointments(
        self,
        start: date | None = None,
        end: date | None = None,
        clinic_id: str | None = None,
    ) -> list[Appointment]:
        """List appointments in [start, end], ordered by date then time."""
        raise NotImplementedError

    @abstractmethod
    def get_appointment(self, appointment_id: str) -> Appointment | None:
        raise NotImplementedError

    @abstractmethod
    def add_appointment(self, appointment: AppointmentInput) -> Appointment:
        """Create appointment. Returns the stored record with its id."""
        raise NotImplementedError

    @abstractmethod
    def add_appointments(self, appointments: list[AppointmentInput]) -> list[Appointment]:
        """Create several appointments in one batch."""
        raise NotImplementedError

    @abstractmethod
    def update_appointment(self, appointment_id: str, update: AppointmentUpdate) -> Appointment | None:
        """Apply a partial update. Returns None if the appointment does not exist."""
        raise NotImplementedError

    @abstractmethod
    def update_status(self, appointment_id: str, status: AppointmentStatus) -> bool:
        raise NotImplementedError

    @abstractmethod
    def delete_appointment(self, appointment_id: str) -> bool:
        raise NotImplementedError
