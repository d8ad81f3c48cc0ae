from __future__ import annotations

import uuid
from dataclasses import replace
from datetime import date

from clinic_scheduler.application.ports.appointment_store import AppointmentStorePort
from clinic_scheduler.domain.entities.appointment import (
    Appointment,
    AppointmentInput,
    AppointmentStatus,
    AppointmentUpdate,
)


class MemoryAppointmentStore(AppointmentStorePort):
    def __init__(self, appointments: list[Appointment] | None = None) -> None:
        self._appointments: dict[str, Appointment] = {a.id: a for a in appointments or []}

    def list_appointments(
        self,
        start: date | None = None,
        end: date | None = None,
        clinic_id: str | None = None,
    ) -> list[Appointment]:
        result = [
            a
            for a in self._appointments.values()
            if (start is None or a.date >= start) and (end is None or a.date <= end)
        ]
        return sorted(result, key=lambda a: (a.date, a.time))

    def get_appointment(self, appointment_id: str) -> Appointment | None:
        return self._appointments.get(appointment_id)

    def add_appointment(self, appointment: AppointmentInput) -> Appointment:
        created = Appointment(id=uuid.uuid4().hex, **appointment.__dict__)
        self._appointments[created.id] = created
        return created

    def add_appointments(self, appointments: list[AppointmentInput]) -> list[Appointment]:
        return [self.add_appointment(a) for a in appointments]

    def update_appointment(self, appointment_id: str, update: AppointmentUpdate) -> Appointment | None:
        current = self._appointments.get(appointment_id)
        if current is None:
            return None
        updated = replace(current, **update.changes())
        self._appointments[appointment_id] = updated
        return updated

    def update_status(self, appointment_id: str, status: AppointmentStatus) -> bool:
        return self.update_appointment(appointment_id, AppointmentUpdate(status=status)) is not None

    def delete_appointment(self, appointment_id: str) -> bool:
        return self._appointments.pop(appointment_id, None) is not None
