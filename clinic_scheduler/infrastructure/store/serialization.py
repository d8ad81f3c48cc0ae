from __future__ import annotations

from datetime import date
from typing import Any

from clinic_scheduler.domain.entities.appointment import (
    Appointment,
    AppointmentInput,
    AppointmentStatus,
    AppointmentUpdate,
    DeclarationStatus,
)


def input_to_row(appointment: AppointmentInput) -> dict[str, Any]:
    return {
        "patient_id": appointment.patient_id,
        "patient_name": appointment.patient_name,
        "service_id": appointment.service_id,
        "service_name": appointment.service_name,
        "date": appointment.date.isoformat(),
        "time": appointment.time,
        "duration": appointment.duration,
        "status": AppointmentStatus(appointment.status).value,
        "notes": appointment.notes,
        "staff_id": appointment.staff_id,
    }


def update_to_row(update: AppointmentUpdate) -> dict[str, Any]:
    row: dict[str, Any] = {}
    for key, value in update.changes().items():
        if isinstance(value, date):
            row[key] = value.isoformat()
        elif isinstance(value, AppointmentStatus):
            row[key] = value.value
        else:
            row[key] = value
    return row


def row_to_appointment(row: dict[str, Any]) -> Appointment:
    """Deserialize a row dict. Postgres TIME values arrive as HH:MM:SS and are trimmed."""
    declaration = row.get("declaration_status")
    return Appointment(
        id=str(row["id"]),
        patient_id=str(row.get("patient_id") or ""),
        patient_name=row.get("patient_name") or "",
        service_id=str(row.get("service_id") or ""),
        service_name=row.get("service_name") or "",
        date=date.fromisoformat(str(row["date"])[:10]),
        time=str(row["time"])[:5],
        duration=int(row.get("duration") or 30),
        status=AppointmentStatus(row.get("status") or AppointmentStatus.PENDING.value),
        notes=row.get("notes"),
        staff_id=row.get("staff_id"),
        declaration_status=DeclarationStatus(declaration) if declaration else None,
    )
