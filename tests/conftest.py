from __future__ import annotations

import itertools
from datetime import date

import pytest

from clinic_scheduler.domain.entities.appointment import Appointment, AppointmentStatus

_ids = itertools.count(1)


def make_appointment(
    day: date,
    time: str,
    duration: int = 30,
    status: AppointmentStatus = AppointmentStatus.CONFIRMED,
    staff_id: str | None = None,
    id: str | None = None,
    patient_name: str = "Dana Levi",
) -> Appointment:
    return Appointment(
        id=id or f"appt_{next(_ids)}",
        patient_id="p1",
        patient_name=patient_name,
        service_id="2",
        service_name="Lip filler",
        date=day,
        time=time,
        duration=duration,
        status=status,
        staff_id=staff_id,
    )


@pytest.fixture
def appointment_factory():
    return make_appointment
