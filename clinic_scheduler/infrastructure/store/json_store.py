from __future__ import annotations

import json
import logging
import threading
import uuid
from datetime import date
from pathlib import Path
from typing import Any

from clinic_scheduler.application.ports.appointment_store import AppointmentStorePort
from clinic_scheduler.domain.entities.appointment import (
    Appointment,
    AppointmentInput,
    AppointmentStatus,
    AppointmentUpdate,
)
from clinic_scheduler.infrastructure.store.serialization import (
    input_to_row,
    row_to_appointment,
    update_to_row,
)


class JsonAppointmentStore(AppointmentStorePort):
    def __init__(self, data_dir: str = "./data/appointments", clinic_id: str | None = None) -> None:
        self._data_dir = Path(data_dir)
        self._data_dir.mkdir(parents=True, exist_ok=True)
        self._clinic_id = clinic_id or "default"
        self._lock = threading.Lock()
        self._logger = logging.getLogger(__name__)

    def _get_file_path(self, clinic_id: str | None = None) -> Path:
        """One file per clinic."""
        return self._data_dir / f"{clinic_id or self._clinic_id}.json"

    def _load_data(self, clinic_id: str | None = None) -> dict[str, Any]:
        """Load clinic data from JSON file, return default if missing."""
        file_path = self._get_file_path(clinic_id)
        if not file_path.exists():
            return {"appointments": [], "version": 1}

        try:
            with open(file_path, "r", encoding="utf-8") as f:
                data = json.load(f)
                if "version" not in data:
                    data["version"] = 1
                data.setdefault("appointments", [])
                return data
        except (json.JSONDecodeError, IOError) as e:
            self._logger.error("Corrupted appointment file, starting empty", extra={"reason": str(e)})
            return {"appointments": [], "version": 1}

    def _save_data(self, data: dict[str, Any], clinic_id: str | None = None) -> None:
        """Save clinic data to JSON file atomically."""
        file_path = self._get_file_path(clinic_id)
        temp_path = file_path.with_suffix(".json.tmp")

        try:
            with open(temp_path, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
            temp_path.replace(file_path)
        except Exception:
            if temp_path.exists():
                temp_path.unlink(missing_ok=True)
            raise

    def list_appointments(
        self,
        start: date | None = None,
        end: date | None = None,
        clinic_id: str | None = None,
    ) -> list[Appointment]:
        with self._lock:
            rows = self._load_data(clinic_id)["appointments"]
        appointments = [row_to_appointment(row) for row in rows]
        result = [
            a
            for a in appointments
            if (start is None or a.date >= start) and (end is None or a.date <= end)
        ]
        return sorted(result, key=lambda a: (a.date, a.time))

    def get_appointment(self, appointment_id: str) -> Appointment | None:
        with self._lock:
            rows = self._load_data()["appointments"]
        for row in rows:
            if row.get("id") == appointment_id:
                return row_to_appointment(row)
        return None

    def add_appointment(self, appointment: AppointmentInput) -> Appointment:
        return self.add_appointments([appointment])[0]

    def add_appointments(self, appointments: list[AppointmentInput]) -> list[Appointment]:
        created: list[Appointment] = []
        with self._lock:
            data = self._load_data()
            for appointment in appointments:
                row = input_to_row(appointment)
                row["id"] = uuid.uuid4().hex
                row["declaration_status"] = None
                data["appointments"].append(row)
                created.append(row_to_appointment(row))
            self._save_data(data)
        return created

    def update_appointment(self, appointment_id: str, update: AppointmentUpdate) -> Appointment | None:
        with self._lock:
            data = self._load_data()
            for index, row in enumerate(data["appointments"]):
                if row.get("id") != appointment_id:
                    continue
                row = {**row, **update_to_row(update)}
                data["appointments"][index] = row
                self._save_data(data)
                return row_to_appointment(row)
        return None

    def update_status(self, appointment_id: str, status: AppointmentStatus) -> bool:
        return self.update_appointment(appointment_id, AppointmentUpdate(status=status)) is not None

    def delete_appointment(self, appointment_id: str) -> bool:
        with self._lock:
            data = self._load_data()
            remaining = [row for row in data["appointments"] if row.get("id") != appointment_id]
            if len(remaining) == len(data["appointments"]):
                return False
            data["appointments"] = remaining
            self._save_data(data)
        return True
