from __future__ import annotations

import logging
from datetime import date
from typing import Any

import httpx

from clinic_scheduler.application.exceptions import AppointmentStoreError
from clinic_scheduler.application.ports.appointment_store import AppointmentStorePort
from clinic_scheduler.core.config import settings
from clinic_scheduler.domain.entities.appointment import (
    Appointment,
    AppointmentInput,
    AppointmentStatus,
    AppointmentUpdate,
)
from clinic_scheduler.infrastructure.store.serialization import input_to_row, row_to_appointment, update_to_row


class SupabaseAppointmentStore(AppointmentStorePort):
    """Appointments table through the Supabase PostgREST endpoint."""

    def __init__(
        self,
        base_url: str | None = None,
        api_key: str | None = None,
        clinic_id: str | None = None,
        client: httpx.Client | None = None,
    ) -> None:
        self._base_url = (base_url or settings.SUPABASE_URL or "").rstrip("/")
        self._api_key = api_key or settings.SUPABASE_KEY
        self._clinic_id = clinic_id or settings.CLINIC_ID
        self._client = client or httpx.Client(timeout=settings.SUPABASE_TIMEOUT_SECONDS)
        self._logger = logging.getLogger(__name__)

        if not self._base_url:
            raise ValueError("SUPABASE_URL is required for the Supabase appointment store")
        if not self._api_key:
            raise ValueError("SUPABASE_KEY is required for the Supabase appointment store")

    @property
    def _url(self) -> str:
        return f"{self._base_url}/rest/v1/appointments"

    def _headers(self, returning: bool = False) -> dict[str, str]:
        headers = {
            "apikey": self._api_key,
            "Authorization": f"Bearer {self._api_key}",
            "Content-Type": "application/json",
        }
        if returning:
            headers["Prefer"] = "return=representation"
        return headers

    def _request(self, method: str, params: Any = None, json: Any = None, returning: bool = False) -> list[dict[str, Any]]:
        try:
            response = self._client.request(
                method,
                self._url,
                params=params,
                json=json,
                headers=self._headers(returning),
            )
            response.raise_for_status()
        except httpx.HTTPError as e:
            self._logger.error("Appointment store request failed", extra={"reason": str(e)})
            raise AppointmentStoreError(f"Supabase {method} failed: {e}") from e

        if not response.content:
            return []
        data = response.json()
        return data if isinstance(data, list) else [data]

    def list_appointments(
        self,
        start: date | None = None,
        end: date | None = None,
        clinic_id: str | None = None,
    ) -> list[Appointment]:
        params: list[tuple[str, str]] = [("select", "*"), ("order", "date.asc,time.asc")]
        clinic = clinic_id or self._clinic_id
        if clinic:
            params.append(("clinic_id", f"eq.{clinic}"))
        if start:
            params.append(("date", f"gte.{start.isoformat()}"))
        if end:
            params.append(("date", f"lte.{end.isoformat()}"))

        rows = self._request("GET", params=params)
        return [row_to_appointment(row) for row in rows]

    def get_appointment(self, appointment_id: str) -> Appointment | None:
        params = [("select", "*"), ("id", f"eq.{appointment_id}")]
        if self._clinic_id:
            params.append(("clinic_id", f"eq.{self._clinic_id}"))
        rows = self._request("GET", params=params)
        return row_to_appointment(rows[0]) if rows else None

    def add_appointment(self, appointment: AppointmentInput) -> Appointment:
        return self.add_appointments([appointment])[0]

    def add_appointments(self, appointments: list[AppointmentInput]) -> list[Appointment]:
        if not appointments:
            return []
        payload = []
        for appointment in appointments:
            row = input_to_row(appointment)
            if self._clinic_id:
                row["clinic_id"] = self._clinic_id
            payload.append(row)

        rows = self._request("POST", params=[("select", "*")], json=payload, returning=True)
        if len(rows) != len(payload):
            raise AppointmentStoreError("Supabase insert returned an unexpected number of rows")
        self._logger.info("Appointments inserted", extra={"count": len(rows)})
        return [row_to_appointment(row) for row in rows]

    def update_appointment(self, appointment_id: str, update: AppointmentUpdate) -> Appointment | None:
        params = [("id", f"eq.{appointment_id}"), ("select", "*")]
        if self._clinic_id:
            params.append(("clinic_id", f"eq.{self._clinic_id}"))
        rows = self._request("PATCH", params=params, json=update_to_row(update), returning=True)
        return row_to_appointment(rows[0]) if rows else None

    def update_status(self, appointment_id: str, status: AppointmentStatus) -> bool:
        return self.update_appointment(appointment_id, AppointmentUpdate(status=status)) is not None

    def delete_appointment(self, appointment_id: str) -> bool:
        params = [("id", f"eq.{appointment_id}")]
        if self._clinic_id:
            params.append(("clinic_id", f"eq.{self._clinic_id}"))
        rows = self._request("DELETE", params=params, returning=True)
        return bool(rows)
