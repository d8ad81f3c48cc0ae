from __future__ import annotations

import json
from datetime import date

import httpx
import pytest

from clinic_scheduler.application.exceptions import AppointmentStoreError
from clinic_scheduler.domain.entities.appointment import AppointmentInput, AppointmentStatus, AppointmentUpdate
from clinic_scheduler.infrastructure.store.supabase_store import SupabaseAppointmentStore

ROW = {
    "id": "a1",
    "patient_id": "p1",
    "patient_name": "Dana Levi",
    "service_id": "2",
    "service_name": "Lip filler",
    "date": "2025-01-13",
    "time": "10:00:00",
    "duration": 30,
    "status": "confirmed",
    "notes": None,
    "staff_id": None,
    "declaration_status": None,
    "clinic_id": "tlv",
}


def _store(handler) -> tuple[SupabaseAppointmentStore, list[httpx.Request]]:
    seen: list[httpx.Request] = []

    def record(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return handler(request)

    client = httpx.Client(transport=httpx.MockTransport(record))
    store = SupabaseAppointmentStore(
        base_url="https://example.supabase.co/",
        api_key="secret",
        clinic_id="tlv",
        client=client,
    )
    return store, seen


def test_list_builds_postgrest_filters():
    store, seen = _store(lambda request: httpx.Response(200, json=[ROW]))

    appointments = store.list_appointments(date(2025, 1, 12), date(2025, 1, 18))

    request = seen[0]
    assert request.method == "GET"
    assert request.url.path == "/rest/v1/appointments"
    assert request.headers["apikey"] == "secret"
    assert request.headers["Authorization"] == "Bearer secret"
    assert request.url.params.get("clinic_id") == "eq.tlv"
    assert request.url.params.get_list("date") == ["gte.2025-01-12", "lte.2025-01-18"]
    assert appointments[0].time == "10:00"
    assert appointments[0].status == AppointmentStatus.CONFIRMED


def test_batch_insert_sends_one_request():
    def handler(request: httpx.Request) -> httpx.Response:
        payload = json.loads(request.content)
        rows = [{**row, "id": f"new{i}"} for i, row in enumerate(payload)]
        return httpx.Response(201, json=rows)

    store, seen = _store(handler)
    booking = AppointmentInput(
        patient_id="p1",
        patient_name="Dana Levi",
        service_id="2",
        service_name="Lip filler",
        date=date(2025, 1, 13),
        time="10:00",
        duration=30,
    )

    created = store.add_appointments([booking, booking])

    assert len(seen) == 1
    assert seen[0].headers["Prefer"] == "return=representation"
    assert all(row["clinic_id"] == "tlv" for row in json.loads(seen[0].content))
    assert [a.id for a in created] == ["new0", "new1"]


def test_update_returns_none_when_no_row_matches():
    store, seen = _store(lambda request: httpx.Response(200, json=[]))

    assert store.update_appointment("missing", AppointmentUpdate(time="11:00")) is None
    assert seen[0].method == "PATCH"
    assert json.loads(seen[0].content) == {"time": "11:00"}


def test_update_status():
    store, seen = _store(lambda request: httpx.Response(200, json=[{**ROW, "status": "cancelled"}]))

    assert store.update_status("a1", AppointmentStatus.CANCELLED) is True
    assert json.loads(seen[0].content) == {"status": "cancelled"}


def test_http_errors_become_store_errors():
    store, _ = _store(lambda request: httpx.Response(500, json={"message": "boom"}))

    with pytest.raises(AppointmentStoreError):
        store.list_appointments()


def test_missing_credentials():
    with pytest.raises(ValueError):
        SupabaseAppointmentStore(base_url="https://example.supabase.co", api_key="", client=httpx.Client())
