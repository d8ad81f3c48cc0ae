from __future__ import annotations

from clinic_scheduler.application.ports.service_catalog import ServiceCatalogPort
from clinic_scheduler.domain.entities.service import Service

DEFAULT_DURATION_MINUTES = 30

DEFAULT_SERVICES: dict[str, Service] = {
    "1": Service(id="1", name="Botox - single area", duration=15, price=600, category="injections",
                 description="Expression lines on the forehead or around the eyes"),
    "2": Service(id="2", name="Lip filler", duration=30, price=1800, category="injections",
                 description="Hyaluronic acid lip shaping"),
    "3": Service(id="3", name="Non-surgical nose contouring", duration=45, price=2200, category="injections"),
    "4": Service(id="4", name="Classic facial", duration=60, price=450, category="cosmetics",
                 description="Deep cleansing and nourishment"),
    "5": Service(id="5", name="Mesotherapy", duration=45, price=800, category="facials"),
}


class ServiceCatalogStore(ServiceCatalogPort):
    def __init__(self, catalog: dict[str, Service] | None = None) -> None:
        self._catalog = catalog or DEFAULT_SERVICES

    def list_services(self) -> list[Service]:
        return sorted(self._catalog.values(), key=lambda s: s.name)

    def get_service(self, service_id: str) -> Service | None:
        return self._catalog.get(service_id.strip())

    def get_duration_minutes(self, service_id: str) -> int:
        entry = self.get_service(service_id)
        if not entry:
            return DEFAULT_DURATION_MINUTES
        return entry.duration
