from __future__ import annotations

from abc import ABC, abstractmethod

from clinic_scheduler.domain.entities.service import Service


class ServiceCatalogPort(ABC):
    @abstractmethod
    def list_services(self) -> list[Service]:
        raise NotImplementedError

    @abstractmethod
    def get_service(self, service_id: str) -> Service | None:
        """Get service by id."""
        raise NotImplementedError

    @abstractmethod
    def get_duration_minutes(self, service_id: str) -> int:
        """Get service duration in minutes. Falls back to a default for unknown ids."""
        raise NotImplementedError
