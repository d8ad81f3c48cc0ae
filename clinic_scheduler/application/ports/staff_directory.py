from __future__ import annotations

from abc import ABC, abstractmethod

from clinic_scheduler.domain.entities.staff import StaffMember


class StaffDirectoryPort(ABC):
    @abstractmethod
    def list_staff(self, clinic_id: str | None = None) -> list[StaffMember]:
        raise NotImplementedError

    @abstractmethod
    def get_staff_member(self, staff_id: str) -> StaffMember | None:
        raise NotImplementedError
