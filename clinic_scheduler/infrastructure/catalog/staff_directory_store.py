from __future__ import annotations

from clinic_scheduler.application.ports.staff_directory import StaffDirectoryPort
from clinic_scheduler.domain.entities.staff import StaffMember


class StaffDirectoryStore(StaffDirectoryPort):
    def __init__(self, staff: list[StaffMember] | None = None) -> None:
        self._staff = {member.id: member for member in staff or []}

    def list_staff(self, clinic_id: str | None = None) -> list[StaffMember]:
        return list(self._staff.values())

    def get_staff_member(self, staff_id: str) -> StaffMember | None:
        return self._staff.get(staff_id)
