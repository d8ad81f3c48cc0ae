from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class StaffMember:
    id: str
    name: str
    role: str
