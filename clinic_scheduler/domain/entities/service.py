from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Service:
    id: str
    name: str
    duration: int  # minutes
    price: int
    category: str = ""
    description: str | None = None
