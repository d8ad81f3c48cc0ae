from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date
from enum import Enum


class RecurrenceType(str, Enum):
    NONE = "none"
    WEEKLY = "weekly"
    BIWEEKLY = "biweekly"
    MONTHLY = "monthly"


@dataclass(frozen=True)
class RecurrenceRule:
    type: RecurrenceType = RecurrenceType.NONE
    count: int | None = None  # includes the seed occurrence
    end_date: date | None = None

    def with_count(self, count: int) -> RecurrenceRule:
        """Bound the series by occurrence count. Clears any end date."""
        return replace(self, count=count, end_date=None)

    def with_end_date(self, end_date: date) -> RecurrenceRule:
        """Bound the series by last date. Clears any count."""
        return replace(self, count=None, end_date=end_date)
