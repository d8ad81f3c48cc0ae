from __future__ import annotations

import calendar
import re
from datetime import date

from clinic_scheduler.application.exceptions import InvalidTimeError

MINUTES_PER_DAY = 24 * 60

_TIME_PATTERN = re.compile(r"^(\d{1,2}):(\d{2})(?::\d{2})?$")


def time_to_minutes(value: str) -> int:
    """Parse HH:MM (seconds tolerated) into minutes since midnight."""
    match = _TIME_PATTERN.match(value.strip()) if value else None
    if not match:
        raise InvalidTimeError(f"Invalid time: {value!r}")
    hour = int(match.group(1))
    minute = int(match.group(2))
    if not (0 <= hour <= 23 and 0 <= minute <= 59):
        raise InvalidTimeError(f"Invalid time: {value!r}")
    return hour * 60 + minute


def minutes_to_time(minutes: int) -> str:
    if not 0 <= minutes < MINUTES_PER_DAY:
        raise InvalidTimeError(f"Minutes out of range for a single day: {minutes}")
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def hour_of(value: str) -> int:
    return time_to_minutes(value) // 60


def parse_iso_date(value: str | date) -> date:
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(value[:10])
    except (TypeError, ValueError) as e:
        raise InvalidTimeError(f"Invalid date: {value!r}") from e


def overlaps(start_a: int, end_a: int, start_b: int, end_b: int) -> bool:
    """Half-open interval overlap: [start_a, end_a) and [start_b, end_b)."""
    return start_a < end_b and start_b < end_a


def overlap_minutes(start_a: int, end_a: int, start_b: int, end_b: int) -> int:
    return max(0, min(end_a, end_b) - max(start_a, start_b))


def add_months(day: date, months: int, anchor_day: int | None = None) -> date:
    """Add calendar months, clamping to the last day of a shorter target month."""
    month_index = day.month - 1 + months
    year = day.year + month_index // 12
    month = month_index % 12 + 1
    wanted = anchor_day if anchor_day is not None else day.day
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(wanted, last_day))
