from __future__ import annotations

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class WorkingDay:
    weekday: int  # date.weekday(): Monday = 0, Sunday = 6
    is_working_day: bool
    start: str  # HH:MM
    end: str  # HH:MM


# Sunday to Thursday full days, Friday half day, Saturday closed
DEFAULT_WORKING_DAYS: tuple[WorkingDay, ...] = (
    WorkingDay(weekday=6, is_working_day=True, start="09:00", end="18:00"),
    WorkingDay(weekday=0, is_working_day=True, start="09:00", end="18:00"),
    WorkingDay(weekday=1, is_working_day=True, start="09:00", end="18:00"),
    WorkingDay(weekday=2, is_working_day=True, start="09:00", end="18:00"),
    WorkingDay(weekday=3, is_working_day=True, start="09:00", end="18:00"),
    WorkingDay(weekday=4, is_working_day=True, start="09:00", end="13:00"),
    WorkingDay(weekday=5, is_working_day=False, start="09:00", end="18:00"),
)


class WorkingHours:
    def __init__(self, days: tuple[WorkingDay, ...] | list[WorkingDay] | None = None) -> None:
        self._days = {day.weekday: day for day in (days or DEFAULT_WORKING_DAYS)}

    @property
    def days(self) -> list[WorkingDay]:
        return [self._days[k] for k in sorted(self._days)]

    def is_working_day(self, day: date) -> bool:
        config = self._days.get(day.weekday())
        return bool(config and config.is_working_day)

    def hours_for(self, day: date) -> tuple[str, str] | None:
        """Opening and closing time for the date, or None when closed."""
        config = self._days.get(day.weekday())
        if not config or not config.is_working_day:
            return None
        return (config.start, config.end)

    def is_working_hour(self, day: date, hour: int) -> bool:
        window = self.hours_for(day)
        if window is None:
            return False
        start_hour = int(window[0].split(":")[0])
        end_hour = int(window[1].split(":")[0])
        return start_hour <= hour < end_hour

    def first_hour(self, default: int = 9) -> int:
        hours = [int(d.start.split(":")[0]) for d in self._days.values() if d.is_working_day]
        return min(hours) if hours else default

    def last_hour(self, default: int = 18) -> int:
        hours = [int(d.end.split(":")[0]) for d in self._days.values() if d.is_working_day]
        return max(hours) if hours else default
