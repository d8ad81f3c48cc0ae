from __future__ import annotations

import calendar
from datetime import date, timedelta
from enum import Enum

from clinic_scheduler.application.utils.time_utils import add_months


class CalendarView(str, Enum):
    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    TEAM = "team"


def week_days(anchor: date) -> list[date]:
    """The 7 days of the Sunday-first week containing `anchor`."""
    start = anchor - timedelta(days=(anchor.weekday() + 1) % 7)
    return [start + timedelta(days=i) for i in range(7)]


def navigate(current: date, view: CalendarView, direction: str) -> date:
    if direction not in ("prev", "next"):
        raise ValueError(f"Unknown direction: {direction!r}")
    step = 1 if direction == "next" else -1
    view = CalendarView(view)

    if view in (CalendarView.DAY, CalendarView.TEAM):
        return current + timedelta(days=step)
    if view == CalendarView.WEEK:
        return current + timedelta(days=7 * step)
    return add_months(current, step)


def view_range(current: date, view: CalendarView) -> tuple[date, date]:
    """Inclusive date window the calendar needs appointments for."""
    view = CalendarView(view)
    if view in (CalendarView.DAY, CalendarView.TEAM):
        return (current, current)
    if view == CalendarView.WEEK:
        days = week_days(current)
        return (days[0], days[-1])
    last_day = calendar.monthrange(current.year, current.month)[1]
    return (current.replace(day=1), current.replace(day=last_day))
