from datetime import date

import pytest

from clinic_scheduler.application.use_cases.calendar_nav import CalendarView, navigate, view_range, week_days
from clinic_scheduler.domain.entities.working_hours import WorkingDay, WorkingHours


def test_week_starts_on_sunday():
    days = week_days(date(2025, 1, 15))  # Wednesday
    assert days[0] == date(2025, 1, 12)
    assert days[-1] == date(2025, 1, 18)
    assert week_days(date(2025, 1, 12))[0] == date(2025, 1, 12)


def test_navigate_by_view():
    current = date(2025, 1, 31)
    assert navigate(current, CalendarView.DAY, "next") == date(2025, 2, 1)
    assert navigate(current, CalendarView.WEEK, "prev") == date(2025, 1, 24)
    assert navigate(current, CalendarView.MONTH, "next") == date(2025, 2, 28)
    assert navigate(current, "team", "prev") == date(2025, 1, 30)

    with pytest.raises(ValueError):
        navigate(current, CalendarView.DAY, "sideways")


def test_view_range():
    current = date(2025, 2, 12)
    assert view_range(current, CalendarView.DAY) == (current, current)
    assert view_range(current, CalendarView.WEEK) == (date(2025, 2, 9), date(2025, 2, 15))
    assert view_range(current, CalendarView.MONTH) == (date(2025, 2, 1), date(2025, 2, 28))


def test_default_working_hours():
    hours = WorkingHours()

    assert hours.hours_for(date(2025, 1, 12)) == ("09:00", "18:00")  # Sunday
    assert hours.hours_for(date(2025, 1, 17)) == ("09:00", "13:00")  # Friday
    assert hours.hours_for(date(2025, 1, 18)) is None  # Saturday
    assert hours.is_working_day(date(2025, 1, 13)) is True
    assert hours.is_working_hour(date(2025, 1, 13), 17) is True
    assert hours.is_working_hour(date(2025, 1, 13), 18) is False
    assert hours.first_hour() == 9
    assert hours.last_hour() == 18


def test_custom_working_hours():
    hours = WorkingHours([WorkingDay(weekday=0, is_working_day=True, start="07:00", end="21:00")])

    assert hours.hours_for(date(2025, 1, 13)) == ("07:00", "21:00")
    assert hours.is_working_day(date(2025, 1, 14)) is False
    assert hours.first_hour() == 7
    assert hours.last_hour() == 21
