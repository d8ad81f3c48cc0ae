from datetime import date, timedelta

import pytest

from clinic_scheduler.application.exceptions import InvalidRecurrenceInput
from clinic_scheduler.application.use_cases.recurrence import expand_recurrence, occurrence_dates
from clinic_scheduler.domain.entities.recurrence import RecurrenceRule, RecurrenceType


def test_weekly_count_law(appointment_factory):
    seed = appointment_factory(date(2025, 1, 13), "10:00")
    series = expand_recurrence(seed, RecurrenceRule(type=RecurrenceType.WEEKLY, count=5))

    assert len(series) == 4
    previous = seed.date
    for occurrence in series:
        assert occurrence.date - previous == timedelta(days=7)
        previous = occurrence.date


def test_occurrences_copy_seed_with_fresh_ids(appointment_factory):
    seed = appointment_factory(date(2025, 1, 13), "10:15", duration=45, staff_id="staff_a")
    ids = iter(["x1", "x2"])

    series = expand_recurrence(
        seed,
        RecurrenceRule(type=RecurrenceType.BIWEEKLY, count=3),
        id_factory=lambda: next(ids),
    )

    assert [o.id for o in series] == ["x1", "x2"]
    assert [o.date for o in series] == [date(2025, 1, 27), date(2025, 2, 10)]
    for occurrence in series:
        assert occurrence.time == seed.time
        assert occurrence.duration == seed.duration
        assert occurrence.service_id == seed.service_id
        assert occurrence.patient_name == seed.patient_name
        assert occurrence.staff_id == seed.staff_id


def test_monthly_clamps_to_last_day():
    dates = occurrence_dates(date(2025, 1, 31), RecurrenceRule(type=RecurrenceType.MONTHLY, count=4))
    assert dates == [date(2025, 2, 28), date(2025, 3, 31), date(2025, 4, 30)]

    leap = occurrence_dates(date(2024, 1, 31), RecurrenceRule(type=RecurrenceType.MONTHLY, count=2))
    assert leap == [date(2024, 2, 29)]


def test_monthly_end_date_law():
    end = date(2025, 6, 15)
    dates = occurrence_dates(date(2025, 1, 20), RecurrenceRule(type=RecurrenceType.MONTHLY, end_date=end))

    assert dates == [date(2025, 2, 20), date(2025, 3, 20), date(2025, 4, 20), date(2025, 5, 20)]
    assert all(d <= end for d in dates)


def test_end_date_on_seed_gives_no_extra_occurrences():
    seed_date = date(2025, 1, 13)
    assert occurrence_dates(seed_date, RecurrenceRule(type=RecurrenceType.WEEKLY, end_date=seed_date)) == []


def test_end_date_series_is_capped():
    dates = occurrence_dates(
        date(2025, 1, 1),
        RecurrenceRule(type=RecurrenceType.WEEKLY, end_date=date(2030, 1, 1)),
        max_count=10,
    )
    assert len(dates) == 9


def test_none_type_generates_nothing(appointment_factory):
    seed = appointment_factory(date(2025, 1, 13), "10:00")
    assert expand_recurrence(seed, RecurrenceRule()) == []


@pytest.mark.parametrize(
    "rule",
    [
        RecurrenceRule(type=RecurrenceType.WEEKLY, count=3, end_date=date(2025, 3, 1)),
        RecurrenceRule(type=RecurrenceType.WEEKLY),
        RecurrenceRule(type=RecurrenceType.WEEKLY, count=1),
        RecurrenceRule(type=RecurrenceType.WEEKLY, count=0),
        RecurrenceRule(type=RecurrenceType.WEEKLY, count=53),
        RecurrenceRule(type=RecurrenceType.MONTHLY, end_date=date(2025, 1, 1)),
        RecurrenceRule(type="daily", count=3),
    ],
)
def test_invalid_rules_rejected(rule):
    with pytest.raises(InvalidRecurrenceInput):
        occurrence_dates(date(2025, 1, 13), rule)


def test_bounds_are_mutually_exclusive():
    rule = RecurrenceRule(type=RecurrenceType.WEEKLY, count=4)

    by_date = rule.with_end_date(date(2025, 3, 1))
    assert by_date.count is None
    assert by_date.end_date == date(2025, 3, 1)

    by_count = by_date.with_count(6)
    assert by_count.end_date is None
    assert by_count.count == 6
