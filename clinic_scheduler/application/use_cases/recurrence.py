from __future__ import annotations

import uuid
from collections.abc import Callable
from dataclasses import replace
from datetime import date, timedelta

from clinic_scheduler.application.exceptions import InvalidRecurrenceInput
from clinic_scheduler.application.utils.time_utils import add_months
from clinic_scheduler.domain.entities.appointment import Appointment
from clinic_scheduler.domain.entities.recurrence import RecurrenceRule, RecurrenceType

MAX_OCCURRENCES = 52

_STEP_DAYS = {
    RecurrenceType.WEEKLY: 7,
    RecurrenceType.BIWEEKLY: 14,
}


def _new_id() -> str:
    return uuid.uuid4().hex


def validate_rule(rule: RecurrenceRule, seed_date: date, max_count: int = MAX_OCCURRENCES) -> None:
    try:
        rtype = RecurrenceType(rule.type)
    except ValueError as e:
        raise InvalidRecurrenceInput(f"Unknown recurrence type: {rule.type!r}") from e

    if rtype == RecurrenceType.NONE:
        return
    if rule.count is not None and rule.end_date is not None:
        raise InvalidRecurrenceInput("count and end_date are mutually exclusive")
    if rule.count is None and rule.end_date is None:
        raise InvalidRecurrenceInput("a repeating rule needs count or end_date")
    if rule.count is not None and not (2 <= rule.count <= max_count):
        raise InvalidRecurrenceInput(f"count must be between 2 and {max_count}")
    if rule.end_date is not None and rule.end_date < seed_date:
        raise InvalidRecurrenceInput("end_date is before the first appointment")


def occurrence_dates(seed_date: date, rule: RecurrenceRule, max_count: int = MAX_OCCURRENCES) -> list[date]:
    """Dates after the seed, in order. The seed date itself is not included."""
    validate_rule(rule, seed_date, max_count)
    rtype = RecurrenceType(rule.type)
    if rtype == RecurrenceType.NONE:
        return []

    limit = (rule.count if rule.count is not None else max_count) - 1
    dates: list[date] = []
    for step in range(1, limit + 1):
        if rtype == RecurrenceType.MONTHLY:
            # counted from the seed so a clamped month does not drift the series
            next_date = add_months(seed_date, step, anchor_day=seed_date.day)
        else:
            next_date = seed_date + timedelta(days=_STEP_DAYS[rtype] * step)

        if rule.end_date is not None and next_date > rule.end_date:
            break
        dates.append(next_date)
    return dates


def expand_recurrence(
    seed: Appointment,
    rule: RecurrenceRule,
    max_count: int = MAX_OCCURRENCES,
    id_factory: Callable[[], str] = _new_id,
) -> list[Appointment]:
    """Additional appointments for a recurring series.

    Each occurrence copies the seed; only `id` and `date` differ. Conflicts with
    existing bookings are not checked here.
    """
    return [
        replace(seed, id=id_factory(), date=occurrence)
        for occurrence in occurrence_dates(seed.date, rule, max_count)
    ]
