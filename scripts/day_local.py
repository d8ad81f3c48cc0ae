#!/usr/bin/env python3
"""
Local day planner harness (no HTTP).

Usage:
  python3 scripts/day_local.py 2025-01-13 --duration 45
  python3 scripts/day_local.py 2025-01-13 --service 4 --staff staff_a

What it does:
- Builds the same BookingUseCase the API uses (STORE_PROVIDER decides the store)
- Prints the bookable start times for the day
- Prints the hour grid of the week around that day with booked appointments
"""

from __future__ import annotations

import argparse
import sys
from datetime import date
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from clinic_scheduler.application.use_cases.calendar_nav import CalendarView, week_days
from clinic_scheduler.wiring.dependencies import get_booking_use_case, get_working_hours


def _print_slots(day: date, slots) -> None:
    print(f"\nSlots for {day.isoformat()} ({day.strftime('%A')})")
    print("-" * 60)
    if not slots:
        print("closed")
        return
    free = [s.time for s in slots if s.available]
    taken = [s.time for s in slots if not s.available]
    print(f"free:  {' '.join(free) or '-'}")
    print(f"taken: {' '.join(taken) or '-'}")


def _print_week(anchor: date, index) -> None:
    hours = get_working_hours()
    print(f"\nWeek of {week_days(anchor)[0].isoformat()}")
    print("-" * 60)
    for day in week_days(anchor):
        label = f"{day.strftime('%a %d/%m')} [{index.count_for(day)}]"
        if not hours.is_working_day(day):
            print(f"{label}  closed")
            continue
        print(label)
        for hour in index.hours:
            for appt in index.appointments_for(day, hour):
                print(f"    {appt.time} {appt.duration:>3}m  {appt.patient_name} - {appt.service_name} ({appt.status.value})")


def main() -> int:
    parser = argparse.ArgumentParser(description="Print free slots and the week grid for a day")
    parser.add_argument("day", type=date.fromisoformat, help="YYYY-MM-DD")
    group = parser.add_mutually_exclusive_group()
    group.add_argument("--duration", type=int, default=30, help="service length in minutes")
    group.add_argument("--service", help="service id from the catalog")
    parser.add_argument("--staff", default=None, help="only count this staff member's bookings")
    args = parser.parse_args()

    uc = get_booking_use_case()
    if args.service:
        slots = uc.get_service_slots(args.day, args.service, args.staff)
    else:
        slots = uc.get_available_slots(args.day, args.duration, args.staff)

    _print_slots(args.day, slots)
    _print_week(args.day, uc.calendar_index(args.day, CalendarView.WEEK))
    return 0


if __name__ == "__main__":
    sys.exit(main())
