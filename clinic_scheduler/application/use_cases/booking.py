from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from datetime import date

from clinic_scheduler.application.exceptions import (
    AppointmentNotFoundError,
    InvalidTimeError,
    OutOfOperatingHoursError,
    SlotConflictError,
)
from clinic_scheduler.application.ports.appointment_store import AppointmentStorePort
from clinic_scheduler.application.ports.service_catalog import ServiceCatalogPort
from clinic_scheduler.application.use_cases.availability import AvailabilityUseCase
from clinic_scheduler.application.use_cases.calendar_nav import CalendarView, view_range
from clinic_scheduler.application.use_cases.conflicts import check_conflict
from clinic_scheduler.application.use_cases.recurrence import MAX_OCCURRENCES, occurrence_dates
from clinic_scheduler.application.use_cases.reschedule import ensure_within_hours, resolve_drop
from clinic_scheduler.application.use_cases.slot_index import SlotIndex, build_slot_index
from clinic_scheduler.application.utils.time_utils import time_to_minutes
from clinic_scheduler.domain.entities.appointment import (
    Appointment,
    AppointmentInput,
    AppointmentStatus,
    AppointmentUpdate,
)
from clinic_scheduler.domain.entities.calendar_command import CalendarCommand, Cancel, Edit, Move, ViewDetails
from clinic_scheduler.domain.entities.recurrence import RecurrenceRule, RecurrenceType
from clinic_scheduler.domain.entities.time_slot import TimeSlot
from clinic_scheduler.domain.entities.working_hours import WorkingHours


@dataclass(frozen=True)
class BookingResult:
    action: str  # "booked", "moved", "cancelled", "updated", "details"
    appointments: list[Appointment]
    skipped_dates: list[date] | None = None


class BookingUseCase:
    def __init__(
        self,
        store: AppointmentStorePort,
        catalog: ServiceCatalogPort,
        working_hours: WorkingHours,
        slot_interval: int = 30,
        max_occurrences: int = MAX_OCCURRENCES,
        calendar_hours: tuple[int, int] = (8, 20),
        clinic_id: str | None = None,
    ) -> None:
        self._store = store
        self._catalog = catalog
        self._working_hours = working_hours
        self._max_occurrences = max_occurrences
        self._calendar_hours = calendar_hours
        self._clinic_id = clinic_id
        self._availability = AvailabilityUseCase(
            store=store,
            working_hours=working_hours,
            interval=slot_interval,
            clinic_id=clinic_id,
        )
        self._logger = logging.getLogger(__name__)

    def get_available_slots(self, day: date, duration: int, staff_id: str | None = None) -> list[TimeSlot]:
        return self._availability.execute(day, duration, staff_id)

    def get_service_slots(self, day: date, service_id: str, staff_id: str | None = None) -> list[TimeSlot]:
        return self.get_available_slots(day, self._catalog.get_duration_minutes(service_id), staff_id)

    def calendar_index(self, anchor: date, view: CalendarView = CalendarView.WEEK) -> SlotIndex:
        start, end = view_range(anchor, view)
        appointments = self._store.list_appointments(start, end, self._clinic_id)
        start_hour, end_hour = self._calendar_hours
        return build_slot_index(appointments, start_hour, end_hour)

    def create_booking(self, booking: AppointmentInput) -> BookingResult:
        self._validate_slot(booking.date, booking.time, booking.duration, booking.staff_id)
        created = self._store.add_appointment(booking)
        self._logger.info(
            "Appointment booked",
            extra={"appointment_id": created.id, "date": created.date.isoformat(), "time": created.time},
        )
        return BookingResult(action="booked", appointments=[created])

    def create_recurring(
        self,
        booking: AppointmentInput,
        rule: RecurrenceRule,
        skip_conflicts: bool = False,
    ) -> BookingResult:
        """Book the seed and every occurrence of `rule` in one batch.

        The rule is validated before anything is checked or stored. A conflicting
        occurrence rejects the whole series unless `skip_conflicts` is set, in
        which case that date is left out and reported in `skipped_dates`.
        """
        dates = [booking.date] + occurrence_dates(booking.date, rule, self._max_occurrences)

        existing = self._store.list_appointments(dates[0], dates[-1], self._clinic_id)
        to_create: list[AppointmentInput] = []
        skipped: list[date] = []
        for day in dates:
            try:
                self._validate_slot(day, booking.time, booking.duration, booking.staff_id, existing)
            except SlotConflictError:
                if not skip_conflicts or day == booking.date:
                    raise
                skipped.append(day)
                continue
            to_create.append(replace(booking, date=day))

        created = self._store.add_appointments(to_create)
        self._logger.info(
            "Recurring series booked",
            extra={"date": booking.date.isoformat(), "count": len(created), "reason": RecurrenceType(rule.type).value},
        )
        return BookingResult(action="booked", appointments=created, skipped_dates=skipped or None)

    def reschedule(
        self,
        appointment_id: str,
        destination_date: date,
        destination_hour: int,
        minute: int | None = None,
    ) -> BookingResult:
        appointment = self._require(appointment_id)
        window = self._working_hours.hours_for(destination_date)
        if window is None:
            raise OutOfOperatingHoursError(f"Clinic is closed on {destination_date.isoformat()}")

        existing = self._store.list_appointments(destination_date, destination_date, self._clinic_id)
        resolution = resolve_drop(
            appointment,
            destination_date,
            destination_hour,
            existing,
            minute=minute,
            open_time=window[0],
            close_time=window[1],
            staff_partitioned=appointment.staff_id is not None,
        )

        updated = self._store.update_appointment(
            appointment_id,
            AppointmentUpdate(date=resolution.date, time=resolution.time),
        )
        if updated is None:
            raise AppointmentNotFoundError(appointment_id)
        self._logger.info(
            "Appointment moved",
            extra={"appointment_id": appointment_id, "date": updated.date.isoformat(), "time": updated.time},
        )
        return BookingResult(action="moved", appointments=[updated])

    def cancel(self, appointment_id: str) -> BookingResult:
        return self._set_status(appointment_id, AppointmentStatus.CANCELLED, action="cancelled")

    def update_status(self, appointment_id: str, status: AppointmentStatus) -> BookingResult:
        return self._set_status(appointment_id, status, action="updated")

    def edit(self, appointment_id: str, update: AppointmentUpdate) -> BookingResult:
        current = self._require(appointment_id)
        target = replace(current, **update.changes())
        # cancelled rows are indexed too
        self._validate_shape(target.time, target.duration)
        if target.occupies_slot and (
            target.date != current.date
            or target.time != current.time
            or target.duration != current.duration
            or target.staff_id != current.staff_id
            or not current.occupies_slot
        ):
            self._validate_slot(target.date, target.time, target.duration, target.staff_id, exclude_id=appointment_id)

        updated = self._store.update_appointment(appointment_id, update)
        if updated is None:
            raise AppointmentNotFoundError(appointment_id)
        return BookingResult(action="updated", appointments=[updated])

    def handle(self, command: CalendarCommand) -> BookingResult:
        if isinstance(command, Move):
            return self.reschedule(
                command.appointment_id,
                command.destination_date,
                command.destination_hour,
                command.minute,
            )
        if isinstance(command, Cancel):
            return self.cancel(command.appointment_id)
        if isinstance(command, Edit):
            return self.edit(command.appointment_id, command.update)
        if isinstance(command, ViewDetails):
            return BookingResult(action="details", appointments=[self._require(command.appointment_id)])
        raise TypeError(f"Unsupported calendar command: {type(command).__name__}")

    def _set_status(self, appointment_id: str, status: AppointmentStatus, action: str) -> BookingResult:
        current = self._require(appointment_id)
        if not current.occupies_slot and status != AppointmentStatus.CANCELLED:
            # reactivation reclaims the slot
            self._validate_slot(
                current.date,
                current.time,
                current.duration,
                current.staff_id,
                exclude_id=appointment_id,
            )
        if not self._store.update_status(appointment_id, status):
            raise AppointmentNotFoundError(appointment_id)
        updated = self._require(appointment_id)
        self._logger.info(
            "Appointment status changed",
            extra={"appointment_id": appointment_id, "reason": status.value},
        )
        return BookingResult(action=action, appointments=[updated])

    def _require(self, appointment_id: str) -> Appointment:
        appointment = self._store.get_appointment(appointment_id)
        if appointment is None:
            raise AppointmentNotFoundError(appointment_id)
        return appointment

    def _validate_slot(
        self,
        day: date,
        time: str,
        duration: int,
        staff_id: str | None,
        existing: list[Appointment] | None = None,
        exclude_id: str | None = None,
    ) -> None:
        self._validate_shape(time, duration)
        window = self._working_hours.hours_for(day)
        if window is None:
            raise OutOfOperatingHoursError(f"Clinic is closed on {day.isoformat()}")
        ensure_within_hours(time, duration, window[0], window[1])

        if existing is None:
            existing = self._store.list_appointments(day, day, self._clinic_id)
        conflict = check_conflict(day, time, duration, existing, exclude_id=exclude_id, staff_id=staff_id)
        if conflict is not None:
            self._logger.info(
                "Slot conflict",
                extra={
                    "appointment_id": conflict.existing_appointment.id,
                    "date": day.isoformat(),
                    "time": time,
                    "reason": "overlap",
                },
            )
            raise SlotConflictError(
                f"{day.isoformat()} {time} overlaps an existing appointment at {conflict.existing_appointment.time}",
                conflict=conflict,
            )

    @staticmethod
    def _validate_shape(time: str, duration: int) -> None:
        time_to_minutes(time)
        if isinstance(duration, bool) or not isinstance(duration, int) or duration <= 0:
            raise InvalidTimeError(f"Duration must be a positive number of minutes, got {duration!r}")
