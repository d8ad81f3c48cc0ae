import datetime as dt
import logging

from fastapi import APIRouter, Depends, HTTPException, Query

from clinic_scheduler.api.v1.schemas import (
    AppointmentSchema,
    BookingResponseSchema,
    CalendarCellSchema,
    CalendarResponseSchema,
    CreateAppointmentSchema,
    CreateRecurringSchema,
    MoveAppointmentSchema,
    ServiceSchema,
    StaffSchema,
    TimeSlotSchema,
)
from clinic_scheduler.application.exceptions import (
    AppointmentNotFoundError,
    AppointmentStoreError,
    InvalidRecurrenceInput,
    InvalidTimeError,
    SlotConflictError,
)
from clinic_scheduler.application.ports.service_catalog import ServiceCatalogPort
from clinic_scheduler.application.ports.staff_directory import StaffDirectoryPort
from clinic_scheduler.application.use_cases.booking import BookingResult, BookingUseCase
from clinic_scheduler.application.use_cases.calendar_nav import CalendarView, navigate, view_range
from clinic_scheduler.application.use_cases.reschedule import parse_slot_id
from clinic_scheduler.domain.entities.appointment import AppointmentInput
from clinic_scheduler.domain.entities.recurrence import RecurrenceRule
from clinic_scheduler.domain.entities.working_hours import WorkingHours
from clinic_scheduler.wiring.dependencies import (
    get_booking_use_case,
    get_service_catalog,
    get_staff_directory,
    get_working_hours,
)

router = APIRouter()
logger = logging.getLogger(__name__)


def _to_response(result: BookingResult) -> BookingResponseSchema:
    return BookingResponseSchema(
        action=result.action,
        appointments=[AppointmentSchema.from_entity(a) for a in result.appointments],
        skipped_dates=result.skipped_dates or [],
    )


def _to_input(req: CreateAppointmentSchema) -> AppointmentInput:
    return AppointmentInput(**req.model_dump())


def _raise_http(e: Exception) -> None:
    if isinstance(e, SlotConflictError):
        raise HTTPException(status_code=409, detail=str(e))
    if isinstance(e, (InvalidRecurrenceInput, InvalidTimeError)):
        raise HTTPException(status_code=400, detail=str(e))
    if isinstance(e, AppointmentNotFoundError):
        raise HTTPException(status_code=404, detail=f"Appointment not found: {e}")
    if isinstance(e, AppointmentStoreError):
        raise HTTPException(status_code=502, detail=str(e))
    raise e


@router.get("/slots", response_model=list[TimeSlotSchema])
def available_slots(
    date: dt.date,
    duration: int = Query(..., gt=0, le=24 * 60),
    staff_id: str | None = None,
    uc: BookingUseCase = Depends(get_booking_use_case),
):
    try:
        slots = uc.get_available_slots(date, duration, staff_id)
    except AppointmentStoreError as e:
        _raise_http(e)
    return [TimeSlotSchema(time=s.time, available=s.available) for s in slots]


@router.get("/calendar", response_model=CalendarResponseSchema)
def calendar(
    date: dt.date,
    view: CalendarView = CalendarView.WEEK,
    direction: str | None = Query(default=None, pattern="^(prev|next)$"),
    uc: BookingUseCase = Depends(get_booking_use_case),
    working_hours: WorkingHours = Depends(get_working_hours),
):
    if direction is not None:
        date = navigate(date, view, direction)
    try:
        index = uc.calendar_index(date, view)
    except AppointmentStoreError as e:
        _raise_http(e)

    start, end = view_range(date, view)
    cells = [
        CalendarCellSchema(
            date=dt.date(year, month, day),
            hour=hour,
            appointments=[AppointmentSchema.from_entity(a) for a in appts],
        )
        for (year, month, day, hour), appts in sorted(index.by_slot.items())
    ]
    day_counts = {
        dt.date(year, month, day).isoformat(): count
        for (year, month, day), count in sorted(index.count_by_day.items())
    }
    open_hours = {}
    day = start
    while day <= end:
        open_hours[day.isoformat()] = [h for h in index.hours if working_hours.is_working_hour(day, h)]
        day += dt.timedelta(days=1)
    return CalendarResponseSchema(
        view=view,
        start=start,
        end=end,
        hours=list(index.hours),
        cells=cells,
        day_counts=day_counts,
        open_hours=open_hours,
    )


@router.post("/appointments", response_model=BookingResponseSchema, status_code=201)
def create_appointment(
    req: CreateAppointmentSchema,
    uc: BookingUseCase = Depends(get_booking_use_case),
):
    try:
        result = uc.create_booking(_to_input(req))
    except Exception as e:
        _raise_http(e)
    return _to_response(result)


@router.post("/appointments/recurring", response_model=BookingResponseSchema, status_code=201)
def create_recurring_appointment(
    req: CreateRecurringSchema,
    uc: BookingUseCase = Depends(get_booking_use_case),
):
    rule = RecurrenceRule(
        type=req.recurrence.type,
        count=req.recurrence.count,
        end_date=req.recurrence.end_date,
    )
    try:
        result = uc.create_recurring(_to_input(req.appointment), rule, skip_conflicts=req.skip_conflicts)
    except Exception as e:
        _raise_http(e)
    return _to_response(result)


@router.post("/appointments/{appointment_id}/move", response_model=BookingResponseSchema)
def move_appointment(
    appointment_id: str,
    req: MoveAppointmentSchema,
    uc: BookingUseCase = Depends(get_booking_use_case),
):
    try:
        if req.slot_id is not None:
            target_date, target_hour = parse_slot_id(req.slot_id)
        else:
            target_date, target_hour = req.date, req.hour
        result = uc.reschedule(appointment_id, target_date, target_hour, req.minute)
    except Exception as e:
        _raise_http(e)
    return _to_response(result)


@router.post("/appointments/{appointment_id}/cancel", response_model=BookingResponseSchema)
def cancel_appointment(
    appointment_id: str,
    uc: BookingUseCase = Depends(get_booking_use_case),
):
    try:
        result = uc.cancel(appointment_id)
    except Exception as e:
        _raise_http(e)
    return _to_response(result)


@router.get("/services", response_model=list[ServiceSchema])
def list_services(catalog: ServiceCatalogPort = Depends(get_service_catalog)):
    return [ServiceSchema(**s.__dict__) for s in catalog.list_services()]


@router.get("/staff", response_model=list[StaffSchema])
def list_staff(directory: StaffDirectoryPort = Depends(get_staff_directory)):
    return [StaffSchema(**m.__dict__) for m in directory.list_staff()]


@router.get("/staff/{staff_id}", response_model=StaffSchema)
def get_staff_member(staff_id: str, directory: StaffDirectoryPort = Depends(get_staff_directory)):
    member = directory.get_staff_member(staff_id)
    if member is None:
        raise HTTPException(status_code=404, detail=f"Staff member not found: {staff_id}")
    return StaffSchema(**member.__dict__)
