import datetime as dt

from pydantic import BaseModel, Field, model_validator

from clinic_scheduler.application.use_cases.calendar_nav import CalendarView
from clinic_scheduler.domain.entities.appointment import Appointment, AppointmentStatus, DeclarationStatus
from clinic_scheduler.domain.entities.recurrence import RecurrenceType


class TimeSlotSchema(BaseModel):
    time: str
    available: bool


class AppointmentSchema(BaseModel):
    id: str
    patient_id: str
    patient_name: str
    service_id: str
    service_name: str
    date: dt.date
    time: str
    duration: int
    status: AppointmentStatus
    notes: str | None = None
    staff_id: str | None = None
    declaration_status: DeclarationStatus | None = None

    @classmethod
    def from_entity(cls, appointment: Appointment) -> "AppointmentSchema":
        return cls(**appointment.__dict__)


class CreateAppointmentSchema(BaseModel):
    patient_id: str
    patient_name: str
    service_id: str
    service_name: str
    date: dt.date
    time: str = Field(pattern=r"^\d{2}:\d{2}$")
    duration: int = Field(gt=0, le=24 * 60)
    status: AppointmentStatus = AppointmentStatus.PENDING
    notes: str | None = None
    staff_id: str | None = None


class RecurrenceSchema(BaseModel):
    type: RecurrenceType = RecurrenceType.WEEKLY
    count: int | None = None
    end_date: dt.date | None = None


class CreateRecurringSchema(BaseModel):
    appointment: CreateAppointmentSchema
    recurrence: RecurrenceSchema
    skip_conflicts: bool = False


class MoveAppointmentSchema(BaseModel):
    date: dt.date | None = None
    hour: int | None = Field(default=None, ge=0, le=23)
    minute: int | None = Field(default=None, ge=0, le=59)
    slot_id: str | None = None  # "slot-YYYY-MM-DD-HH", alternative to date + hour

    @model_validator(mode="after")
    def _target_given(self) -> "MoveAppointmentSchema":
        if self.slot_id is None and (self.date is None or self.hour is None):
            raise ValueError("either slot_id or date and hour are required")
        return self


class BookingResponseSchema(BaseModel):
    action: str
    appointments: list[AppointmentSchema]
    skipped_dates: list[dt.date] = Field(default_factory=list)


class CalendarCellSchema(BaseModel):
    date: dt.date
    hour: int
    appointments: list[AppointmentSchema]


class CalendarResponseSchema(BaseModel):
    view: CalendarView
    start: dt.date
    end: dt.date
    hours: list[int]
    cells: list[CalendarCellSchema]
    day_counts: dict[str, int]
    open_hours: dict[str, list[int]]  # grid hours inside opening time, per ISO date


class ServiceSchema(BaseModel):
    id: str
    name: str
    duration: int
    price: int
    category: str = ""
    description: str | None = None


class StaffSchema(BaseModel):
    id: str
    name: str
    role: str
