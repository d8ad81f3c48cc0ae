from functools import lru_cache
import logging

from clinic_scheduler.core.config import settings
from clinic_scheduler.application.ports.appointment_store import AppointmentStorePort
from clinic_scheduler.application.ports.service_catalog import ServiceCatalogPort
from clinic_scheduler.application.ports.staff_directory import StaffDirectoryPort
from clinic_scheduler.application.use_cases.booking import BookingUseCase
from clinic_scheduler.domain.entities.working_hours import WorkingHours
from clinic_scheduler.infrastructure.catalog.service_catalog_store import ServiceCatalogStore
from clinic_scheduler.infrastructure.catalog.staff_directory_store import StaffDirectoryStore
from clinic_scheduler.infrastructure.store.json_store import JsonAppointmentStore
from clinic_scheduler.infrastructure.store.memory_store import MemoryAppointmentStore
from clinic_scheduler.infrastructure.store.supabase_store import SupabaseAppointmentStore


logger = logging.getLogger(__name__)


@lru_cache
def get_appointment_store() -> AppointmentStorePort:
    provider = settings.STORE_PROVIDER.lower()
    if provider == "supabase":
        logger.info("Using SupabaseAppointmentStore")
        return SupabaseAppointmentStore()
    if provider == "json":
        logger.info("Using JsonAppointmentStore (DATA_DIR=%s)", settings.DATA_DIR)
        return JsonAppointmentStore(data_dir=settings.DATA_DIR, clinic_id=settings.CLINIC_ID)
    if provider != "memory":
        raise ValueError(f"Unknown STORE_PROVIDER: {settings.STORE_PROVIDER}")
    logger.info("Using MemoryAppointmentStore")
    return MemoryAppointmentStore()


@lru_cache
def get_service_catalog() -> ServiceCatalogPort:
    return ServiceCatalogStore()


@lru_cache
def get_staff_directory() -> StaffDirectoryPort:
    return StaffDirectoryStore()


def get_working_hours() -> WorkingHours:
    return WorkingHours()


def calendar_grid_hours(working_hours: WorkingHours) -> tuple[int, int]:
    """Configured grid rows, widened so every opening hour has a row."""
    return (
        min(settings.CALENDAR_START_HOUR, working_hours.first_hour()),
        max(settings.CALENDAR_END_HOUR, working_hours.last_hour()),
    )


def get_booking_use_case() -> BookingUseCase:
    working_hours = get_working_hours()
    return BookingUseCase(
        store=get_appointment_store(),
        catalog=get_service_catalog(),
        working_hours=working_hours,
        slot_interval=settings.SLOT_INTERVAL_MINUTES,
        max_occurrences=settings.RECURRENCE_MAX_COUNT,
        calendar_hours=calendar_grid_hours(working_hours),
        clinic_id=settings.CLINIC_ID,
    )
