from __future__ import annotations

from clinic_scheduler.domain.entities.time_slot import SlotConflict


class SchedulingError(ValueError):
    """Base class for rejected scheduling attempts. Never fatal."""
    pass


class SlotConflictError(SchedulingError):
    """Raised when a slot overlaps a non-cancelled appointment or runs past closing."""

    def __init__(self, message: str, conflict: SlotConflict | None = None) -> None:
        super().__init__(message)
        self.conflict = conflict


class OutOfOperatingHoursError(SlotConflictError):
    """Raised when a slot starts before opening or ends after closing."""
    pass


class InvalidRecurrenceInput(SchedulingError):
    """Raised when a recurrence rule is malformed. No occurrences are generated."""
    pass


class InvalidTimeError(SchedulingError):
    """Raised for malformed HH:MM times or calendar slot ids."""
    pass


class AppointmentNotFoundError(LookupError):
    pass


class AppointmentStoreError(RuntimeError):
    """Raised when the appointment store fails (network errors, bad responses)."""
    pass
