"""
This file contains custom, scheduler-specific exceptions.
"""

class SchedulingError(Exception):
    """Base class for every usage error raised by the scheduling core."""
    pass

class StartTimeNotSetError(SchedulingError):
    """Raised when a service is toggled before the appointment start time is chosen."""
    pass

class EmptyBookingError(SchedulingError):
    """Raised when an operation needs at least one booking slot and got none."""
    pass

class BookingValidationError(SchedulingError):
    """Raised when a booking form is missing a compulsory field."""
    def __init__(self, field: str):
        self.field = field
        super().__init__(f"Compulsory field '{field}' is missing or empty in the booking form.")
