# salon_api/core/errors.py

"""
Booking error taxonomy.

Every error here is recoverable: the caller corrects the input (or re-fetches
the bookings) and tries again. ``code`` is stable and safe to show to clients,
``status_code`` is the HTTP status the API answers with.
"""

from typing import Sequence


class BookingError(Exception):
    code = "BOOKING_ERROR"
    status_code = 422

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class MissingField(BookingError):
    code = "MISSING_FIELD"

    def __init__(self, fields: Sequence[str]):
        self.fields = list(fields)
        super().__init__(f"Missing required field(s): {', '.join(self.fields)}")


class UnknownService(BookingError):
    code = "UNKNOWN_SERVICE"


class DateClosed(BookingError):
    code = "DATE_CLOSED"


class OutOfHours(BookingError):
    code = "OUT_OF_HOURS"


class OffGrid(BookingError):
    code = "OFF_GRID"


class SlotConflict(BookingError):
    code = "SLOT_CONFLICT"
    status_code = 409


class ConflictError(BookingError):
    """The system of record accepted an overlapping booking first."""

    code = "CONFLICT"
    status_code = 409
