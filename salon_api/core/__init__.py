"""
Slot allocation core.

Pure functions over a snapshot of bookings, with no database or web
framework imports:
- Time grid and business hours (grid.py)
- Overlap detection (overlap.py)
- Availability per slot (availability.py)
- Booking validation (validator.py)
"""

from .availability import available_starts, compute_availability, is_available
from .errors import (
    BookingError,
    ConflictError,
    DateClosed,
    MissingField,
    OffGrid,
    OutOfHours,
    SlotConflict,
    UnknownService,
)
from .grid import TimeGrid, from_minutes, to_minutes
from .overlap import intervals_overlap, overlaps
from .types import (
    AppointmentBooking,
    BookingProposal,
    BookingStatus,
    Interval,
    ServiceSpec,
    SlotStatus,
    ValidatedBooking,
)
from .validator import BookingValidator
