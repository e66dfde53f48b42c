# salon_api/core/validator.py

from datetime import date, timedelta
from typing import Any, Iterable, Mapping

from .availability import is_available
from .errors import DateClosed, MissingField, OffGrid, OutOfHours, SlotConflict, UnknownService
from .grid import TimeGrid, from_minutes, to_minutes
from .types import AppointmentBooking, BookingProposal, Interval, ValidatedBooking

DEFAULT_HORIZON_DAYS = 30

REQUIRED_FIELDS = ("staff_id", "service_id", "date", "start_time")


class BookingValidator:
    """
    Checks a proposed booking against a snapshot of existing bookings.

    The result is advisory: the snapshot may be stale, so the booking write
    path runs the same validator again under its lock before inserting.
    """

    def __init__(self, grid: TimeGrid, horizon_days: int = DEFAULT_HORIZON_DAYS):
        self.grid = grid
        self.horizon_days = horizon_days

    def validate(
        self,
        proposal: BookingProposal,
        existing_bookings: Iterable[AppointmentBooking],
        service_catalog: Mapping[int, Any],
        today: date,
    ) -> ValidatedBooking:
        # 1) Required fields
        missing = [name for name in REQUIRED_FIELDS if getattr(proposal, name) is None]
        if missing:
            raise MissingField(missing)

        # 2) Service must resolve
        service = service_catalog.get(proposal.service_id)
        if service is None:
            raise UnknownService(f"Service {proposal.service_id} not available")
        duration = service.duration_minutes

        # 3) Date must be open and inside the booking window
        day = proposal.date
        if self.grid.is_closed(day):
            raise DateClosed(f"The salon is closed on {day:%A}s")
        if day < today:
            raise DateClosed("Cannot book an appointment in the past")
        if day > today + timedelta(days=self.horizon_days):
            raise DateClosed(f"Appointments can only be booked {self.horizon_days} days ahead")

        # 4) Whole appointment inside business hours
        start = to_minutes(proposal.start_time)
        if not self.grid.fits(start, duration):
            raise OutOfHours(
                f"Appointment must be within business hours "
                f"({self.grid.business_start:%H:%M}-{self.grid.business_end:%H:%M})"
            )

        # 5) Start on a grid line
        if not self.grid.is_aligned(proposal.start_time):
            raise OffGrid(
                f"Start time must be in {self.grid.granularity_minutes}-minute increments"
            )

        # 6) No overlap with the snapshot
        bookings = list(existing_bookings)
        if not is_available(proposal.start_time, proposal.staff_id, day, duration, bookings, self.grid):
            raise SlotConflict(
                f"{proposal.start_time:%H:%M} on {day.isoformat()} overlaps an existing appointment"
            )

        return ValidatedBooking(
            staff_id=proposal.staff_id,
            service_id=proposal.service_id,
            date=day,
            interval=Interval(proposal.start_time, from_minutes(start + duration)),
        )
