# salon_api/core/availability.py

"""
Availability Calculator

Labels every slot of a staff member's day as bookable or blocked, given a
snapshot of that staff member's bookings and the duration of the requested
service.

Algorithm:
    1. Keep bookings for the same staff member and date that are not cancelled
    2. Expand each booking into the grid cells it touches (occupied ticks)
    3. For each slot of the grid:
        a. Reject it if [slot, slot + duration) leaves business hours
        b. Accept it if none of the cells it touches are occupied
        c. Otherwise confirm with a pairwise overlap test against the
           bookings in those cells

Step 3c keeps the result identical to the plain pairwise definition when
bookings or durations are not multiples of the grid step.
"""

from collections import defaultdict
from datetime import date, time
from typing import Dict, Iterable, List, Tuple

from .grid import TimeGrid, to_minutes
from .overlap import overlaps
from .types import AppointmentBooking, SlotStatus

Span = Tuple[int, int]


def blocking_span(booking: AppointmentBooking, grid: TimeGrid) -> Span:
    """
    Minutes [start, end) that a booking blocks.

    Malformed records fail closed: an inverted record blocks the range between
    its two times, an empty one blocks the whole grid cell holding its start.
    """
    start = to_minutes(booking.start)
    end = to_minutes(booking.end)
    if start < end:
        return start, end
    if start > end:
        return end, start
    cell_start = grid.start_minutes + grid.cell_of(start) * grid.granularity_minutes
    return cell_start, cell_start + grid.granularity_minutes


def relevant_bookings(
    staff_id: int,
    day: date,
    bookings: Iterable[AppointmentBooking],
) -> List[AppointmentBooking]:
    return [
        b for b in bookings
        if b.staff_id == staff_id and b.date == day and b.blocks
    ]


def occupied_ticks(spans: Iterable[Span], grid: TimeGrid) -> Dict[int, List[Span]]:
    ticks: Dict[int, List[Span]] = defaultdict(list)
    for span in spans:
        for cell in grid.cells_touched(*span):
            ticks[cell].append(span)
    return ticks


def _slot_free(start: int, duration: int, ticks: Dict[int, List[Span]], grid: TimeGrid) -> bool:
    end = start + duration
    if not grid.fits(start, duration):
        return False
    for cell in grid.cells_touched(start, end):
        for span_start, span_end in ticks.get(cell, ()):
            if overlaps(start, end, span_start, span_end):
                return False
    return True


def _validate_duration(duration: int) -> None:
    if duration <= 0:
        raise ValueError("service duration must be a positive number of minutes")


def compute_availability(
    staff_id: int,
    day: date,
    service_duration_minutes: int,
    existing_bookings: Iterable[AppointmentBooking],
    grid: TimeGrid,
) -> List[SlotStatus]:
    """
    Returns one SlotStatus per slot of ``grid.enumerate_slots(day)``, ascending.

    Past dates are not filtered here; that is the caller's job.
    """
    _validate_duration(service_duration_minutes)

    slots = grid.enumerate_slots(day)
    if not slots:
        return []

    spans = [blocking_span(b, grid) for b in relevant_bookings(staff_id, day, existing_bookings)]
    ticks = occupied_ticks(spans, grid)

    return [
        SlotStatus(
            start=slot,
            available=_slot_free(to_minutes(slot), service_duration_minutes, ticks, grid),
        )
        for slot in slots
    ]


def is_available(
    start_time: time,
    staff_id: int,
    day: date,
    service_duration_minutes: int,
    existing_bookings: Iterable[AppointmentBooking],
    grid: TimeGrid,
) -> bool:
    """Single-slot form of compute_availability; off-grid starts are never available."""
    _validate_duration(service_duration_minutes)

    if grid.is_closed(day) or not grid.is_aligned(start_time):
        return False

    spans = [blocking_span(b, grid) for b in relevant_bookings(staff_id, day, existing_bookings)]
    return _slot_free(to_minutes(start_time), service_duration_minutes, occupied_ticks(spans, grid), grid)


def available_starts(slots: Iterable[SlotStatus]) -> List[time]:
    return [s.start for s in slots if s.available]
