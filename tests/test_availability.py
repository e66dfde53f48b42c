"""
Tests for core/availability.py

Covers slot labelling, booking filtering, fail-closed handling of malformed
records and agreement with the pairwise overlap definition.
"""

import pytest

from salon_api.core import (
    AppointmentBooking,
    BookingStatus,
    TimeGrid,
    available_starts,
    compute_availability,
    is_available,
    overlaps,
    to_minutes,
)
from tests.helpers import MONDAY, SUNDAY, TUESDAY, t

STAFF = 7


def booking(start, end, staff_id=STAFF, day=TUESDAY, status=BookingStatus.scheduled):
    return AppointmentBooking(staff_id=staff_id, date=day, start=t(start), end=t(end), status=status)


def labels(slots):
    return {s.start.strftime("%H:%M"): s.available for s in slots}


def test_empty_day_is_fully_available():
    grid = TimeGrid()
    slots = compute_availability(STAFF, TUESDAY, 30, [], grid)

    assert [s.start for s in slots] == grid.enumerate_slots(TUESDAY)
    assert all(s.available for s in slots)


@pytest.mark.parametrize("duration", [15, 30, 45, 60, 90, 240])
def test_output_matches_grid_length(duration):
    grid = TimeGrid()
    bookings = [booking("10:00", "11:00"), booking("14:15", "14:40")]

    slots = compute_availability(STAFF, TUESDAY, duration, bookings, grid)

    assert len(slots) == len(grid.enumerate_slots(TUESDAY))


def test_touching_booking_is_available():
    slots = labels(compute_availability(STAFF, TUESDAY, 30, [booking("09:00", "09:30")], TimeGrid()))

    assert slots["09:00"] is False
    assert slots["09:30"] is True


def test_closed_day_has_no_slots():
    assert compute_availability(STAFF, SUNDAY, 30, [], TimeGrid()) == []
    assert not is_available(t("10:00"), STAFF, SUNDAY, 30, [], TimeGrid())


def test_service_overflowing_close_is_unavailable():
    slots = labels(compute_availability(STAFF, TUESDAY, 60, [], TimeGrid()))

    assert slots["17:00"] is True
    assert slots["17:30"] is False


def test_hour_long_booking_blocks_two_slots():
    slots = labels(compute_availability(STAFF, TUESDAY, 30, [booking("09:00", "10:00")], TimeGrid()))

    assert slots["09:00"] is False
    assert slots["09:30"] is False
    assert slots["10:00"] is True


def test_long_service_between_bookings():
    bookings = [booking("09:00", "09:30"), booking("11:00", "11:30")]
    slots = labels(compute_availability(STAFF, TUESDAY, 90, bookings, TimeGrid()))

    assert slots["09:00"] is False
    # ends exactly at 11:00
    assert slots["09:30"] is True
    assert slots["10:00"] is False
    assert slots["10:30"] is False
    assert slots["11:00"] is False
    assert slots["11:30"] is True


def test_cancelled_bookings_never_block():
    bookings = [booking("09:00", "10:00", status=BookingStatus.cancelled)]
    slots = labels(compute_availability(STAFF, TUESDAY, 30, bookings, TimeGrid()))

    assert slots["09:00"] is True
    assert slots["09:30"] is True


def test_completed_bookings_still_block():
    bookings = [booking("09:00", "10:00", status=BookingStatus.completed)]
    slots = labels(compute_availability(STAFF, TUESDAY, 30, bookings, TimeGrid()))

    assert slots["09:00"] is False


def test_other_staff_and_dates_are_ignored():
    bookings = [
        booking("09:00", "12:00", staff_id=STAFF + 1),
        booking("09:00", "12:00", day=MONDAY),
    ]
    slots = compute_availability(STAFF, TUESDAY, 30, bookings, TimeGrid())

    assert all(s.available for s in slots)


def test_unaligned_booking_blocks_every_overlapping_slot():
    slots = labels(compute_availability(STAFF, TUESDAY, 30, [booking("10:10", "10:40")], TimeGrid()))

    assert slots["09:30"] is True
    assert slots["10:00"] is False
    assert slots["10:30"] is False
    assert slots["11:00"] is True


def test_partial_cell_without_overlap_stays_available():
    # 09:00-09:45 and 09:50-10:00 share the 09:30 cell but do not overlap
    slots = labels(compute_availability(STAFF, TUESDAY, 45, [booking("09:50", "10:00")], TimeGrid()))

    assert slots["09:00"] is True
    assert slots["09:30"] is False


def test_malformed_empty_booking_blocks_its_cell():
    slots = labels(compute_availability(STAFF, TUESDAY, 30, [booking("10:00", "10:00")], TimeGrid()))

    assert slots["09:30"] is True
    assert slots["10:00"] is False
    assert slots["10:30"] is True


def test_malformed_inverted_booking_blocks_declared_range():
    slots = labels(compute_availability(STAFF, TUESDAY, 30, [booking("11:00", "10:00")], TimeGrid()))

    assert slots["09:30"] is True
    assert slots["10:00"] is False
    assert slots["10:30"] is False
    assert slots["11:00"] is True


def test_matches_pairwise_definition():
    """Tick expansion must give the same answer as comparing every booking."""
    grid = TimeGrid(granularity_minutes=30)
    bookings = [
        booking("09:10", "09:25"),
        booking("12:45", "13:05"),
        booking("15:00", "15:50"),
        booking("17:55", "18:00"),
        booking("08:00", "09:05"),
    ]
    spans = [(to_minutes(b.start), to_minutes(b.end)) for b in bookings]

    for duration in (10, 15, 20, 30, 45, 50, 60, 75, 90, 120):
        slots = compute_availability(STAFF, TUESDAY, duration, bookings, grid)
        for slot in slots:
            start = to_minutes(slot.start)
            expected = grid.fits(start, duration) and not any(
                overlaps(start, start + duration, s, e) for s, e in spans
            )
            assert slot.available is expected, (slot.start, duration)


def test_is_available_agrees_with_grid():
    grid = TimeGrid()
    bookings = [booking("10:00", "11:00")]
    slots = compute_availability(STAFF, TUESDAY, 60, bookings, grid)

    for slot in slots:
        assert is_available(slot.start, STAFF, TUESDAY, 60, bookings, grid) is slot.available


def test_is_available_rejects_off_grid_start():
    assert not is_available(t("09:15"), STAFF, TUESDAY, 30, [], TimeGrid())


def test_available_starts():
    slots = compute_availability(STAFF, TUESDAY, 30, [booking("09:00", "17:00")], TimeGrid())
    assert available_starts(slots) == [t("17:00"), t("17:30")]


def test_result_is_deterministic():
    bookings = [booking("13:00", "13:45"), booking("09:00", "09:30")]
    first = compute_availability(STAFF, TUESDAY, 45, bookings, TimeGrid())
    second = compute_availability(STAFF, TUESDAY, 45, list(reversed(bookings)), TimeGrid())

    assert first == second


@pytest.mark.parametrize("duration", [0, -30])
def test_non_positive_duration_is_rejected(duration):
    with pytest.raises(ValueError):
        compute_availability(STAFF, TUESDAY, duration, [], TimeGrid())
