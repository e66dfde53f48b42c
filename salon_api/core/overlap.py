# salon_api/core/overlap.py

from .types import Interval


def overlaps(a_start, a_end, b_start, b_end) -> bool:
    """
    Half-open overlap test for [a_start, a_end) and [b_start, b_end).

    Works on anything ordered (times, datetimes, minute counts). Intervals that
    only touch (a_end == b_start) do not overlap.
    """
    return a_start < b_end and b_start < a_end


def intervals_overlap(a: Interval, b: Interval) -> bool:
    return overlaps(a.start, a.end, b.start, b.end)
