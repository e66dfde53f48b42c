# salon_api/core/grid.py

from dataclasses import dataclass
from datetime import date, time
from typing import FrozenSet, List, Optional

MINUTES_PER_DAY = 24 * 60
SUNDAY = 6


def to_minutes(t: time) -> int:
    return t.hour * 60 + t.minute


def from_minutes(minutes: int) -> time:
    if not 0 <= minutes < MINUTES_PER_DAY:
        raise ValueError(f"{minutes} minutes is outside a single day")
    return time(minutes // 60, minutes % 60)


@dataclass(frozen=True)
class TimeGrid:
    """
    Discrete slot grid for one business day.

    Slots start at ``business_start`` and step by ``granularity_minutes`` while
    the start is before ``business_end``. Weekdays use Python numbering
    (Monday=0 ... Sunday=6).
    """

    business_start: time = time(9, 0)
    business_end: time = time(18, 0)
    granularity_minutes: int = 30
    closed_weekdays: FrozenSet[int] = frozenset({SUNDAY})

    def __post_init__(self):
        if self.business_start >= self.business_end:
            raise ValueError("business_start must be before business_end")
        if self.granularity_minutes <= 0:
            raise ValueError("granularity_minutes must be positive")
        # accept any iterable of weekdays from config
        object.__setattr__(self, "closed_weekdays", frozenset(self.closed_weekdays))

    @property
    def start_minutes(self) -> int:
        return to_minutes(self.business_start)

    @property
    def end_minutes(self) -> int:
        return to_minutes(self.business_end)

    to_minutes = staticmethod(to_minutes)
    from_minutes = staticmethod(from_minutes)

    def is_closed(self, day: date) -> bool:
        return day.weekday() in self.closed_weekdays

    def enumerate_slots(self, day: Optional[date] = None) -> List[time]:
        if day is not None and self.is_closed(day):
            return []
        return [
            from_minutes(m)
            for m in range(self.start_minutes, self.end_minutes, self.granularity_minutes)
        ]

    def is_aligned(self, t: time) -> bool:
        if t.second or t.microsecond:
            return False
        return (to_minutes(t) - self.start_minutes) % self.granularity_minutes == 0

    def fits(self, start_minutes: int, duration_minutes: int) -> bool:
        """True if [start, start + duration) lies within business hours."""
        return (
            start_minutes >= self.start_minutes
            and start_minutes + duration_minutes <= self.end_minutes
        )

    def cell_of(self, minutes: int) -> int:
        """Index of the grid cell containing ``minutes`` (may be negative)."""
        return (minutes - self.start_minutes) // self.granularity_minutes

    def cells_touched(self, start_minutes: int, end_minutes: int) -> range:
        """Cell indexes intersecting the half-open span [start, end)."""
        return range(self.cell_of(start_minutes), self.cell_of(end_minutes - 1) + 1)
