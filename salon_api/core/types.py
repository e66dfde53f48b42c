# salon_api/core/types.py

from dataclasses import dataclass
from datetime import date, time
from enum import Enum
from typing import Optional


class BookingStatus(str, Enum):
    scheduled = "SCHEDULED"
    completed = "COMPLETED"
    cancelled = "CANCELLED"


@dataclass(frozen=True)
class Interval:
    """Half-open [start, end) span of one day."""

    start: time
    end: time

    def __post_init__(self):
        if self.start >= self.end:
            raise ValueError(f"Interval start {self.start} must be before end {self.end}")


@dataclass(frozen=True)
class AppointmentBooking:
    # start/end are kept as received; the calculator handles malformed records
    staff_id: int
    date: date
    start: time
    end: time
    status: BookingStatus = BookingStatus.scheduled
    id: Optional[int] = None

    @property
    def blocks(self) -> bool:
        return self.status != BookingStatus.cancelled


@dataclass(frozen=True)
class ServiceSpec:
    id: int
    duration_minutes: int
    name: str = ""

    def __post_init__(self):
        if self.duration_minutes <= 0:
            raise ValueError("duration_minutes must be positive")


@dataclass(frozen=True)
class SlotStatus:
    start: time
    available: bool


@dataclass(frozen=True)
class BookingProposal:
    staff_id: Optional[int] = None
    service_id: Optional[int] = None
    date: Optional[date] = None
    start_time: Optional[time] = None


@dataclass(frozen=True)
class ValidatedBooking:
    staff_id: int
    service_id: int
    date: date
    interval: Interval
