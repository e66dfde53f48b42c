# salon_api/models.py

from datetime import date as Date, datetime, time, timezone
from typing import Optional

from sqlalchemy import Index, text
from sqlmodel import Field, SQLModel

from .core import AppointmentBooking, BookingStatus


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class User(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    email: str = Field(index=True, unique=True)
    password_hash: str
    first_name: str = ""
    last_name: str = ""
    phone: str = ""
    role: str = Field(index=True)  # CUSTOMER or STAFF
    created_at: datetime = Field(default_factory=_utcnow)


class Service(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    name: str
    description: str = ""
    price: float
    duration_minutes: int
    category: str = Field(index=True)
    created_at: datetime = Field(default_factory=_utcnow)


class Appointment(SQLModel, table=True):
    __table_args__ = (
        # one live appointment per staff member and start time; cancelled rows free it
        Index(
            "uq_staff_date_start_live",
            "staff_id",
            "appointment_date",
            "start_time",
            unique=True,
            sqlite_where=text("status != 'CANCELLED'"),
            postgresql_where=text("status != 'CANCELLED'"),
        ),
    )

    id: Optional[int] = Field(default=None, primary_key=True)

    customer_id: int = Field(foreign_key="user.id", index=True)
    staff_id: int = Field(foreign_key="user.id", index=True)
    service_id: int = Field(foreign_key="service.id")
    appointment_date: Date = Field(index=True)
    start_time: time
    end_time: time
    status: str = BookingStatus.scheduled.value
    created_at: datetime = Field(default_factory=_utcnow)

    def to_booking(self) -> AppointmentBooking:
        return AppointmentBooking(
            staff_id=self.staff_id,
            date=self.appointment_date,
            start=self.start_time,
            end=self.end_time,
            status=BookingStatus(self.status),
            id=self.id,
        )
