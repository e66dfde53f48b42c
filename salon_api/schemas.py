# salon_api/schemas.py

from datetime import date, datetime, time
from enum import Enum
from typing import Annotated, List, Optional

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, PlainSerializer

from .core import BookingStatus

# 24-hour "HH:MM" on the wire
ClockTime = Annotated[time, PlainSerializer(lambda t: t.strftime("%H:%M"), return_type=str)]


def _local_time(value: Optional[time]) -> Optional[time]:
    # salon times are wall-clock times in the salon's own timezone
    if value is not None and value.tzinfo is not None:
        raise ValueError("time must not carry a UTC offset")
    return value


LocalTime = Annotated[Optional[time], AfterValidator(_local_time)]


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"


class UserRole(str, Enum):
    customer = "CUSTOMER"
    staff = "STAFF"


class ServiceCategory(str, Enum):
    manicure = "MANICURE"
    pedicure = "PEDICURE"
    gel = "GEL"
    nail_art = "NAIL_ART"
    treatment = "TREATMENT"


class UserPublic(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    first_name: str
    last_name: str
    phone: str
    role: UserRole


class UserCreate(BaseModel):
    email: str
    password: str = Field(min_length=8, max_length=72)
    first_name: str = ""
    last_name: str = ""
    phone: str = ""
    role: UserRole = UserRole.customer


class ProfileUpdate(BaseModel):
    first_name: str
    last_name: str
    phone: str


class PasswordChange(BaseModel):
    old_password: str
    new_password: str = Field(min_length=8, max_length=72)


class ServiceBase(BaseModel):
    name: str
    description: str = ""
    price: float = Field(ge=0)
    duration_minutes: int = Field(gt=0)
    category: ServiceCategory


class ServiceCreate(ServiceBase):
    pass


class ServiceUpdate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    price: Optional[float] = Field(default=None, ge=0)
    duration_minutes: Optional[int] = Field(default=None, gt=0)
    category: Optional[ServiceCategory] = None


class ServicePublic(ServiceBase):
    model_config = ConfigDict(from_attributes=True)

    id: int


class AppointmentRequest(BaseModel):
    # all optional so missing fields reach the booking validator
    customer_id: Optional[int] = None
    staff_id: Optional[int] = None
    service_id: Optional[int] = None
    appointment_date: Optional[date] = None
    start_time: LocalTime = None


class AppointmentPublic(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    customer_id: int
    staff_id: int
    service_id: int
    appointment_date: date
    start_time: ClockTime
    end_time: ClockTime
    status: BookingStatus
    created_at: Optional[datetime] = None


class SlotPublic(BaseModel):
    start: ClockTime
    available: bool


class AvailabilityResponse(BaseModel):
    staff_id: int
    date: date
    service_id: int
    duration_minutes: int
    slots: List[SlotPublic]
    available_starts: List[ClockTime]


class ErrorResponse(BaseModel):
    detail: str
    code: str
