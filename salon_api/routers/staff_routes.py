# salon_api/routers/staff_routes.py

from datetime import date, timedelta

from fastapi import APIRouter, Depends, HTTPException
from sqlmodel import Session

from salon_api.bookings import fetch_bookings
from salon_api.config import Settings, get_settings
from salon_api.core import SlotStatus, available_starts, compute_availability
from salon_api.db import get_session
from salon_api.models import Service, User
from salon_api.schemas import AvailabilityResponse, UserRole

router = APIRouter(
    prefix="/staff",
    tags=["staff"],
)


def get_staff_or_404(session: Session, staff_id: int) -> User:
    staff = session.get(User, staff_id)
    if staff is None or staff.role != UserRole.staff.value:
        raise HTTPException(status_code=404, detail="Staff member not found")
    return staff


@router.get("/{staff_id}/availability", response_model=AvailabilityResponse)
def staff_availability(
    staff_id: int,
    date: date,
    service_id: int,
    session: Session = Depends(get_session),
    settings: Settings = Depends(get_settings),
):
    # 1) Lookup staff member and service
    get_staff_or_404(session, staff_id)
    service = session.get(Service, service_id)
    if service is None:
        raise HTTPException(status_code=404, detail="Service not found")

    # 2) Dates outside the booking window have nothing bookable; the grid keeps its shape
    grid = settings.time_grid()
    bookings = fetch_bookings(session, staff_id, date)
    slots = compute_availability(staff_id, date, service.duration_minutes, bookings, grid)
    today = settings.business_today()
    if date < today or date > today + timedelta(days=settings.booking_horizon_days):
        slots = [SlotStatus(start=s.start, available=False) for s in slots]

    return {
        "staff_id": staff_id,
        "date": date,
        "service_id": service_id,
        "duration_minutes": service.duration_minutes,
        "slots": [{"start": s.start, "available": s.available} for s in slots],
        "available_starts": available_starts(slots),
    }
