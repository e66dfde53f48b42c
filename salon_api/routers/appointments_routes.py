# salon_api/routers/appointments_routes.py

from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from sqlmodel import Session, select

from salon_api import bookings
from salon_api.auth import get_current_user
from salon_api.config import Settings, get_settings
from salon_api.core import BookingProposal, BookingStatus, BookingValidator
from salon_api.db import get_session
from salon_api.deps import require_role
from salon_api.models import Appointment, User
from salon_api.routers.staff_routes import get_staff_or_404
from salon_api.schemas import AppointmentPublic, AppointmentRequest, UserRole

router = APIRouter(
    prefix="/appointments",
    tags=["appointments"],
)


def _get_appointment_or_404(session: Session, appt_id: int) -> Appointment:
    appointment = session.get(Appointment, appt_id)
    if appointment is None:
        raise HTTPException(status_code=404, detail="Appointment not found")
    return appointment


def _require_participant(user: User, appointment: Appointment):
    if user.id not in (appointment.customer_id, appointment.staff_id):
        raise HTTPException(status_code=403, detail="Forbidden")


@router.post("", response_model=AppointmentPublic, status_code=201)
def create_appointment(
    appt: AppointmentRequest,
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user),
    settings: Settings = Depends(get_settings),
):
    # 1) Customers book for themselves, staff book on behalf of a customer
    if current_user.role == UserRole.customer.value:
        customer_id = current_user.id
    else:
        if appt.customer_id is None:
            raise HTTPException(status_code=422, detail="customer_id is required when staff book")
        customer = session.get(User, appt.customer_id)
        if customer is None or customer.role != UserRole.customer.value:
            raise HTTPException(status_code=404, detail="Customer not found")
        customer_id = customer.id

    # 2) Staff member must exist
    if appt.staff_id is not None:
        get_staff_or_404(session, appt.staff_id)

    # 3) Validate against fresh data and insert under the staff/date lock
    proposal = BookingProposal(
        staff_id=appt.staff_id,
        service_id=appt.service_id,
        date=appt.appointment_date,
        start_time=appt.start_time,
    )
    validator = BookingValidator(settings.time_grid(), settings.booking_horizon_days)
    return bookings.create_booking(session, customer_id, proposal, validator, settings.business_today())


@router.get("/customer/{customer_id}", response_model=List[AppointmentPublic])
def list_customer_appointments(
    customer_id: int,
    status: Optional[BookingStatus] = None,
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user),
):
    if current_user.role != UserRole.staff.value and current_user.id != customer_id:
        raise HTTPException(status_code=403, detail="Forbidden")

    stmt = select(Appointment).where(Appointment.customer_id == customer_id)
    if status is not None:
        stmt = stmt.where(Appointment.status == status.value)
    stmt = stmt.order_by(Appointment.appointment_date, Appointment.start_time)

    return session.exec(stmt).all()


@router.get("/staff/{staff_id}", response_model=List[AppointmentPublic])
def list_staff_appointments(
    staff_id: int,
    status: Optional[BookingStatus] = None,
    on_date: Optional[date] = None,
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user),
):
    require_role(current_user, UserRole.staff.value)
    get_staff_or_404(session, staff_id)

    stmt = select(Appointment).where(Appointment.staff_id == staff_id)
    if on_date is not None:
        stmt = stmt.where(Appointment.appointment_date == on_date)
    if status is not None:
        stmt = stmt.where(Appointment.status == status.value)
    stmt = stmt.order_by(Appointment.appointment_date, Appointment.start_time)

    return session.exec(stmt).all()


@router.get("/staff/{staff_id}/date/{on_date}", response_model=List[AppointmentPublic])
def staff_appointments_by_date(
    staff_id: int,
    on_date: date,
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user),
):
    """Every booking (any status) for one staff member on one date."""
    get_staff_or_404(session, staff_id)
    return bookings.fetch_appointments(session, staff_id, on_date)


@router.get("/{appt_id}", response_model=AppointmentPublic)
def get_appointment(
    appt_id: int,
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user),
):
    appointment = _get_appointment_or_404(session, appt_id)
    _require_participant(current_user, appointment)
    return appointment


@router.put("/{appt_id}/cancel", response_model=AppointmentPublic)
def cancel_appointment(
    appt_id: int,
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user),
):
    # Authorization: customer who booked OR the staff member
    appointment = _get_appointment_or_404(session, appt_id)
    _require_participant(current_user, appointment)

    try:
        return bookings.cancel_booking(session, appt_id)
    except bookings.InvalidTransition as exc:
        raise HTTPException(status_code=409, detail=str(exc))


@router.put("/{appt_id}/complete", response_model=AppointmentPublic)
def complete_appointment(
    appt_id: int,
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user),
):
    require_role(current_user, UserRole.staff.value)
    appointment = _get_appointment_or_404(session, appt_id)
    if appointment.staff_id != current_user.id:
        raise HTTPException(status_code=403, detail="Forbidden")

    try:
        return bookings.complete_booking(session, appt_id)
    except bookings.InvalidTransition as exc:
        raise HTTPException(status_code=409, detail=str(exc))
