# salon_api/bookings.py

"""
Booking write path

The API is the system of record for appointments. Clients validate locally
against a snapshot that may be stale, so every write here:
    1. Takes the lock for (staff_id, date)
    2. Re-reads that staff member's bookings for the date
    3. Re-runs the BookingValidator against the fresh snapshot
    4. Inserts, relying on the live-start unique index as a last guard

The lock is per process. Several API processes sharing one database fall
back to the unique index, which only catches identical start times.
"""

import logging
import threading
import weakref
from datetime import date
from typing import Dict, List, Tuple

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from .core import (
    AppointmentBooking,
    BookingProposal,
    BookingStatus,
    BookingValidator,
    ConflictError,
    ServiceSpec,
    SlotConflict,
    ValidatedBooking,
)
from .models import Appointment, Service

logger = logging.getLogger(__name__)

_locks_guard = threading.Lock()
# an entry lives only while some request holds a reference to its lock
_staff_day_locks: weakref.WeakValueDictionary[Tuple[int, date], threading.Lock] = weakref.WeakValueDictionary()


class AppointmentNotFound(Exception):
    pass


class InvalidTransition(Exception):
    pass


def staff_day_lock(staff_id: int, day: date) -> threading.Lock:
    with _locks_guard:
        lock = _staff_day_locks.get((staff_id, day))
        if lock is None:
            lock = _staff_day_locks[(staff_id, day)] = threading.Lock()
        return lock


def fetch_appointments(session: Session, staff_id: int, day: date) -> List[Appointment]:
    """All appointments (any status) for one staff member on one date."""
    return list(session.exec(
        select(Appointment)
        .where(Appointment.staff_id == staff_id)
        .where(Appointment.appointment_date == day)
        .order_by(Appointment.start_time)
    ).all())


def fetch_bookings(session: Session, staff_id: int, day: date) -> List[AppointmentBooking]:
    return [a.to_booking() for a in fetch_appointments(session, staff_id, day)]


def service_catalog(session: Session) -> Dict[int, ServiceSpec]:
    return {
        s.id: ServiceSpec(id=s.id, duration_minutes=s.duration_minutes, name=s.name)
        for s in session.exec(select(Service)).all()
    }


def create_booking(
    session: Session,
    customer_id: int,
    proposal: BookingProposal,
    validator: BookingValidator,
    today: date,
) -> Appointment:
    """
    Authoritative booking creation.

    Raises the validator's errors unchanged, except that a conflict found here
    is reported as ConflictError: another booking was accepted first.
    """
    if proposal.staff_id is None or proposal.date is None:
        # nothing to lock on; let the validator report what is missing
        validator.validate(proposal, [], service_catalog(session), today)

    with staff_day_lock(proposal.staff_id, proposal.date):
        # drop anything cached from before the lock was taken
        session.expire_all()
        snapshot = fetch_bookings(session, proposal.staff_id, proposal.date)
        try:
            validated = validator.validate(proposal, snapshot, service_catalog(session), today)
        except SlotConflict as exc:
            logger.info(
                "Rejected booking for staff %s on %s at %s: slot taken",
                proposal.staff_id, proposal.date, proposal.start_time,
            )
            raise ConflictError("That time slot was just taken, please choose another") from exc

        appointment = _insert(session, customer_id, validated)

    logger.info(
        "Booked appointment %s: staff %s, %s %s-%s",
        appointment.id, appointment.staff_id, appointment.appointment_date,
        appointment.start_time, appointment.end_time,
    )
    return appointment


def _insert(session: Session, customer_id: int, validated: ValidatedBooking) -> Appointment:
    appointment = Appointment(
        customer_id=customer_id,
        staff_id=validated.staff_id,
        service_id=validated.service_id,
        appointment_date=validated.date,
        start_time=validated.interval.start,
        end_time=validated.interval.end,
        status=BookingStatus.scheduled.value,
    )
    session.add(appointment)
    try:
        session.commit()
    except IntegrityError as exc:
        session.rollback()
        raise ConflictError("Appointment already exists for that start time") from exc
    session.refresh(appointment)
    return appointment


def _transition(session: Session, appointment_id: int, target: BookingStatus) -> Appointment:
    appointment = session.get(Appointment, appointment_id)
    if appointment is None:
        raise AppointmentNotFound(f"Appointment {appointment_id} not found")

    if appointment.status != BookingStatus.scheduled.value:
        raise InvalidTransition(
            f"Appointment {appointment_id} is {appointment.status.lower()}, "
            f"cannot mark it {target.value.lower()}"
        )

    appointment.status = target.value
    session.add(appointment)
    session.commit()
    session.refresh(appointment)
    logger.info("Appointment %s marked %s", appointment_id, target.value)
    return appointment


def cancel_booking(session: Session, appointment_id: int) -> Appointment:
    return _transition(session, appointment_id, BookingStatus.cancelled)


def complete_booking(session: Session, appointment_id: int) -> Appointment:
    return _transition(session, appointment_id, BookingStatus.completed)
