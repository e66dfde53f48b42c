# salon_api/routers/services_routes.py

from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlmodel import Session, select

from salon_api.auth import get_current_user
from salon_api.db import get_session
from salon_api.deps import require_role
from salon_api.models import Appointment, Service, User
from salon_api.schemas import ServiceCategory, ServiceCreate, ServicePublic, ServiceUpdate, UserRole

router = APIRouter(
    prefix="/services",
    tags=["services"],
)


def _get_service_or_404(session: Session, service_id: int) -> Service:
    service = session.get(Service, service_id)
    if service is None:
        raise HTTPException(status_code=404, detail="Service not found")
    return service


@router.get("", response_model=List[ServicePublic])
def list_services(session: Session = Depends(get_session)):
    return session.exec(select(Service).order_by(Service.category, Service.name)).all()


@router.get("/category/{category}", response_model=List[ServicePublic])
def list_services_by_category(
    category: ServiceCategory,
    session: Session = Depends(get_session),
):
    return session.exec(
        select(Service).where(Service.category == category.value).order_by(Service.name)
    ).all()


@router.get("/{service_id}", response_model=ServicePublic)
def get_service(service_id: int, session: Session = Depends(get_session)):
    return _get_service_or_404(session, service_id)


@router.post("", response_model=ServicePublic, status_code=201)
def create_service(
    service: ServiceCreate,
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user),
):
    require_role(current_user, UserRole.staff.value)

    db_service = Service(**service.model_dump(exclude={"category"}), category=service.category.value)
    session.add(db_service)
    session.commit()
    session.refresh(db_service)
    return db_service


@router.put("/{service_id}", response_model=ServicePublic)
def update_service(
    service_id: int,
    changes: ServiceUpdate,
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user),
):
    require_role(current_user, UserRole.staff.value)
    db_service = _get_service_or_404(session, service_id)

    for field, value in changes.model_dump(exclude_unset=True, exclude_none=True).items():
        if field == "category":
            value = value.value
        setattr(db_service, field, value)

    session.add(db_service)
    session.commit()
    session.refresh(db_service)
    return db_service


@router.delete("/{service_id}", status_code=204)
def delete_service(
    service_id: int,
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user),
):
    require_role(current_user, UserRole.staff.value)
    db_service = _get_service_or_404(session, service_id)

    # existing appointments keep pointing at the service
    in_use = session.exec(
        select(Appointment).where(Appointment.service_id == service_id)
    ).first()
    if in_use is not None:
        raise HTTPException(status_code=409, detail="Service has appointments and cannot be deleted")

    session.delete(db_service)
    session.commit()
