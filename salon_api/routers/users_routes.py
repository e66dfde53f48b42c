# salon_api/routers/users_routes.py

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from sqlmodel import Session, select

from salon_api.auth import get_current_user, get_optional_user, hash_password, verify_password
from salon_api.db import get_session
from salon_api.deps import require_role
from salon_api.models import User
from salon_api.schemas import PasswordChange, ProfileUpdate, UserCreate, UserPublic, UserRole

router = APIRouter(
    tags=["users"],
)


@router.get("/me", response_model=UserPublic)
def me(current_user: User = Depends(get_current_user)):
    return current_user


@router.put("/me", response_model=UserPublic)
def update_profile(
    profile: ProfileUpdate,
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user),
):
    current_user.first_name = profile.first_name
    current_user.last_name = profile.last_name
    current_user.phone = profile.phone
    session.add(current_user)
    session.commit()
    session.refresh(current_user)
    return current_user


@router.put("/me/password", status_code=204)
def change_password(
    change: PasswordChange,
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user),
):
    if not verify_password(change.old_password, current_user.password_hash):
        raise HTTPException(status_code=400, detail="Current password is incorrect")

    current_user.password_hash = hash_password(change.new_password)
    session.add(current_user)
    session.commit()


@router.post("/users", status_code=201, response_model=UserPublic)
def create_user(
    user: UserCreate,
    session: Session = Depends(get_session),
    current_user: Optional[User] = Depends(get_optional_user),
):
    # 1) Only staff may add staff accounts
    if user.role == UserRole.staff:
        if current_user is None:
            raise HTTPException(status_code=401, detail="Sign in as staff to add staff members")
        require_role(current_user, UserRole.staff.value)

    # 2) Check if email already exists
    existing = session.exec(
        select(User).where(User.email == user.email)
    ).first()
    if existing is not None:
        raise HTTPException(status_code=409, detail="Email already registered")

    # 3) Create user in DB
    db_user = User(
        email=user.email,
        password_hash=hash_password(user.password),
        first_name=user.first_name,
        last_name=user.last_name,
        phone=user.phone,
        role=user.role.value,
    )

    session.add(db_user)
    session.commit()
    session.refresh(db_user)  # fills db_user.id

    return db_user


@router.get("/users/role/{role}", response_model=List[UserPublic])
def list_users_by_role(
    role: UserRole,
    session: Session = Depends(get_session),
):
    return session.exec(
        select(User).where(User.role == role.value).order_by(User.last_name, User.first_name)
    ).all()
