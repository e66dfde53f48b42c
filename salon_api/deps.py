# salon_api/deps.py

from fastapi import HTTPException

from .models import User


def require_role(user: User, role: str):
    if user.role != role:
        raise HTTPException(status_code=403, detail="Forbidden")
