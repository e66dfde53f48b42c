from datetime import date, time, timedelta

from salon_api.auth import create_access_token
from salon_api.config import get_settings
from salon_api.models import User

# 2026-10-19 is a Monday
MONDAY = date(2026, 10, 19)
TUESDAY = date(2026, 10, 20)
SUNDAY = date(2026, 10, 25)


def t(value: str) -> time:
    hour, minute = value.split(":")
    return time(int(hour), int(minute))


def next_open_day() -> date:
    """First day after business-today that the salon is open."""
    settings = get_settings()
    day = settings.business_today() + timedelta(days=1)
    while day.weekday() in settings.closed_weekdays:
        day += timedelta(days=1)
    return day


def auth_header(user: User) -> dict:
    return {"Authorization": f"Bearer {create_access_token({'sub': user.email})}"}
