from datetime import date, datetime, timezone
from unittest.mock import patch

import pytest
from pydantic import ValidationError
from sqlmodel import select

from salon_api.config import Settings
from salon_api.data import SERVICES, seed_services
from salon_api.models import Service
from tests.helpers import t


def test_defaults():
    settings = Settings(_env_file=None)
    grid = settings.time_grid()

    assert grid.business_start == t("09:00")
    assert grid.business_end == t("18:00")
    assert grid.granularity_minutes == 30
    assert grid.closed_weekdays == frozenset({6})
    assert settings.booking_horizon_days == 30


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("SALON_OPEN_TIME", "10:00")
    monkeypatch.setenv("SALON_CLOSE_TIME", "16:00")
    monkeypatch.setenv("SALON_SLOT_MINUTES", "15")
    monkeypatch.setenv("SALON_CLOSED_WEEKDAYS", "[0, 6, 6]")

    grid = Settings(_env_file=None).time_grid()

    assert grid.enumerate_slots()[:2] == [t("10:00"), t("10:15")]
    assert len(grid.enumerate_slots()) == 24
    assert grid.closed_weekdays == frozenset({0, 6})


def test_invalid_settings(monkeypatch):
    monkeypatch.setenv("SALON_CLOSED_WEEKDAYS", "[7]")
    with pytest.raises(ValidationError):
        Settings(_env_file=None)

    monkeypatch.delenv("SALON_CLOSED_WEEKDAYS")
    monkeypatch.setenv("SALON_TIMEZONE", "Mars/Olympus_Mons")
    with pytest.raises(ValidationError):
        Settings(_env_file=None)


@patch("salon_api.config.datetime")
def test_business_today_uses_salon_timezone(mock_datetime):
    # 03:00 UTC on New Year's Day is still New Year's Eve in New York
    instant = datetime(2026, 1, 1, 3, 0, tzinfo=timezone.utc)
    mock_datetime.now.side_effect = lambda tz: instant.astimezone(tz)

    assert Settings(_env_file=None, timezone="America/New_York").business_today() == date(2025, 12, 31)
    assert Settings(_env_file=None, timezone="Asia/Tokyo").business_today() == date(2026, 1, 1)


def test_seed_services_only_fills_an_empty_catalog(session):
    assert seed_services(session) == len(SERVICES)
    assert seed_services(session) == 0
    assert len(session.exec(select(Service)).all()) == len(SERVICES)
