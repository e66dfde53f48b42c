# salon_api/config.py

"""Runtime configuration, read once at startup."""

from __future__ import annotations

from datetime import date, datetime, time
from functools import lru_cache
from typing import List
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .core import TimeGrid


class Settings(BaseSettings):
    """Salon settings sourced from ``SALON_*`` environment variables or ``.env``."""

    database_url: str = "sqlite:///./salon.db"
    secret_key: SecretStr = SecretStr("change-me-later")
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 30

    timezone: str = "America/New_York"
    open_time: time = time(9, 0)
    close_time: time = time(18, 0)
    slot_minutes: int = Field(30, gt=0)
    closed_weekdays: List[int] = [6]  # 0=Mon ... 6=Sun
    booking_horizon_days: int = Field(30, ge=0)

    log_level: str = "INFO"
    seed_services: bool = True

    model_config = SettingsConfigDict(
        env_prefix="SALON_",
        env_file=(".env",),
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    @field_validator("closed_weekdays")
    @classmethod
    def check_weekdays(cls, value: List[int]) -> List[int]:
        for day in value:
            if not (0 <= day <= 6):
                raise ValueError("closed_weekdays must be integers between 0 and 6")
        return sorted(set(value))

    @field_validator("timezone")
    @classmethod
    def check_timezone(cls, value: str) -> str:
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError):
            raise ValueError(f"Unknown timezone {value!r}")
        return value

    def time_grid(self) -> TimeGrid:
        return TimeGrid(
            business_start=self.open_time,
            business_end=self.close_time,
            granularity_minutes=self.slot_minutes,
            closed_weekdays=frozenset(self.closed_weekdays),
        )

    def business_today(self) -> date:
        """Today's date in the salon's timezone."""
        return datetime.now(ZoneInfo(self.timezone)).date()


@lru_cache
def get_settings() -> Settings:
    return Settings()
