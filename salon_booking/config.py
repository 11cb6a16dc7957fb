from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    database_url: str | None = None  # e.g. sqlite+aiosqlite:///salon.db

    slot_granularity_minutes: int = Field(default=30, gt=0)
    default_min_booking_notice_hours: float = Field(default=2.0, ge=0)
    reschedule_min_hours: float = Field(default=24.0, ge=0)
    cancellation_min_hours: float = Field(default=2.0, ge=0)
    default_currency: str = Field(default="USD", min_length=3, max_length=3)

    # Horario por defecto de sucursales nuevas
    weekday_open: str = "09:00"
    weekday_close: str = "18:00"
    weekend_open: str = "10:00"
    weekend_close: str = "16:00"

    log_level: str = "INFO"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
