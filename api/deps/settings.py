from __future__ import annotations

from decimal import Decimal
from functools import lru_cache
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Settings(BaseSettings):
    ENV: str = "dev"
    DB_PATH: str = "data/journal.sqlite"

    # Fallbacks for users without stored settings
    DEFAULT_TIMEZONE: str = "America/New_York"
    DEFAULT_CURRENCY: str = "USD"
    DEFAULT_COMMISSION: Decimal = Decimal("0.65")

    PREVIEW_TTL_SECONDS: float = 1800.0
    LOG_LEVEL: str = "INFO"

    @field_validator("LOG_LEVEL")
    @classmethod
    def _known_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}")
        return level

    # Pydantic v2 config
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


@lru_cache()
def get_settings() -> Settings:
    return Settings()
