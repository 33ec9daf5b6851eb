# meeting_scheduler/core/config.py
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Global application configuration.

    Values are loaded from environment variables (or a local `.env` file)
    at runtime and cover:
    - DB connection
    - Logging
    - Tuning knobs for the next-available-slot search
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
    )

    APP_NAME: str = "Meeting Scheduler"
    APP_ENV: str = Field("local", description="Environment name: local/dev/stage/prod")

    DB_URL: str = Field(
        "sqlite+aiosqlite:///./meeting_scheduler.db",
        description="SQLAlchemy-compatible async database URL",
    )

    LOG_LEVEL: str = Field(
        "INFO",
        description="Root log level for the service (DEBUG, INFO, WARNING, ...).",
    )

    # --- Slot search ---
    SLOT_SEARCH_HORIZON_DAYS: int = Field(
        default=30,
        ge=1,
        description="How far past 'now' the slot search may probe before giving up.",
    )
    SLOT_SUGGESTION_COUNT: int = Field(
        default=3,
        ge=1,
        description="Number of alternative slots proposed when a request conflicts.",
    )
    SLOT_PROGRESS_STEP_MINUTES: int = Field(
        default=15,
        ge=1,
        description=(
            "Extra advance applied when a blocking meeting ends exactly on the "
            "probe boundary being tested."
        ),
    )


@lru_cache()
def get_settings() -> Settings:
    """
    Cached accessor for application settings.

    Using LRU cache ensures settings are read and validated only once,
    while still being easily importable across the app.
    """
    return Settings()
