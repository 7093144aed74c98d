from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Literal, Optional


class ReminderSettings(BaseSettings):
    # Generation window and output cap
    WINDOW_HOURS: int = 24
    DEFAULT_LIMIT: int = 100
    MAX_LIMIT: int = 200

    # Daily dose times
    TIMEZONE: str = "UTC"  # zone the daily dose times are read in

    # Dismissal expiry
    DISMISS_GRACE_MINUTES: int = 5
    DISMISS_FALLBACK_HOURS: int = 24
    DISMISSAL_BACKEND: Literal["database", "redis"] = "database"

    # Celery (expired dismissal sweep)
    CELERY_BROKER_URL: Optional[str] = None
    CELERY_RESULT_BACKEND: Optional[str] = None
    SWEEP_INTERVAL_SECONDS: int = 3600

    # Metrics
    METRICS_ENABLED: bool = True

    model_config = SettingsConfigDict(env_prefix="REMINDER_", env_file=".env", extra="ignore")


settings = ReminderSettings()
