import logging
import os
import threading

from dotenv import load_dotenv
from pydantic import BaseModel, Field


load_dotenv()

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ValueError(f"{name} must be a boolean value")


class Settings(BaseModel):
    app_name: str = Field(default="RBAC Directory")
    debug: bool = Field(default=False)
    log_level: str = Field(default="INFO")
    seed_demo_data: bool = Field(default=True)
    notification_duration_ms: int = Field(default=3000)

    @classmethod
    def from_env(cls) -> "Settings":
        log_level = os.getenv("LOG_LEVEL", cls.model_fields["log_level"].default).strip().upper()
        if not isinstance(logging.getLevelName(log_level), int):
            raise ValueError(f"LOG_LEVEL '{log_level}' is not a known logging level")

        seed_demo_data = _parse_bool(
            "SEED_DEMO_DATA",
            os.getenv("SEED_DEMO_DATA", str(cls.model_fields["seed_demo_data"].default)),
        )

        raw_duration = os.getenv(
            "NOTIFICATION_DURATION_MS",
            str(cls.model_fields["notification_duration_ms"].default),
        ).strip()
        try:
            notification_duration_ms = int(raw_duration)
        except ValueError as exc:
            raise ValueError("NOTIFICATION_DURATION_MS must be an integer") from exc
        if notification_duration_ms <= 0:
            raise ValueError("NOTIFICATION_DURATION_MS must be greater than 0")

        return cls(
            app_name=os.getenv("APP_NAME", cls.model_fields["app_name"].default),
            debug=_parse_bool("DEBUG", os.getenv("DEBUG", "false")),
            log_level=log_level,
            seed_demo_data=seed_demo_data,
            notification_duration_ms=notification_duration_ms,
        )


_settings_instance: Settings | None = None
_settings_lock = threading.Lock()


def get_settings() -> Settings:
    """Get settings instance, creating it on first access.

    The module can be imported without touching the environment; validation
    happens the first time settings are read (typically at startup).

    Raises:
        ValueError: If an environment variable holds an invalid value
    """
    global _settings_instance

    if _settings_instance is not None:
        return _settings_instance

    with _settings_lock:
        if _settings_instance is None:
            _settings_instance = Settings.from_env()

    return _settings_instance


def reset_settings() -> None:
    """Drop the cached settings so the next access re-reads the environment."""
    global _settings_instance
    with _settings_lock:
        _settings_instance = None

