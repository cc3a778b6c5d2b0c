"""Application configuration helpers."""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
import os

from sqlalchemy.engine import make_url
from sqlalchemy.exc import ArgumentError

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 3000
DEFAULT_ENV = "development"
DEFAULT_DATABASE_URL = "sqlite:///./hellokit.db"
DEFAULT_CORS_ALLOWED_ORIGINS = ("http://localhost:3000",)
DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_RATE_LIMIT_WINDOW_SECONDS = 900
DEFAULT_RATE_LIMIT_MAX = 100


def _get_int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError:
        return default
    if value < 0:
        return default
    return value


def _get_bool_env(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() not in {"0", "false", "no", "off"}


def _get_list_env(name: str, default: tuple[str, ...]) -> tuple[str, ...]:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return tuple(item.strip() for item in raw.split(",") if item.strip())


def redact_database_url(url: str) -> str:
    """Return the database URL with any password hidden."""
    try:
        parsed = make_url(url)
    except ArgumentError:
        return "<unparseable>"
    return parsed.render_as_string(hide_password=True)


@dataclass(frozen=True)
class Settings:
    """Runtime settings for the HTTP service."""

    host: str
    port: int
    env: str
    database_url: str
    cors_allowed_origins: tuple[str, ...]
    log_level: str
    rate_limit_enabled: bool = True
    rate_limit_window_seconds: int = DEFAULT_RATE_LIMIT_WINDOW_SECONDS
    rate_limit_max: int = DEFAULT_RATE_LIMIT_MAX

    @property
    def is_production(self) -> bool:
        return self.env == "production"

    def safe_for_logging(self) -> dict[str, str | int | bool | list[str]]:
        """Return settings safe for logs."""
        return {
            "host": self.host,
            "port": self.port,
            "env": self.env,
            "database_url": redact_database_url(self.database_url),
            "cors_allowed_origins": list(self.cors_allowed_origins),
            "log_level": self.log_level,
            "rate_limit_enabled": self.rate_limit_enabled,
            "rate_limit_window_seconds": self.rate_limit_window_seconds,
            "rate_limit_max": self.rate_limit_max,
        }


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Load service settings from the environment."""
    return Settings(
        host=os.getenv("HELLOKIT_HOST", DEFAULT_HOST),
        port=_get_int_env("HELLOKIT_PORT", DEFAULT_PORT),
        env=os.getenv("HELLOKIT_ENV", DEFAULT_ENV),
        database_url=os.getenv("HELLOKIT_DATABASE_URL", DEFAULT_DATABASE_URL),
        cors_allowed_origins=_get_list_env("HELLOKIT_CORS_ALLOWED_ORIGINS", DEFAULT_CORS_ALLOWED_ORIGINS),
        log_level=os.getenv("HELLOKIT_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper(),
        rate_limit_enabled=_get_bool_env("HELLOKIT_RATE_LIMIT_ENABLED", True),
        rate_limit_window_seconds=_get_int_env(
            "HELLOKIT_RATE_LIMIT_WINDOW_SECONDS", DEFAULT_RATE_LIMIT_WINDOW_SECONDS
        ),
        rate_limit_max=_get_int_env("HELLOKIT_RATE_LIMIT_MAX", DEFAULT_RATE_LIMIT_MAX),
    )
