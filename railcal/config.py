"""
Centralized configuration with environment variable overrides.

Gateway location, request limits, the booking window and session
defaults are configurable here. Nothing is hardcoded in calendar or
gateway logic.
"""

import logging
import os
from dataclasses import dataclass, field
from typing import Optional

from dotenv import load_dotenv

from railcal.logging_context import CalendarIdFilter

load_dotenv()

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s [%(name)s] [%(calendar_id)s] %(levelname)s: %(message)s"


def _safe_int(env_var: str, default: str) -> int:
    """Parse an integer from an env var with a clear error on bad values."""
    raw = os.getenv(env_var, default)
    try:
        return int(raw)
    except (ValueError, TypeError):
        raise ValueError(
            f"Invalid integer for {env_var}: {raw!r}"
        ) from None


def _safe_float(env_var: str, default: str) -> float:
    """Parse a float from an env var with a clear error on bad values."""
    raw = os.getenv(env_var, default)
    try:
        return float(raw)
    except (ValueError, TypeError):
        raise ValueError(
            f"Invalid float for {env_var}: {raw!r}"
        ) from None


def _optional_str(env_var: str) -> Optional[str]:
    raw = os.getenv(env_var, "").strip()
    return raw or None


@dataclass(frozen=True)
class ApiConfig:
    """API gateway location and per-request limits."""

    gateway_url: str = os.getenv("API_GATEWAY_URL", "http://localhost:8080")
    request_timeout_sec: float = _safe_float("REQUEST_TIMEOUT_SEC", "10.0")
    max_concurrent_requests: int = _safe_int("MAX_CONCURRENT_REQUESTS", "8")


@dataclass(frozen=True)
class BookingWindowConfig:
    """Rolling horizon within which travel dates may be reserved."""

    window_days: int = _safe_int("BOOKING_WINDOW_DAYS", "90")


@dataclass(frozen=True)
class SessionConfig:
    """Session token and opportunistic selection persistence."""

    token: Optional[str] = _optional_str("SESSION_TOKEN")
    selection_store_path: Optional[str] = _optional_str("SELECTION_STORE_PATH")


@dataclass(frozen=True)
class AppConfig:
    """Root configuration aggregating all sub-configs."""

    api: ApiConfig = field(default_factory=ApiConfig)
    window: BookingWindowConfig = field(default_factory=BookingWindowConfig)
    session: SessionConfig = field(default_factory=SessionConfig)
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    app_name: str = os.getenv("APP_NAME", "railcal")


def _validate_config(config: AppConfig) -> None:
    """Validate configuration values are within acceptable ranges."""
    if not config.api.gateway_url.startswith(("http://", "https://")):
        raise ValueError(
            f"API_GATEWAY_URL must be an http(s) URL, got {config.api.gateway_url!r}"
        )
    if config.api.request_timeout_sec <= 0:
        raise ValueError(
            f"REQUEST_TIMEOUT_SEC must be > 0, got {config.api.request_timeout_sec}"
        )
    if config.api.max_concurrent_requests < 1:
        raise ValueError(
            "MAX_CONCURRENT_REQUESTS must be >= 1, "
            f"got {config.api.max_concurrent_requests}"
        )
    if config.window.window_days < 1:
        raise ValueError(
            f"BOOKING_WINDOW_DAYS must be >= 1, got {config.window.window_days}"
        )


def _configure_logging(level_name: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level_name.upper(), logging.INFO),
        format=LOG_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    for handler in logging.getLogger().handlers:
        if not any(isinstance(f, CalendarIdFilter) for f in handler.filters):
            handler.addFilter(CalendarIdFilter())


def load_config() -> AppConfig:
    """Load and validate application configuration."""
    config = AppConfig()
    _validate_config(config)
    _configure_logging(config.log_level)
    logger.info(
        "Configuration loaded for '%s' (gateway %s, %d-day window)",
        config.app_name, config.api.gateway_url, config.window.window_days,
    )
    return config


# Singleton instance
settings = load_config()
