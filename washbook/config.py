"""
Centralized configuration with environment variable overrides.

Slot sizes, default availability hours, and logging settings live here
so the wizard and the availability resolver never hardcode them.
"""

import logging
import os
import re
from dataclasses import dataclass, field

from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)

_CLOCK_RE = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


def _safe_int(env_var: str, default: str) -> int:
    """Parse an integer from an env var with a clear error on bad values."""
    raw = os.getenv(env_var, default)
    try:
        return int(raw)
    except (ValueError, TypeError):
        raise ValueError(
            f"Invalid integer for {env_var}: {raw!r}"
        ) from None


def _safe_int_list(env_var: str, default: str) -> tuple[int, ...]:
    """Parse a comma-separated list of integers from an env var."""
    raw = os.getenv(env_var, default)
    try:
        return tuple(int(part) for part in raw.split(",") if part.strip())
    except (ValueError, TypeError):
        raise ValueError(
            f"Invalid integer list for {env_var}: {raw!r}"
        ) from None


@dataclass(frozen=True)
class BookingConfig:
    """Booking wizard defaults."""

    default_slot_minutes: int = _safe_int("DEFAULT_SLOT_MINUTES", "60")
    default_service_duration: int = _safe_int("DEFAULT_SERVICE_DURATION", "60")
    default_location_label: str = os.getenv("DEFAULT_LOCATION_LABEL", "Customer Location")
    currency: str = os.getenv("CURRENCY", "USD")


@dataclass(frozen=True)
class AvailabilityConfig:
    """Provider availability defaults and query limits."""

    default_days: tuple[int, ...] = _safe_int_list("DEFAULT_AVAILABILITY_DAYS", "1,2,3,4,5")
    default_start: str = os.getenv("DEFAULT_AVAILABILITY_START", "09:00")
    default_end: str = os.getenv("DEFAULT_AVAILABILITY_END", "17:00")
    max_slot_range_days: int = _safe_int("MAX_SLOT_RANGE_DAYS", "31")


@dataclass(frozen=True)
class AppConfig:
    """Root configuration aggregating all sub-configs."""

    booking: BookingConfig = field(default_factory=BookingConfig)
    availability: AvailabilityConfig = field(default_factory=AvailabilityConfig)
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    app_name: str = os.getenv("APP_NAME", "washbook")


def _validate_config(config: AppConfig) -> None:
    """Validate configuration values are within acceptable ranges."""
    if config.booking.default_slot_minutes < 1:
        raise ValueError(
            f"DEFAULT_SLOT_MINUTES must be >= 1, got {config.booking.default_slot_minutes}"
        )
    if config.booking.default_service_duration < 1:
        raise ValueError(
            "DEFAULT_SERVICE_DURATION must be >= 1, "
            f"got {config.booking.default_service_duration}"
        )
    if len(config.booking.currency) != 3:
        raise ValueError(
            f"CURRENCY must be a 3-letter code, got {config.booking.currency!r}"
        )

    avail = config.availability
    if not avail.default_days:
        raise ValueError("DEFAULT_AVAILABILITY_DAYS must list at least one day")
    for day in avail.default_days:
        if not 0 <= day <= 6:
            raise ValueError(
                f"DEFAULT_AVAILABILITY_DAYS entries must be 0-6, got {day}"
            )
    for name, value in [
        ("DEFAULT_AVAILABILITY_START", avail.default_start),
        ("DEFAULT_AVAILABILITY_END", avail.default_end),
    ]:
        if not _CLOCK_RE.match(value):
            raise ValueError(f"{name} must be HH:MM, got {value!r}")
    if avail.default_start >= avail.default_end:
        raise ValueError(
            "DEFAULT_AVAILABILITY_START must be before DEFAULT_AVAILABILITY_END, "
            f"got {avail.default_start}-{avail.default_end}"
        )
    if avail.max_slot_range_days < 1:
        raise ValueError(
            f"MAX_SLOT_RANGE_DAYS must be >= 1, got {avail.max_slot_range_days}"
        )


def load_config() -> AppConfig:
    """Load and validate application configuration."""
    config = AppConfig()
    _validate_config(config)
    logging.basicConfig(
        level=getattr(logging, config.log_level.upper(), logging.INFO),
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    logger.info("Configuration loaded for '%s'", config.app_name)
    return config


# Singleton instance
settings = load_config()
