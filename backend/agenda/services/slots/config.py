# backend/agenda/services/slots/config.py
"""
Booking policy for slot generation and date eligibility.
"""

import re
from dataclasses import dataclass
from functools import lru_cache

from ...config import settings

MINUTES_PER_DAY = 24 * 60

_TIME_RE = re.compile(r"^(\d{1,2}):(\d{2})(?::(\d{2}))?$")


@dataclass(frozen=True)
class BookingConfig:
    """
    Configuration for the booking engine.

    Attributes:
        slot_step_minutes: Grid step for candidate start times. Independent of
            the service duration: a longer service changes which steps are kept,
            never the step itself.
        horizon_days: How many days ahead a date can still be selected.
    """
    slot_step_minutes: int = 30
    horizon_days: int = 60

    def __post_init__(self):
        if self.slot_step_minutes <= 0 or MINUTES_PER_DAY % self.slot_step_minutes:
            raise ValueError(
                f"slot_step_minutes must be a positive divisor of {MINUTES_PER_DAY}, "
                f"got {self.slot_step_minutes}"
            )
        if self.horizon_days < 0:
            raise ValueError(f"horizon_days must be >= 0, got {self.horizon_days}")


@lru_cache
def get_booking_config() -> BookingConfig:
    """Booking configuration built from application settings (singleton)."""
    return BookingConfig(
        slot_step_minutes=settings.slot_step_minutes,
        horizon_days=settings.booking_horizon_days,
    )


def time_str_to_minutes(value: str) -> int:
    """
    "HH:MM" or "HH:MM:SS" → minutes since midnight.

    Seconds are accepted (storage may carry them) and dropped.
    """
    match = _TIME_RE.match(value.strip()) if isinstance(value, str) else None
    if not match:
        raise ValueError(f"Invalid time {value!r}, expected HH:MM")
    hour, minute = int(match.group(1)), int(match.group(2))
    if hour > 23 or minute > 59:
        raise ValueError(f"Invalid time {value!r}, expected HH:MM")
    return hour * 60 + minute


def minutes_to_time_str(minutes: int) -> str:
    """Minutes since midnight → "HH:MM". 24:00 is allowed as an end of day."""
    if minutes < 0 or minutes > MINUTES_PER_DAY:
        raise ValueError(f"Minutes out of range: {minutes}")
    return f"{minutes // 60:02d}:{minutes % 60:02d}"
