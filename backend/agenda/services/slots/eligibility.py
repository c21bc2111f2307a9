# backend/agenda/services/slots/eligibility.py
"""
Date eligibility: which calendar days the booking UI lets a client pick.

Advisory only. Admission re-validates every request on its own.
"""

from datetime import date, timedelta

from .calendar import CalendarRules
from .config import BookingConfig, get_booking_config


def is_date_selectable(
    rules: CalendarRules,
    target_date: date,
    config: BookingConfig | None = None,
    today: date | None = None,
) -> bool:
    """
    False for days before today, days past the booking horizon
    (today + horizon_days is still selectable) and closed weekdays.
    """
    config = config or get_booking_config()
    today = today or date.today()

    if target_date < today:
        return False
    if target_date > today + timedelta(days=config.horizon_days):
        return False
    return rules.is_open(target_date)


def selectable_dates(
    rules: CalendarRules,
    config: BookingConfig | None = None,
    today: date | None = None,
) -> list[date]:
    """All selectable days from today to the end of the horizon, in order."""
    config = config or get_booking_config()
    today = today or date.today()

    return [
        day
        for day in booking_window(today, today + timedelta(days=config.horizon_days))
        if is_date_selectable(rules, day, config, today)
    ]


def booking_window(start: date, end: date) -> list[date]:
    """Days in [start, end], inclusive. Empty when end < start."""
    days = []
    current = start
    while current <= end:
        days.append(current)
        current += timedelta(days=1)
    return days
