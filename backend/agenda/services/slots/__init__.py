# backend/agenda/services/slots/__init__.py
"""
Availability engine.

calendar: weekly opening hours (is the day open, when)
ledger: non-cancelled appointments of a day as intervals
calculator: free start times for a service on a day
eligibility: which days the booking calendar offers
"""

from .config import BookingConfig, get_booking_config
from .calendar import CalendarRules, OpeningRule, default_opening_rules, load_calendar_rules
from .ledger import booked_intervals, overlaps
from .calculator import generate_slots, calculate_service_slots
from .eligibility import is_date_selectable, selectable_dates

__all__ = [
    "BookingConfig",
    "get_booking_config",
    "CalendarRules",
    "OpeningRule",
    "default_opening_rules",
    "load_calendar_rules",
    "booked_intervals",
    "overlaps",
    "generate_slots",
    "calculate_service_slots",
    "is_date_selectable",
    "selectable_dates",
]
