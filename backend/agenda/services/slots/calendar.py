# backend/agenda/services/slots/calendar.py
"""
Calendar rules: a tenant's weekly opening hours.

One rule per weekday (0 = Monday … 6 = Sunday, as date.weekday()).
A weekday without a rule, a rule marked closed, or a rule that cannot be
read is a closed day. Missing configuration is never an error here.
"""

import logging
from dataclasses import dataclass
from datetime import date
from typing import Iterable

from sqlalchemy.orm import Session

from .config import time_str_to_minutes

logger = logging.getLogger(__name__)

WEEKDAY_NAMES = ["mon", "tue", "wed", "thu", "fri", "sat", "sun"]


@dataclass(frozen=True)
class OpeningRule:
    weekday: int
    opens_at: str
    closes_at: str
    is_closed: bool = False


class CalendarRules:
    """Weekly opening hours of one tenant."""

    def __init__(self, rules: Iterable[OpeningRule]):
        self._intervals: dict[int, tuple[int, int]] = {}
        for rule in rules:
            interval = _rule_interval(rule)
            if interval is not None:
                self._intervals[rule.weekday] = interval

    @classmethod
    def from_rows(cls, rows: Iterable) -> "CalendarRules":
        """Build from ORM rows (anything with weekday/opens_at/closes_at/is_closed)."""
        return cls(
            OpeningRule(
                weekday=row.weekday,
                opens_at=row.opens_at,
                closes_at=row.closes_at,
                is_closed=bool(row.is_closed),
            )
            for row in rows
        )

    def opening_interval(self, target_date: date) -> tuple[int, int] | None:
        """(opens, closes) in minutes since midnight, or None when closed."""
        return self._intervals.get(target_date.weekday())

    def is_open(self, target_date: date) -> bool:
        return target_date.weekday() in self._intervals

    def open_weekdays(self) -> list[int]:
        return sorted(self._intervals)


def _rule_interval(rule: OpeningRule) -> tuple[int, int] | None:
    if rule.is_closed:
        return None
    try:
        opens = time_str_to_minutes(rule.opens_at)
        closes = time_str_to_minutes(rule.closes_at)
    except ValueError:
        logger.warning(
            f"Unreadable opening rule for weekday {rule.weekday}: "
            f"{rule.opens_at!r}-{rule.closes_at!r}, treating day as closed"
        )
        return None
    if closes <= opens:
        return None
    return opens, closes


def default_opening_rules() -> list[OpeningRule]:
    """Schedule a new tenant starts with: Mon–Sat 09:00–18:00, Sunday closed."""
    return [
        OpeningRule(weekday=wd, opens_at="09:00", closes_at="18:00", is_closed=(wd == 6))
        for wd in range(7)
    ]


def load_calendar_rules(db: Session, company_id: int) -> CalendarRules:
    """Read a tenant's opening rules. Unknown tenant → no rules → always closed."""
    from ...models import OpeningRules

    rows = (
        db.query(OpeningRules)
        .filter(OpeningRules.company_id == company_id)
        .all()
    )
    return CalendarRules.from_rows(rows)
