# backend/agenda/services/opening_hours.py
"""
Tenant weekly schedule management.
"""

import logging
from typing import Iterable

from sqlalchemy.orm import Session

from ..errors import NotFoundError, ValidationError
from ..models import Company, OpeningRules
from .slots.calendar import OpeningRule, default_opening_rules
from .slots.config import minutes_to_time_str, time_str_to_minutes

logger = logging.getLogger(__name__)


def validate_rules(rules: list[OpeningRule]) -> None:
    seen: set[int] = set()
    for rule in rules:
        if rule.weekday < 0 or rule.weekday > 6:
            raise ValidationError(
                "Weekday must be between 0 (Monday) and 6 (Sunday)",
                details={"weekday": rule.weekday},
            )
        if rule.weekday in seen:
            raise ValidationError(
                "Duplicate weekday in schedule", details={"weekday": rule.weekday}
            )
        seen.add(rule.weekday)

        try:
            opens = time_str_to_minutes(rule.opens_at)
            closes = time_str_to_minutes(rule.closes_at)
        except ValueError as e:
            raise ValidationError(str(e), details={"weekday": rule.weekday})

        if not rule.is_closed and closes <= opens:
            raise ValidationError(
                "Closing time must be after opening time",
                details={"weekday": rule.weekday, "opens_at": rule.opens_at, "closes_at": rule.closes_at},
            )


def replace_opening_rules(
    db: Session,
    company_id: int,
    rules: Iterable[OpeningRule],
) -> list[OpeningRules]:
    """
    Upsert the weekly schedule. Weekdays not mentioned keep their current rule.
    """
    rules = list(rules)
    validate_rules(rules)

    if not db.get(Company, company_id):
        raise NotFoundError("Company not found", details={"company_id": company_id})

    existing = {
        row.weekday: row
        for row in db.query(OpeningRules).filter(OpeningRules.company_id == company_id)
    }

    for rule in rules:
        row = existing.get(rule.weekday)
        if row is None:
            row = OpeningRules(company_id=company_id, weekday=rule.weekday)
            db.add(row)
        row.opens_at = minutes_to_time_str(time_str_to_minutes(rule.opens_at))
        row.closes_at = minutes_to_time_str(time_str_to_minutes(rule.closes_at))
        row.is_closed = 1 if rule.is_closed else 0

    db.commit()
    logger.info(f"Opening hours updated for company_id={company_id}: {len(rules)} weekday(s)")

    return list_opening_rules(db, company_id)


def list_opening_rules(db: Session, company_id: int) -> list[OpeningRules]:
    return (
        db.query(OpeningRules)
        .filter(OpeningRules.company_id == company_id)
        .order_by(OpeningRules.weekday)
        .all()
    )


def seed_default_rules(db: Session, company_id: int) -> None:
    """Give a freshly created tenant the default week. Caller commits."""
    for rule in default_opening_rules():
        db.add(OpeningRules(
            company_id=company_id,
            weekday=rule.weekday,
            opens_at=rule.opens_at,
            closes_at=rule.closes_at,
            is_closed=1 if rule.is_closed else 0,
        ))
