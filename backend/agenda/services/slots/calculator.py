# backend/agenda/services/slots/calculator.py
"""
Slot generation for one tenant, one date, one service.

Candidate start times walk a fixed grid from opening time
(slot_step_minutes, 30 by default). A candidate [start, start + duration)
is offered when:
  ✓ it ends no later than closing time (ending exactly at closing is fine)
  ✓ it does not start before the current moment when the date is today
  ✓ it does not overlap a non-cancelled appointment (half-open intervals)

The grid does not depend on the service duration, so a 45-minute service
still starts on :00/:30 and may leave short unusable gaps between bookings.
Slots are never stored; every call recomputes them from fresh data.
"""

from datetime import date, datetime

from sqlalchemy.orm import Session

from ...errors import NotFoundError
from ..tenants import require_active_company
from .calendar import CalendarRules, load_calendar_rules
from .config import BookingConfig, get_booking_config, minutes_to_time_str
from .ledger import Interval, booked_intervals, find_conflict


def generate_slots(
    rules: CalendarRules,
    booked: list[Interval],
    target_date: date,
    duration_min: int,
    config: BookingConfig | None = None,
    now: datetime | None = None,
) -> list[str]:
    """
    Free start times ("HH:MM"), earliest first.

    Pure function of its arguments: same inputs, same list.
    """
    if duration_min <= 0:
        raise ValueError(f"duration_min must be positive, got {duration_min}")

    config = config or get_booking_config()
    now = now or datetime.now()

    interval = rules.opening_interval(target_date)
    if interval is None:
        return []

    if target_date < now.date():
        return []

    opens, closes = interval
    step = config.slot_step_minutes
    slots: list[str] = []

    cursor = opens
    while cursor + duration_min <= closes:
        if starts_in_past(target_date, cursor, now):
            cursor += step
            continue

        if find_conflict(cursor, cursor + duration_min, booked) is None:
            slots.append(minutes_to_time_str(cursor))

        cursor += step

    return slots


def calculate_service_slots(
    db: Session,
    company_id: int,
    service_id: int,
    target_date: date,
    config: BookingConfig | None = None,
    now: datetime | None = None,
) -> dict:
    """
    Available start times for a service on a date, read from the database.

    Returns:
        Dict matching SlotsDayResponse.
    """
    config = config or get_booking_config()

    # Inactive tenants admit nothing, so they offer nothing
    require_active_company(db, company_id)

    service = get_active_service(db, company_id, service_id)
    if service is None:
        raise NotFoundError(
            "Service not found",
            details={"company_id": company_id, "service_id": service_id},
        )

    rules = load_calendar_rules(db, company_id)
    if rules.is_open(target_date):
        booked = booked_intervals(db, company_id, target_date)
    else:
        booked = []

    available_times = generate_slots(
        rules, booked, target_date, service.duration_min, config, now
    )

    return {
        "company_id": company_id,
        "service_id": service_id,
        "date": target_date.isoformat(),
        "service_duration_min": service.duration_min,
        "slot_step_minutes": config.slot_step_minutes,
        "available_times": available_times,
    }


def starts_in_past(target_date: date, start_min: int, now: datetime) -> bool:
    """
    True when a start time lies before the current moment.

    Compared to the second: on today, a 10:00 start is past at 10:00:01.
    """
    today = now.date()
    if target_date != today:
        return target_date < today
    now_seconds = now.hour * 3600 + now.minute * 60 + now.second
    return start_min * 60 < now_seconds


# ── Database helpers ─────────────────────────────────────────────────────


def get_active_service(db: Session, company_id: int, service_id: int):
    """Active service of this tenant, or None."""
    from ...models import Services

    return db.query(Services).filter(
        Services.id == service_id,
        Services.company_id == company_id,
        Services.is_active == 1,
    ).first()
