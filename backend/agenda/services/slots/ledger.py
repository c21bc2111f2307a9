# backend/agenda/services/slots/ledger.py
"""
Booking ledger: the non-cancelled appointments of a tenant on a date,
seen as half-open minute intervals [start, end).

Always read from the database at call time; nothing is cached, so every
slot listing and every admission sees appointments created up to that moment.
"""

import logging
from datetime import date
from typing import Iterable

from sqlalchemy.orm import Session

from .config import time_str_to_minutes

logger = logging.getLogger(__name__)

Interval = tuple[int, int]


def overlaps(start: int, end: int, booked_start: int, booked_end: int) -> bool:
    """Half-open intersection: touching intervals do not overlap."""
    return start < booked_end and end > booked_start


def find_conflict(start: int, end: int, booked: Iterable[Interval]) -> Interval | None:
    """First booked interval that overlaps [start, end), if any."""
    for booked_start, booked_end in booked:
        if overlaps(start, end, booked_start, booked_end):
            return booked_start, booked_end
    return None


def active_appointments_query(
    db: Session,
    company_id: int,
    target_date: date,
    exclude_id: int | None = None,
):
    from ...models import Appointments

    query = db.query(Appointments).filter(
        Appointments.company_id == company_id,
        Appointments.date == target_date.isoformat(),
        Appointments.status != "cancelled",
    )
    if exclude_id is not None:
        query = query.filter(Appointments.id != exclude_id)
    return query


def appointment_intervals(appointments: Iterable) -> list[Interval]:
    intervals: list[Interval] = []
    for apt in appointments:
        try:
            intervals.append(
                (time_str_to_minutes(apt.start_time), time_str_to_minutes(apt.end_time))
            )
        except ValueError:
            # Unreadable rows must not read as free time.
            logger.error(f"Appointment {apt.id} has unreadable times {apt.start_time!r}-{apt.end_time!r}")
            raise
    return sorted(intervals)


def booked_intervals(
    db: Session,
    company_id: int,
    target_date: date,
    exclude_id: int | None = None,
) -> list[Interval]:
    """Sorted (start, end) minute intervals of non-cancelled appointments."""
    appointments = active_appointments_query(db, company_id, target_date, exclude_id).all()
    return appointment_intervals(appointments)
