# backend/agenda/services/admission.py
"""
Booking admission: validate a requested slot at write time and persist it.

The checks never trust what the client saw when the slot list was rendered:
opening hours and the ledger are read again inside the write transaction.

Atomicity:
  - the transaction starts by locking the tenant row (SELECT … FOR UPDATE);
    on SQLite the transaction itself is opened with BEGIN IMMEDIATE, which
    serialises writers per database file
  - overlap check and INSERT happen under that lock
  - after the INSERT is flushed the ledger is read once more; an overlap
    found at that point rolls the insert back and is reported as a conflict

Rejections are final for that request; nothing is retried here.
"""

import logging
from datetime import datetime

from sqlalchemy import inspect
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..database import SQLITE_BEGIN_OPTION
from ..errors import (
    ConflictError,
    DomainError,
    InThePastError,
    NotFoundError,
    OutOfHoursError,
    StorageError,
)
from ..models import Appointments, Company, Services, Specialists
from ..schemas.bookings import BookingCreate
from .events import emit_event
from .slots.calculator import starts_in_past
from .slots.calendar import load_calendar_rules
from .slots.config import MINUTES_PER_DAY, minutes_to_time_str, time_str_to_minutes
from .slots.ledger import booked_intervals, find_conflict

logger = logging.getLogger(__name__)


def admit_appointment(
    db: Session,
    data: BookingCreate,
    now: datetime | None = None,
) -> Appointments:
    """
    Create a pending appointment or raise.

    Raises:
        NotFoundError: unknown tenant, service or specialist
        OutOfHoursError: interval not inside the day's opening hours
        InThePastError: slot starts before now
        ConflictError: interval overlaps a non-cancelled appointment
        StorageError: database failure

    Admission commits on its own, so the session must not carry unflushed
    changes (RuntimeError). A transaction left open by the caller is rolled
    back before the write lock is taken, flushed writes included.
    """
    if db.new or db.dirty or db.deleted:
        raise RuntimeError("admit_appointment needs a session without pending changes")

    now = now or datetime.now()

    try:
        appointment = _admit(db, data, now)
    except DomainError as e:
        db.rollback()
        logger.info(
            f"Booking rejected: company_id={data.company_id}, service_id={data.service_id}, "
            f"date={data.date}, time={data.start_time}, reason={e.code}"
        )
        raise
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Booking storage failure for company_id={data.company_id}: {e}")
        raise StorageError("Could not store the appointment, please try again") from e

    # The row is committed; a failed reload must not read as "not stored"
    appointment_id = inspect(appointment).identity[0]
    try:
        db.refresh(appointment)
    except SQLAlchemyError as e:
        logger.error(f"Appointment {appointment_id} stored but could not be reloaded: {e}")
        raise StorageError(
            "Appointment was stored but could not be read back",
            details={"appointment_id": appointment_id},
        ) from e

    logger.info(
        f"Booking admitted: appointment_id={appointment.id}, company_id={appointment.company_id}, "
        f"service_id={appointment.service_id}, time={appointment.date} "
        f"{appointment.start_time}-{appointment.end_time}"
    )

    emit_event("appointment_created", {
        "appointment_id": appointment.id,
        "company_id": appointment.company_id,
        "date": appointment.date,
        "start_time": appointment.start_time,
        "end_time": appointment.end_time,
    })

    return appointment


def _admit(db: Session, data: BookingCreate, now: datetime) -> Appointments:
    # Admission runs in a transaction of its own, opened with the write lock
    if db.in_transaction():
        db.rollback()
    db.connection(execution_options={SQLITE_BEGIN_OPTION: "IMMEDIATE"})

    company = (
        db.query(Company)
        .filter(Company.id == data.company_id)
        .with_for_update()
        .first()
    )
    if not company or not company.is_active:
        raise NotFoundError("Company not found", details={"company_id": data.company_id})

    service = db.get(Services, data.service_id)
    if not service or not service.is_active or service.company_id != company.id:
        raise NotFoundError("Service not found", details={"service_id": data.service_id})

    if data.specialist_id is not None:
        specialist = db.get(Specialists, data.specialist_id)
        if not specialist or not specialist.is_active or specialist.company_id != company.id:
            raise NotFoundError(
                "Specialist not found", details={"specialist_id": data.specialist_id}
            )

    # Step 1: requested interval
    start, end = _requested_interval(data.start_time, service.duration_min)

    # Step 2: opening hours, read fresh
    rules = load_calendar_rules(db, company.id)
    interval = rules.opening_interval(data.date)
    if interval is None:
        raise OutOfHoursError(
            "The business is closed on this date",
            details={"date": data.date.isoformat()},
        )
    opens, closes = interval
    if start < opens or end > closes:
        raise OutOfHoursError(
            "Requested time is outside opening hours",
            details={
                "opens_at": minutes_to_time_str(opens),
                "closes_at": minutes_to_time_str(closes),
            },
        )

    # Step 3: not in the past
    if starts_in_past(data.date, start, now):
        raise InThePastError(
            "Requested time is in the past",
            details={"date": data.date.isoformat(), "start_time": data.start_time},
        )

    # Step 4: ledger
    conflict = find_conflict(start, end, booked_intervals(db, company.id, data.date))
    if conflict:
        raise _conflict(conflict)

    # Step 5: insert
    appointment = Appointments(
        company_id=company.id,
        service_id=service.id,
        specialist_id=data.specialist_id,
        date=data.date.isoformat(),
        start_time=minutes_to_time_str(start),
        end_time=minutes_to_time_str(end),
        client_name=data.client_name,
        client_email=data.client_email,
        client_phone=data.client_phone,
        price=service.price,
        status="pending",
        notes=data.notes,
    )
    db.add(appointment)
    db.flush()

    late = find_conflict(
        start, end, booked_intervals(db, company.id, data.date, exclude_id=appointment.id)
    )
    if late:
        raise _conflict(late)

    db.commit()
    return appointment


def _requested_interval(start_time: str, duration_min: int) -> tuple[int, int]:
    try:
        start = time_str_to_minutes(start_time)
    except ValueError:
        raise OutOfHoursError(
            "Invalid start time, expected HH:MM",
            details={"start_time": start_time},
        )
    end = start + duration_min
    if end >= MINUTES_PER_DAY:
        raise OutOfHoursError(
            "Appointment would run past midnight",
            details={"start_time": start_time, "duration_min": duration_min},
        )
    return start, end


def _conflict(interval: tuple[int, int]) -> ConflictError:
    return ConflictError(
        "This time is already booked",
        details={
            "booked_start": minutes_to_time_str(interval[0]),
            "booked_end": minutes_to_time_str(interval[1]),
        },
    )
