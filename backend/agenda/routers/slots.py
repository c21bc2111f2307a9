# backend/agenda/routers/slots.py
"""
Slots API endpoints.

GET /slots/calendar - which days of the booking window can be picked
GET /slots/day      - free start times for a service on a day
"""

from datetime import date, datetime, timedelta
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from ..clock import get_now
from ..database import get_db
from ..schemas.slots import (
    SlotsCalendarResponse,
    SlotsDayStatus,
    SlotsDayResponse,
)
from ..services.slots import (
    calculate_service_slots,
    generate_slots,
    get_booking_config,
    is_date_selectable,
    load_calendar_rules,
)
from ..services.slots.calculator import get_active_service
from ..services.slots.eligibility import booking_window
from ..services.slots.ledger import booked_intervals
from ..services.tenants import get_active_company


router = APIRouter(prefix="/slots", tags=["slots"])


@router.get("/calendar", response_model=SlotsCalendarResponse)
def get_slots_calendar(
    company_id: int,
    service_id: int | None = None,
    start_date: date | None = None,
    end_date: date | None = None,
    db: Session = Depends(get_db),
    now: datetime = Depends(get_now),
):
    """Selectable days for a company; with service_id, also free slot counts."""
    if get_active_company(db, company_id) is None:
        raise HTTPException(status_code=404, detail="Company not found")

    config = get_booking_config()
    today = now.date()
    max_date = today + timedelta(days=config.horizon_days)

    if start_date is None or start_date < today:
        start_date = today
    if end_date is None or end_date > max_date:
        end_date = max_date
    if end_date < start_date:
        end_date = start_date

    service = None
    if service_id is not None:
        service = get_active_service(db, company_id, service_id)
        if service is None:
            raise HTTPException(status_code=404, detail="Service not found")

    rules = load_calendar_rules(db, company_id)

    days = []
    for dt in booking_window(start_date, end_date):
        selectable = is_date_selectable(rules, dt, config, today)
        count = None
        if service is not None:
            count = 0
            if selectable:
                booked = booked_intervals(db, company_id, dt)
                count = len(generate_slots(rules, booked, dt, service.duration_min, config, now))
        days.append(SlotsDayStatus(date=dt, selectable=selectable, open_slots_count=count))

    return SlotsCalendarResponse(
        company_id=company_id,
        service_id=service_id,
        start_date=start_date,
        end_date=end_date,
        days=days,
        horizon_days=config.horizon_days,
        slot_step_minutes=config.slot_step_minutes,
    )


@router.get("/day", response_model=SlotsDayResponse)
def get_slots_day(
    company_id: int,
    service_id: int,
    target_date: date = Query(..., alias="date"),
    db: Session = Depends(get_db),
    now: datetime = Depends(get_now),
):
    """Free start times for a service on a specific day."""
    config = get_booking_config()

    today = now.date()
    max_date = today + timedelta(days=config.horizon_days)

    if target_date < today:
        raise HTTPException(status_code=400, detail="Date cannot be in the past")

    if target_date > max_date:
        raise HTTPException(status_code=400, detail=f"Date cannot be more than {config.horizon_days} days ahead")

    result = calculate_service_slots(
        db=db,
        company_id=company_id,
        service_id=service_id,
        target_date=target_date,
        config=config,
        now=now,
    )

    return SlotsDayResponse(**result)
