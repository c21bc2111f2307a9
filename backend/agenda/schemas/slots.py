# backend/agenda/schemas/slots.py
"""
Pydantic schemas for slots API.
"""

from datetime import date
from pydantic import BaseModel, Field


class SlotsDayStatus(BaseModel):
    """Status of a single day in calendar."""
    date: date
    selectable: bool
    open_slots_count: int | None = Field(
        default=None,
        description="Free start times for the requested service (only when service_id is given)",
    )

    model_config = {"from_attributes": True}


class SlotsCalendarResponse(BaseModel):
    """Response with calendar of bookable days."""
    company_id: int
    service_id: int | None = None
    start_date: date
    end_date: date
    days: list[SlotsDayStatus]

    # Metadata
    horizon_days: int
    slot_step_minutes: int

    model_config = {"from_attributes": True}


class SlotsDayResponse(BaseModel):
    """Free start times for a service on a day."""
    company_id: int
    service_id: int
    date: date
    service_duration_min: int
    slot_step_minutes: int
    available_times: list[str] = Field(description='Start times, "HH:MM", earliest first')

    model_config = {"from_attributes": True}
