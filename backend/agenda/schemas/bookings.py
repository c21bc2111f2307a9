# backend/agenda/schemas/bookings.py

import re
from datetime import date
from typing import Optional
from pydantic import BaseModel, Field, field_validator


class BookingCreate(BaseModel):
    """Client booking request from the public booking page."""
    company_id: int
    service_id: int
    specialist_id: Optional[int] = None

    date: date
    start_time: str = Field(description="Start time in HH:MM format")

    client_name: str = Field(min_length=1)
    client_email: str = Field(min_length=3)
    client_phone: str = Field(min_length=1)
    notes: Optional[str] = None

    @field_validator("start_time")
    @classmethod
    def validate_time(cls, v: str) -> str:
        """Validate time format."""
        if not re.match(r"^\d{2}:\d{2}(:\d{2})?$", v):
            raise ValueError("Time must be in HH:MM format")
        return v

    @field_validator("client_name", "client_email", "client_phone")
    @classmethod
    def strip_contact(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Must not be blank")
        return v

    @field_validator("client_email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        if not re.match(r"^[^@\s]+@[^@\s]+\.[^@\s]+$", v):
            raise ValueError("Invalid email address")
        return v.lower()
