# backend/agenda/schemas/opening_hours.py

import re

from pydantic import BaseModel, Field, field_validator

_TIME_RE = re.compile(r"^\d{2}:\d{2}(:\d{2})?$")


class OpeningRuleWrite(BaseModel):
    weekday: int = Field(ge=0, le=6, description="0 = Monday … 6 = Sunday")
    opens_at: str = "09:00"
    closes_at: str = "18:00"
    is_closed: bool = False

    @field_validator("opens_at", "closes_at")
    @classmethod
    def validate_time(cls, v: str) -> str:
        if not _TIME_RE.match(v):
            raise ValueError("Time must be in HH:MM format")
        return v


class OpeningHoursUpdate(BaseModel):
    rules: list[OpeningRuleWrite] = Field(max_length=7)


class OpeningRuleRead(BaseModel):
    weekday: int
    opens_at: str
    closes_at: str
    is_closed: bool

    model_config = {"from_attributes": True}
