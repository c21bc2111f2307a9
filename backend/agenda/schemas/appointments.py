# backend/agenda/schemas/appointments.py

from typing import Literal, Optional
from pydantic import BaseModel


class AppointmentRead(BaseModel):
    id: int

    company_id: int
    service_id: int
    specialist_id: Optional[int] = None

    date: str
    start_time: str
    end_time: str

    client_name: str
    client_email: str
    client_phone: str

    price: float
    status: str
    notes: Optional[str] = None

    created_at: str
    updated_at: str

    model_config = {"from_attributes": True}


class AppointmentStatusUpdate(BaseModel):
    status: Literal["pending", "confirmed", "cancelled", "completed"]
    reason: Optional[str] = None
