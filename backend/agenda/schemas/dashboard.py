# backend/agenda/schemas/dashboard.py

from datetime import date
from typing import Optional
from pydantic import BaseModel


class UpcomingAppointment(BaseModel):
    id: int
    client_name: str
    date: str
    start_time: str
    status: str
    service_name: str
    specialist_name: Optional[str] = None


class DashboardRead(BaseModel):
    company_id: int
    today: date

    appointments_today: int
    appointments_week: int
    active_services: int
    active_specialists: int

    upcoming: list[UpcomingAppointment]
