# backend/agenda/routers/bookings.py
"""
Public booking endpoint: the client submits the slot they picked.

201: appointment created (status pending)
404: unknown company / service / specialist
409: slot taken meanwhile
422: outside opening hours, in the past, or malformed request
503: storage failure, the client may resubmit
"""

from datetime import datetime

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from ..clock import get_now
from ..database import get_db
from ..schemas.appointments import AppointmentRead
from ..schemas.bookings import BookingCreate
from ..services.admission import admit_appointment

router = APIRouter(prefix="/bookings", tags=["bookings"])


@router.post("/", response_model=AppointmentRead, status_code=status.HTTP_201_CREATED)
def create_booking(
    data: BookingCreate,
    db: Session = Depends(get_db),
    now: datetime = Depends(get_now),
):
    return admit_appointment(db, data, now=now)
