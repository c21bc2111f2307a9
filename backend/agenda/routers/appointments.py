# backend/agenda/routers/appointments.py
# Created through POST /bookings. PATCH = status only, DELETE = 405

from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from ..database import get_db
from ..models import Appointments as DBAppointments
from ..schemas.appointments import AppointmentRead, AppointmentStatusUpdate
from ..services.appointments import change_status

router = APIRouter(prefix="/appointments", tags=["appointments"])


@router.get("/", response_model=list[AppointmentRead])
def list_appointments(
    company_id: int,
    target_date: date | None = Query(None, alias="date"),
    status_filter: str | None = Query(None, alias="status"),
    db: Session = Depends(get_db),
):
    query = db.query(DBAppointments).filter(DBAppointments.company_id == company_id)
    if target_date is not None:
        query = query.filter(DBAppointments.date == target_date.isoformat())
    if status_filter is not None:
        query = query.filter(DBAppointments.status == status_filter)
    return query.order_by(DBAppointments.date, DBAppointments.start_time).all()


@router.get("/{id}", response_model=AppointmentRead)
def get_appointment(id: int, db: Session = Depends(get_db)):
    obj = db.get(DBAppointments, id)
    if not obj:
        raise HTTPException(status_code=404, detail="Not found")
    return obj


@router.patch("/{id}/status", response_model=AppointmentRead)
def update_appointment_status(
    id: int,
    data: AppointmentStatusUpdate,
    db: Session = Depends(get_db),
):
    return change_status(db, id, data.status, data.reason)


@router.delete("/{id}")
def delete_not_allowed():
    raise HTTPException(
        status_code=status.HTTP_405_METHOD_NOT_ALLOWED,
        detail="Method not allowed",
    )
