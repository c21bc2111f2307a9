# backend/agenda/services/dashboard.py
"""
Tenant dashboard summary.

Counts for the staff landing page plus the next few appointments.
Cancelled appointments are left out of every figure.
"""

from datetime import date, timedelta

from sqlalchemy.orm import Session, joinedload

from ..models import Appointments, Services, Specialists
from .tenants import require_active_company

WEEK_DAYS = 7
UPCOMING_LIMIT = 5


def company_dashboard(
    db: Session,
    company_id: int,
    today: date,
    upcoming_limit: int = UPCOMING_LIMIT,
) -> dict:
    """
    Returns:
        Dict matching DashboardRead. The week window is today..today+7,
        both ends included.
    """
    require_active_company(db, company_id)

    today_str = today.isoformat()
    week_end_str = (today + timedelta(days=WEEK_DAYS)).isoformat()

    booked = db.query(Appointments).filter(
        Appointments.company_id == company_id,
        Appointments.status != "cancelled",
    )

    upcoming = (
        booked.filter(Appointments.date >= today_str)
        .options(joinedload(Appointments.service), joinedload(Appointments.specialist))
        .order_by(Appointments.date, Appointments.start_time)
        .limit(upcoming_limit)
        .all()
    )

    return {
        "company_id": company_id,
        "today": today,
        "appointments_today": booked.filter(Appointments.date == today_str).count(),
        "appointments_week": booked.filter(
            Appointments.date >= today_str,
            Appointments.date <= week_end_str,
        ).count(),
        "active_services": db.query(Services).filter(
            Services.company_id == company_id,
            Services.is_active == 1,
        ).count(),
        "active_specialists": db.query(Specialists).filter(
            Specialists.company_id == company_id,
            Specialists.is_active == 1,
        ).count(),
        "upcoming": [_upcoming_entry(apt) for apt in upcoming],
    }


def _upcoming_entry(apt: Appointments) -> dict:
    return {
        "id": apt.id,
        "client_name": apt.client_name,
        "date": apt.date,
        "start_time": apt.start_time,
        "status": apt.status,
        "service_name": apt.service.name,
        "specialist_name": apt.specialist.display_name if apt.specialist else None,
    }
