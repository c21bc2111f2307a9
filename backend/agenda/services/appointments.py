# backend/agenda/services/appointments.py
"""
Appointment lifecycle after admission.

    pending ──► confirmed ──► completed
       │            │
       └────────────┴──► cancelled

cancelled and completed are terminal. Appointments are never deleted;
cancelling one frees its interval in the ledger.
"""

import logging
from datetime import datetime

from sqlalchemy.orm import Session

from ..errors import InvalidTransitionError, NotFoundError
from ..models import Appointments
from .events import emit_event

logger = logging.getLogger(__name__)

ALLOWED_TRANSITIONS: dict[str, frozenset[str]] = {
    "pending": frozenset({"confirmed", "cancelled"}),
    "confirmed": frozenset({"completed", "cancelled"}),
    "cancelled": frozenset(),
    "completed": frozenset(),
}


def change_status(
    db: Session,
    appointment_id: int,
    new_status: str,
    reason: str | None = None,
) -> Appointments:
    appointment = db.get(Appointments, appointment_id)
    if not appointment:
        raise NotFoundError("Appointment not found", details={"appointment_id": appointment_id})

    old_status = appointment.status
    if new_status == old_status:
        return appointment

    if new_status not in ALLOWED_TRANSITIONS.get(old_status, frozenset()):
        raise InvalidTransitionError(
            f"Cannot change status from {old_status} to {new_status}",
            details={"from": old_status, "to": new_status},
        )

    appointment.status = new_status
    appointment.updated_at = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    if reason:
        appointment.notes = f"{appointment.notes}\n{reason}" if appointment.notes else reason

    db.commit()
    db.refresh(appointment)

    logger.info(f"Appointment {appointment.id}: {old_status} → {new_status}")

    emit_event("appointment_status_changed", {
        "appointment_id": appointment.id,
        "company_id": appointment.company_id,
        "from": old_status,
        "to": new_status,
    })

    return appointment
