from .tables import (
    APPOINTMENT_STATUSES,
    Appointments,
    Base,
    Company,
    OpeningRules,
    Services,
    Specialists,
    metadata,
)

__all__ = [
    "APPOINTMENT_STATUSES",
    "Appointments",
    "Base",
    "Company",
    "OpeningRules",
    "Services",
    "Specialists",
    "metadata",
]
