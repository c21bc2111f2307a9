# backend/agenda/errors.py
"""
Domain errors.

Booking admission answers with one of the ``AdmissionError`` subclasses when a
requested slot cannot be taken; the client is expected to pick another slot.
``StorageError`` wraps database failures and is never retried here.
"""

from typing import Any

from fastapi import Request, status
from fastapi.responses import JSONResponse

HTTP_422_UNPROCESSABLE: int = getattr(status, "HTTP_422_UNPROCESSABLE_CONTENT", 422)


class DomainError(Exception):
    """Base class for errors surfaced to API callers."""

    status_code: int = status.HTTP_400_BAD_REQUEST

    def __init__(
        self,
        message: str,
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.code = code or self.default_code()
        self.details = details or {}
        super().__init__(self.message)

    @classmethod
    def default_code(cls) -> str:
        name = cls.__name__
        return name[:-5] if name.endswith("Error") else name

    def to_dict(self) -> dict[str, Any]:
        return {
            "message": self.message,
            "code": self.code,
            "details": self.details,
        }


class NotFoundError(DomainError):
    """Unknown tenant, service, specialist or appointment."""

    status_code = status.HTTP_404_NOT_FOUND


class ValidationError(DomainError):
    """Business validation failed (e.g. malformed opening hours)."""

    status_code = status.HTTP_400_BAD_REQUEST


class InvalidTransitionError(DomainError):
    """Appointment status change that the lifecycle does not allow."""

    status_code = status.HTTP_400_BAD_REQUEST


class AdmissionError(DomainError):
    """A booking request was rejected."""

    status_code = HTTP_422_UNPROCESSABLE


class OutOfHoursError(AdmissionError):
    """Requested interval is not inside the opening hours of that date."""


class InThePastError(AdmissionError):
    """Requested slot starts before the current time."""


class ConflictError(AdmissionError):
    """Requested interval overlaps an existing non-cancelled appointment."""

    status_code = status.HTTP_409_CONFLICT


class StorageError(DomainError):
    """Persistence failure unrelated to slot overlap."""

    status_code = status.HTTP_503_SERVICE_UNAVAILABLE


async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.to_dict()},
    )
