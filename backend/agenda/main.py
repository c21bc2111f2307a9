import logging

from fastapi import FastAPI
from redis.exceptions import RedisError

from .config import settings
from .errors import DomainError, domain_error_handler
from .redis_client import redis_client
from .routers import appointments, bookings, company, services, slots, specialists

logging.basicConfig(level=settings.log_level)
logger = logging.getLogger(__name__)

app = FastAPI(title="Agenda Booking API")

app.add_exception_handler(DomainError, domain_error_handler)

app.include_router(company.router)
app.include_router(services.router)
app.include_router(specialists.router)
app.include_router(slots.router)
app.include_router(bookings.router)
app.include_router(appointments.router)


@app.get("/health")
def health():
    try:
        redis_ok = bool(redis_client.ping())
    except RedisError as e:
        logger.warning(f"Redis ping failed: {e}")
        redis_ok = False
    return {"status": "ok", "redis": redis_ok}
