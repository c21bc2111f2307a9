# backend/agenda/clock.py

from datetime import datetime


def get_now() -> datetime:
    """Current local time. FastAPI dependency, overridden in tests."""
    return datetime.now()
