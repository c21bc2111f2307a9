import os

# Keep the module-level engine off the real database file
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")

from dataclasses import dataclass
from datetime import date, datetime

import fakeredis
import pytest
from sqlalchemy.orm import sessionmaker

from agenda.database import make_engine
from agenda.models import Appointments, Base, Company, Services, Specialists
from agenda.services.opening_hours import seed_default_rules

# 2026-10-19 is a Monday
MONDAY = date(2026, 10, 19)
TUESDAY = date(2026, 10, 20)
SUNDAY = date(2026, 10, 25)
NOW = datetime(2026, 10, 19, 8, 0)


@dataclass
class Tenant:
    company_id: int
    service_60_id: int
    service_30_id: int
    service_45_id: int
    specialist_id: int


@pytest.fixture
def engine(tmp_path):
    eng = make_engine(f"sqlite:///{tmp_path / 'agenda.db'}", busy_timeout_s=10)
    Base.metadata.create_all(eng)
    yield eng
    eng.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture(autouse=True)
def fake_redis(monkeypatch):
    client = fakeredis.FakeRedis(decode_responses=True)
    monkeypatch.setattr("agenda.redis_client.redis_client", client)
    return client


def create_tenant(db, slug="studio") -> Tenant:
    """Company with the default week (Mon–Sat 09:00–18:00), three services, one specialist."""
    company = Company(name="Studio", slug=slug)
    db.add(company)
    db.flush()
    seed_default_rules(db, company.id)

    s60 = Services(company_id=company.id, name="Haircut", duration_min=60, price=40.0)
    s30 = Services(company_id=company.id, name="Beard trim", duration_min=30, price=15.0)
    s45 = Services(company_id=company.id, name="Coloring", duration_min=45, price=55.0)
    specialist = Specialists(company_id=company.id, display_name="Ana")
    db.add_all([s60, s30, s45, specialist])
    db.flush()

    # Read ids before commit so no transaction stays open afterwards
    tenant = Tenant(
        company_id=company.id,
        service_60_id=s60.id,
        service_30_id=s30.id,
        service_45_id=s45.id,
        specialist_id=specialist.id,
    )
    db.commit()
    return tenant


@pytest.fixture
def tenant(db) -> Tenant:
    return create_tenant(db)


def add_appointment(db, tenant: Tenant, day: date, start: str, end: str, status="confirmed"):
    apt = Appointments(
        company_id=tenant.company_id,
        service_id=tenant.service_30_id,
        date=day.isoformat(),
        start_time=start,
        end_time=end,
        client_name="Existing client",
        client_email="existing@example.com",
        client_phone="+100000000",
        price=15.0,
        status=status,
    )
    db.add(apt)
    db.commit()
    return apt
