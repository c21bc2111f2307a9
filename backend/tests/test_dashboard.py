from datetime import timedelta

import pytest

from agenda.errors import NotFoundError
from agenda.models import Company, Services
from agenda.services.dashboard import company_dashboard

from conftest import MONDAY, TUESDAY, add_appointment, create_tenant


def test_empty_tenant(db, tenant):
    summary = company_dashboard(db, tenant.company_id, MONDAY)

    assert summary["appointments_today"] == 0
    assert summary["appointments_week"] == 0
    assert summary["active_services"] == 3
    assert summary["active_specialists"] == 1
    assert summary["upcoming"] == []


def test_counts_and_week_window(db, tenant):
    add_appointment(db, tenant, MONDAY, "09:00", "09:30")
    add_appointment(db, tenant, MONDAY, "11:00", "11:30", status="pending")
    add_appointment(db, tenant, MONDAY, "12:00", "12:30", status="cancelled")
    add_appointment(db, tenant, MONDAY + timedelta(days=7), "09:00", "09:30")
    add_appointment(db, tenant, MONDAY + timedelta(days=8), "09:00", "09:30")
    add_appointment(db, tenant, MONDAY - timedelta(days=1), "09:00", "09:30")

    summary = company_dashboard(db, tenant.company_id, MONDAY)

    assert summary["appointments_today"] == 2
    # today..today+7 inclusive
    assert summary["appointments_week"] == 3


def test_upcoming_is_ordered_and_limited(db, tenant):
    for start, end in [("16:00", "16:30"), ("09:00", "09:30"), ("12:00", "12:30")]:
        add_appointment(db, tenant, TUESDAY, start, end)
    add_appointment(db, tenant, MONDAY, "17:00", "17:30")
    add_appointment(db, tenant, MONDAY, "10:00", "10:30", status="cancelled")
    add_appointment(db, tenant, TUESDAY + timedelta(days=1), "09:00", "09:30")
    add_appointment(db, tenant, TUESDAY + timedelta(days=1), "10:00", "10:30")

    upcoming = company_dashboard(db, tenant.company_id, MONDAY)["upcoming"]

    assert [(a["date"], a["start_time"]) for a in upcoming] == [
        ("2026-10-19", "17:00"),
        ("2026-10-20", "09:00"),
        ("2026-10-20", "12:00"),
        ("2026-10-20", "16:00"),
        ("2026-10-21", "09:00"),
    ]
    assert upcoming[0]["service_name"] == "Beard trim"
    assert upcoming[0]["specialist_name"] is None


def test_other_tenants_and_inactive_services_are_not_counted(db, tenant):
    other = create_tenant(db, slug="other")
    add_appointment(db, other, MONDAY, "09:00", "09:30")
    db.get(Services, tenant.service_45_id).is_active = 0
    db.commit()

    summary = company_dashboard(db, tenant.company_id, MONDAY)

    assert summary["appointments_today"] == 0
    assert summary["active_services"] == 2


def test_inactive_or_unknown_company(db, tenant):
    db.get(Company, tenant.company_id).is_active = 0
    db.commit()

    with pytest.raises(NotFoundError):
        company_dashboard(db, tenant.company_id, MONDAY)
    with pytest.raises(NotFoundError):
        company_dashboard(db, 999, MONDAY)
