# backend/agenda/routers/company.py
# PATCH = ALLOWED, DELETE = 405 (deactivate via PATCH is_active=false)

from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..clock import get_now
from ..database import get_db
from ..models import Company as DBCompany
from ..schemas.company import (
    CompanyCreate,
    CompanyUpdate,
    CompanyRead,
)
from ..schemas.dashboard import DashboardRead
from ..schemas.opening_hours import OpeningHoursUpdate, OpeningRuleRead
from ..services.dashboard import company_dashboard
from ..services.opening_hours import (
    list_opening_rules,
    replace_opening_rules,
    seed_default_rules,
)
from ..services.slots.calendar import OpeningRule

router = APIRouter(prefix="/company", tags=["company"])


@router.get("/", response_model=list[CompanyRead])
def list_companies(db: Session = Depends(get_db)):
    return db.query(DBCompany).all()


@router.get("/by-slug/{slug}", response_model=CompanyRead)
def get_company_by_slug(slug: str, db: Session = Depends(get_db)):
    obj = (
        db.query(DBCompany)
        .filter(DBCompany.slug == slug, DBCompany.is_active == 1)
        .first()
    )
    if not obj:
        raise HTTPException(status_code=404, detail="Not found")
    return obj


@router.get("/{id}", response_model=CompanyRead)
def get_company(id: int, db: Session = Depends(get_db)):
    obj = db.get(DBCompany, id)
    if not obj:
        raise HTTPException(status_code=404, detail="Not found")
    return obj


@router.post("/", response_model=CompanyRead, status_code=status.HTTP_201_CREATED)
def create_company(
    data: CompanyCreate,
    db: Session = Depends(get_db),
):
    obj = DBCompany(**data.model_dump())
    db.add(obj)
    try:
        db.flush()
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Slug already taken")

    # New tenants start with the default week
    seed_default_rules(db, obj.id)
    db.commit()
    db.refresh(obj)
    return obj


@router.patch("/{id}", response_model=CompanyRead)
def update_company(
    id: int,
    data: CompanyUpdate,
    db: Session = Depends(get_db),
):
    obj = db.get(DBCompany, id)
    if not obj:
        raise HTTPException(status_code=404, detail="Not found")

    for field, value in data.model_dump(exclude_unset=True).items():
        setattr(obj, field, value)

    db.commit()
    db.refresh(obj)
    return obj


@router.delete("/{id}")
def delete_not_allowed():
    raise HTTPException(
        status_code=status.HTTP_405_METHOD_NOT_ALLOWED,
        detail="Method not allowed",
    )


# ── Opening hours ────────────────────────────────────────────────────────


@router.get("/{id}/opening-hours", response_model=list[OpeningRuleRead])
def get_opening_hours(id: int, db: Session = Depends(get_db)):
    if not db.get(DBCompany, id):
        raise HTTPException(status_code=404, detail="Not found")
    return list_opening_rules(db, id)


@router.put("/{id}/opening-hours", response_model=list[OpeningRuleRead])
def put_opening_hours(
    id: int,
    data: OpeningHoursUpdate,
    db: Session = Depends(get_db),
):
    rules = [OpeningRule(**rule.model_dump()) for rule in data.rules]
    return replace_opening_rules(db, id, rules)


# ── Dashboard ────────────────────────────────────────────────────────────


@router.get("/{id}/dashboard", response_model=DashboardRead)
def get_dashboard(
    id: int,
    db: Session = Depends(get_db),
    now: datetime = Depends(get_now),
):
    """Today / next-7-days counts, active catalogue size and the next 5 appointments."""
    return company_dashboard(db, id, now.date())
