# backend/agenda/services/tenants.py
"""Tenant lookup shared by every read path that must agree with admission."""

from sqlalchemy.orm import Session

from ..errors import NotFoundError
from ..models import Company


def get_active_company(db: Session, company_id: int) -> Company | None:
    return (
        db.query(Company)
        .filter(Company.id == company_id, Company.is_active == 1)
        .first()
    )


def require_active_company(db: Session, company_id: int) -> Company:
    """Active tenant or NotFoundError, the same rule admission applies."""
    company = get_active_company(db, company_id)
    if company is None:
        raise NotFoundError("Company not found", details={"company_id": company_id})
    return company
