# backend/agenda/routers/specialists.py
# PATCH = ALLOWED, DELETE = soft-delete (is_active)

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from ..database import get_db
from ..models import Specialists as DBSpecialists
from ..schemas.specialists import (
    SpecialistCreate,
    SpecialistUpdate,
    SpecialistRead,
)
from ..services.tenants import get_active_company

router = APIRouter(prefix="/specialists", tags=["specialists"])


@router.get("/", response_model=list[SpecialistRead])
def list_specialists(company_id: int | None = None, db: Session = Depends(get_db)):
    query = db.query(DBSpecialists).filter(DBSpecialists.is_active == 1)
    if company_id is not None:
        if get_active_company(db, company_id) is None:
            raise HTTPException(status_code=404, detail="Company not found")
        query = query.filter(DBSpecialists.company_id == company_id)
    return query.order_by(DBSpecialists.display_name).all()


@router.get("/{id}", response_model=SpecialistRead)
def get_specialist(id: int, db: Session = Depends(get_db)):
    obj = db.get(DBSpecialists, id)
    if not obj:
        raise HTTPException(status_code=404, detail="Not found")
    return obj


@router.post("/", response_model=SpecialistRead, status_code=status.HTTP_201_CREATED)
def create_specialist(
    data: SpecialistCreate,
    db: Session = Depends(get_db),
):
    # New entries only for tenants that can take bookings
    if get_active_company(db, data.company_id) is None:
        raise HTTPException(status_code=404, detail="Company not found")

    obj = DBSpecialists(**data.model_dump())
    db.add(obj)
    db.commit()
    db.refresh(obj)
    return obj


@router.patch("/{id}", response_model=SpecialistRead)
def update_specialist(
    id: int,
    data: SpecialistUpdate,
    db: Session = Depends(get_db),
):
    obj = db.get(DBSpecialists, id)
    if not obj:
        raise HTTPException(status_code=404, detail="Not found")

    for field, value in data.model_dump(exclude_unset=True).items():
        setattr(obj, field, value)

    db.commit()
    db.refresh(obj)
    return obj


@router.delete("/{id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_specialist(id: int, db: Session = Depends(get_db)):
    obj = db.get(DBSpecialists, id)
    if not obj:
        raise HTTPException(status_code=404, detail="Not found")

    obj.is_active = 0
    db.commit()
