# backend/agenda/schemas/specialists.py

from typing import Optional
from pydantic import BaseModel


class SpecialistCreate(BaseModel):
    company_id: int
    display_name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    specialty: Optional[str] = None

    model_config = {"from_attributes": True}


class SpecialistUpdate(BaseModel):
    is_active: Optional[bool] = None
    display_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    specialty: Optional[str] = None

    model_config = {"from_attributes": True}


class SpecialistRead(BaseModel):
    id: int
    company_id: int
    display_name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    specialty: Optional[str] = None
    is_active: bool

    model_config = {"from_attributes": True}
