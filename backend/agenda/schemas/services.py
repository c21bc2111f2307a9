# backend/agenda/schemas/services.py

from typing import Optional
from pydantic import BaseModel, Field


class ServiceCreate(BaseModel):
    company_id: int
    name: str
    description: Optional[str] = None
    duration_min: int = Field(gt=0)
    price: float = Field(ge=0)

    model_config = {"from_attributes": True}


class ServiceUpdate(BaseModel):
    is_active: Optional[bool] = None
    name: Optional[str] = None
    description: Optional[str] = None
    duration_min: Optional[int] = Field(default=None, gt=0)
    price: Optional[float] = Field(default=None, ge=0)

    model_config = {"from_attributes": True}


class ServiceRead(BaseModel):
    id: int
    company_id: int
    name: str
    description: Optional[str] = None
    duration_min: int
    price: float
    is_active: bool

    model_config = {"from_attributes": True}
