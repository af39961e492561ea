from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from estimator.schemas.common import to_naive_utc


def _code(value: Optional[str]) -> Optional[str]:
    return None if value is None else value.strip().upper()


class MaterialPriceCreate(BaseModel):
    material_code: str = Field(min_length=1)
    description: str = Field(min_length=1)
    unit: str = Field(min_length=1)
    location: str = Field(min_length=1)
    unit_cost: float = Field(ge=0)
    brand: str = ""
    specification: str = ""
    supplier: str = ""
    effective_date: Optional[datetime] = None

    @field_validator("material_code")
    @classmethod
    def normalize_code(cls, value):
        return _code(value)

    @field_validator("effective_date")
    @classmethod
    def normalize_effective_date(cls, value):
        return to_naive_utc(value)


class MaterialPriceUpdate(BaseModel):
    description: Optional[str] = Field(default=None, min_length=1)
    unit: Optional[str] = Field(default=None, min_length=1)
    unit_cost: Optional[float] = Field(default=None, ge=0)
    brand: Optional[str] = None
    specification: Optional[str] = None
    supplier: Optional[str] = None
    effective_date: Optional[datetime] = None

    @field_validator("effective_date")
    @classmethod
    def normalize_effective_date(cls, value):
        return to_naive_utc(value)


class MaterialPriceResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    material_code: str
    description: str
    unit: str
    location: str
    unit_cost: float
    brand: str
    specification: str
    supplier: str
    effective_date: datetime
    created_at: datetime
    updated_at: datetime
