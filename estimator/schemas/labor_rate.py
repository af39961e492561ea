from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from estimator.schemas.common import to_naive_utc


class LaborRateFields(BaseModel):
    foreman: float = Field(ge=0)
    leadman: float = Field(ge=0)
    equipment_operator_heavy: float = Field(ge=0)
    equipment_operator_high_skilled: float = Field(ge=0)
    equipment_operator_light_skilled: float = Field(ge=0)
    driver: float = Field(ge=0)
    labor_skilled: float = Field(ge=0)
    labor_semi_skilled: float = Field(ge=0)
    labor_unskilled: float = Field(ge=0)


class LaborRateCreate(LaborRateFields):
    location: str = Field(min_length=1)
    district: str = Field(min_length=1)
    effective_date: Optional[datetime] = None

    @field_validator("effective_date")
    @classmethod
    def normalize_effective_date(cls, value):
        return to_naive_utc(value)


class LaborRateUpdate(BaseModel):
    location: Optional[str] = Field(default=None, min_length=1)
    district: Optional[str] = Field(default=None, min_length=1)
    foreman: Optional[float] = Field(default=None, ge=0)
    leadman: Optional[float] = Field(default=None, ge=0)
    equipment_operator_heavy: Optional[float] = Field(default=None, ge=0)
    equipment_operator_high_skilled: Optional[float] = Field(default=None, ge=0)
    equipment_operator_light_skilled: Optional[float] = Field(default=None, ge=0)
    driver: Optional[float] = Field(default=None, ge=0)
    labor_skilled: Optional[float] = Field(default=None, ge=0)
    labor_semi_skilled: Optional[float] = Field(default=None, ge=0)
    labor_unskilled: Optional[float] = Field(default=None, ge=0)
    effective_date: Optional[datetime] = None

    @field_validator("effective_date")
    @classmethod
    def normalize_effective_date(cls, value):
        return to_naive_utc(value)


class LaborRateResponse(LaborRateFields):
    model_config = ConfigDict(from_attributes=True)

    id: int
    location: str
    district: str
    effective_date: datetime
    created_at: datetime
    updated_at: datetime
