from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from estimator.schemas.common import to_naive_utc
from estimator.schemas.dupa_template import (
    CostBreakdownFields,
    EquipmentLineResponse,
    LaborLineResponse,
    MaterialLineResponse,
)


class BoqCreate(BaseModel):
    project_id: int
    template_id: int
    quantity: float = Field(default=1, ge=0)
    as_of_date: Optional[datetime] = None
    ocm_percentage: Optional[float] = Field(default=None, ge=0, le=100)
    cp_percentage: Optional[float] = Field(default=None, ge=0, le=100)

    @field_validator("as_of_date")
    @classmethod
    def normalize_as_of_date(cls, value):
        return to_naive_utc(value)


class BoqUpdate(BaseModel):
    quantity: float = Field(ge=0)


class BoqRecalculate(BaseModel):
    as_of_date: Optional[datetime] = None

    @field_validator("as_of_date")
    @classmethod
    def normalize_as_of_date(cls, value):
        return to_naive_utc(value)


class BoqResponse(CostBreakdownFields):
    model_config = ConfigDict(from_attributes=True)

    id: int
    project_id: int
    template_id: int
    pay_item_number: str
    pay_item_description: str
    unit_of_measurement: str
    output_per_hour: float
    category: Optional[str]
    quantity: float
    labor_items: List[LaborLineResponse]
    equipment_items: List[EquipmentLineResponse]
    material_items: List[MaterialLineResponse]
    total_amount: float
    location: str
    as_of_date: Optional[datetime]
    instantiated_at: datetime
    created_at: datetime
    updated_at: datetime
