from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from estimator.core.config import (
    default_cp_percentage,
    default_ocm_percentage,
    default_vat_percentage,
)
from estimator.models.labor_rate import Designation
from estimator.schemas.common import to_naive_utc


class LaborTemplateEntry(BaseModel):
    designation: Designation
    no_of_persons: float = Field(default=0, ge=0)
    no_of_hours: float = Field(default=0, ge=0)


class EquipmentTemplateEntry(BaseModel):
    equipment_id: Optional[int] = None
    description: str = ""
    no_of_units: float = Field(default=0, ge=0)
    no_of_hours: float = Field(default=0, ge=0)


class MaterialTemplateEntry(BaseModel):
    material_code: Optional[str] = None
    description: str = Field(min_length=1)
    unit: str = Field(min_length=1)
    quantity: float = Field(default=0, ge=0)

    @field_validator("material_code")
    @classmethod
    def normalize_code(cls, value):
        return None if value is None else value.strip().upper()


class DupaTemplateCreate(BaseModel):
    pay_item_id: Optional[int] = None
    pay_item_number: str = Field(min_length=1)
    pay_item_description: str = Field(min_length=1)
    unit_of_measurement: str = Field(min_length=1)
    output_per_hour: float = Field(default=1.0, gt=0)
    labor_template: List[LaborTemplateEntry] = Field(default_factory=list)
    equipment_template: List[EquipmentTemplateEntry] = Field(default_factory=list)
    material_template: List[MaterialTemplateEntry] = Field(default_factory=list)
    # Whole-number percents: 15 means 15%.
    ocm_percentage: float = Field(default_factory=default_ocm_percentage, ge=0, le=100)
    cp_percentage: float = Field(default_factory=default_cp_percentage, ge=0, le=100)
    vat_percentage: float = Field(default_factory=default_vat_percentage, ge=0, le=100)
    category: str = ""
    specification: str = ""
    notes: str = ""
    is_active: bool = True


class DupaTemplateUpdate(BaseModel):
    pay_item_id: Optional[int] = None
    pay_item_number: Optional[str] = Field(default=None, min_length=1)
    pay_item_description: Optional[str] = Field(default=None, min_length=1)
    unit_of_measurement: Optional[str] = Field(default=None, min_length=1)
    output_per_hour: Optional[float] = Field(default=None, gt=0)
    labor_template: Optional[List[LaborTemplateEntry]] = None
    equipment_template: Optional[List[EquipmentTemplateEntry]] = None
    material_template: Optional[List[MaterialTemplateEntry]] = None
    ocm_percentage: Optional[float] = Field(default=None, ge=0, le=100)
    cp_percentage: Optional[float] = Field(default=None, ge=0, le=100)
    vat_percentage: Optional[float] = Field(default=None, ge=0, le=100)
    category: Optional[str] = None
    specification: Optional[str] = None
    notes: Optional[str] = None
    is_active: Optional[bool] = None


class DupaTemplateResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    pay_item_id: Optional[int]
    pay_item_number: str
    pay_item_description: str
    unit_of_measurement: str
    output_per_hour: float
    labor_template: List[LaborTemplateEntry]
    equipment_template: List[EquipmentTemplateEntry]
    material_template: List[MaterialTemplateEntry]
    ocm_percentage: float
    cp_percentage: float
    vat_percentage: float
    category: str
    specification: str
    notes: str
    is_active: bool
    created_at: datetime
    updated_at: datetime


class InstantiateRequest(BaseModel):
    location: str = Field(min_length=1)
    as_of_date: Optional[datetime] = None
    project_id: Optional[int] = None
    ocm_percentage: Optional[float] = Field(default=None, ge=0, le=100)
    cp_percentage: Optional[float] = Field(default=None, ge=0, le=100)

    @field_validator("as_of_date")
    @classmethod
    def normalize_as_of_date(cls, value):
        return to_naive_utc(value)


class LaborLineResponse(BaseModel):
    designation: str
    no_of_persons: float
    no_of_hours: float
    hourly_rate: float
    amount: float


class EquipmentLineResponse(BaseModel):
    equipment_id: Optional[int]
    description: str
    no_of_units: float
    no_of_hours: float
    hourly_rate: float
    amount: float


class MaterialLineResponse(BaseModel):
    material_code: str
    description: str
    unit: str
    quantity: float
    unit_cost: float
    amount: float
    base_price: float = 0
    hauling_cost: float = 0
    hauling_included: bool = False


class CostBreakdownFields(BaseModel):
    labor_cost: float
    equipment_cost: float
    material_cost: float
    direct_cost: float
    ocm_percentage: float
    ocm_cost: float
    cp_percentage: float
    cp_cost: float
    subtotal_with_markup: float
    vat_percentage: float
    vat_cost: float
    total_cost: float
    unit_cost: float


class ComputedDupaResponse(CostBreakdownFields):
    template_id: int
    pay_item_number: str
    pay_item_description: str
    unit_of_measurement: str
    output_per_hour: float
    category: str
    labor_computed: List[LaborLineResponse]
    equipment_computed: List[EquipmentLineResponse]
    material_computed: List[MaterialLineResponse]
    location: str
    as_of_date: Optional[datetime]
    hauling_cost_per_unit: float
    instantiated_at: datetime
