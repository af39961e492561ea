from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _upper(value: Optional[str]) -> Optional[str]:
    return None if value is None else value.strip().upper()


class MaterialCreate(BaseModel):
    material_code: str = Field(min_length=1)
    material_description: str = Field(min_length=1)
    unit: str = Field(min_length=1)
    base_price: float = Field(ge=0)
    category: Optional[str] = None
    include_hauling: bool = True
    is_active: bool = True

    @field_validator("material_code", "unit", "category")
    @classmethod
    def normalize_upper(cls, value):
        return _upper(value)


class MaterialUpdate(BaseModel):
    material_code: Optional[str] = Field(default=None, min_length=1)
    material_description: Optional[str] = Field(default=None, min_length=1)
    unit: Optional[str] = Field(default=None, min_length=1)
    base_price: Optional[float] = Field(default=None, ge=0)
    category: Optional[str] = None
    include_hauling: Optional[bool] = None
    is_active: Optional[bool] = None

    @field_validator("material_code", "unit", "category")
    @classmethod
    def normalize_upper(cls, value):
        return _upper(value)


class MaterialResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    material_code: str
    material_description: str
    unit: str
    base_price: float
    category: Optional[str]
    include_hauling: bool
    is_active: bool
    created_at: datetime
    updated_at: datetime
