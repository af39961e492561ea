from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class EquipmentCreate(BaseModel):
    no: int = Field(gt=0)
    complete_description: str = Field(min_length=1)
    description: str = Field(min_length=1)
    equipment_model: str = ""
    capacity: str = ""
    flywheel_horsepower: float = Field(default=0, ge=0)
    rental_rate: float = Field(default=0, ge=0)
    hourly_rate: float = Field(ge=0)


class EquipmentUpdate(BaseModel):
    no: Optional[int] = Field(default=None, gt=0)
    complete_description: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = Field(default=None, min_length=1)
    equipment_model: Optional[str] = None
    capacity: Optional[str] = None
    flywheel_horsepower: Optional[float] = Field(default=None, ge=0)
    rental_rate: Optional[float] = Field(default=None, ge=0)
    hourly_rate: Optional[float] = Field(default=None, ge=0)


class EquipmentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    no: int
    complete_description: str
    description: str
    equipment_model: str
    capacity: str
    flywheel_horsepower: float
    rental_rate: float
    hourly_rate: float
    created_at: datetime
    updated_at: datetime
