from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class PayItemCreate(BaseModel):
    division: str = Field(min_length=1)
    part: str = Field(min_length=1)
    item: str = Field(min_length=1)
    pay_item_number: str = Field(min_length=1)
    description: str = Field(min_length=1)
    unit: str = Field(min_length=1)
    is_active: bool = True


class PayItemUpdate(BaseModel):
    division: Optional[str] = Field(default=None, min_length=1)
    part: Optional[str] = Field(default=None, min_length=1)
    item: Optional[str] = Field(default=None, min_length=1)
    pay_item_number: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = Field(default=None, min_length=1)
    unit: Optional[str] = Field(default=None, min_length=1)
    is_active: Optional[bool] = None


class PayItemResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    division: str
    part: str
    item: str
    pay_item_number: str
    description: str
    unit: str
    is_active: bool
    created_at: datetime
    updated_at: datetime
