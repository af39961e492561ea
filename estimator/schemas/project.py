from datetime import date, datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

ProjectStatus = Literal["Planning", "Approved", "Ongoing", "Completed", "Cancelled"]


class RouteSegmentConfig(BaseModel):
    distance_km: float = Field(ge=0)
    speed_unloaded_kmh: float = Field(gt=0)
    speed_loaded_kmh: float = Field(gt=0)


class HaulingConfig(BaseModel):
    total_distance: Optional[float] = Field(default=None, ge=0)
    free_hauling_distance: float = Field(default=3, ge=0)
    route_segments: List[RouteSegmentConfig] = Field(default_factory=list)
    equipment_rental_rate: float = Field(default=1420, ge=0)
    equipment_capacity: float = Field(default=10, gt=0)


class ProjectCreate(BaseModel):
    project_name: str = Field(min_length=1)
    project_location: str = Field(min_length=1)
    district: str = "Bukidnon 1st"
    implementing_office: str = "DPWH Bukidnon 1st District Engineering Office"
    appropriation: float = Field(default=0, ge=0)
    contract_id: Optional[str] = None
    project_type: str = ""
    status: ProjectStatus = "Planning"
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    description: str = ""
    hauling_cost_per_km: float = Field(default=0, ge=0)
    distance_from_office: float = Field(default=0, ge=0)
    hauling_config: Optional[HaulingConfig] = None


class ProjectUpdate(BaseModel):
    project_name: Optional[str] = Field(default=None, min_length=1)
    project_location: Optional[str] = Field(default=None, min_length=1)
    district: Optional[str] = None
    implementing_office: Optional[str] = None
    appropriation: Optional[float] = Field(default=None, ge=0)
    contract_id: Optional[str] = None
    project_type: Optional[str] = None
    status: Optional[ProjectStatus] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    description: Optional[str] = None
    hauling_cost_per_km: Optional[float] = Field(default=None, ge=0)
    distance_from_office: Optional[float] = Field(default=None, ge=0)
    hauling_config: Optional[HaulingConfig] = None


class ProjectResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    project_name: str
    project_location: str
    district: str
    implementing_office: str
    appropriation: float
    contract_id: Optional[str]
    project_type: str
    status: str
    start_date: Optional[date]
    end_date: Optional[date]
    description: str
    hauling_cost_per_km: float
    distance_from_office: float
    hauling_config: Optional[HaulingConfig]
    created_at: datetime
    updated_at: datetime


class ProjectCostSummaryResponse(BaseModel):
    project_id: int
    item_count: int
    total_labor_cost: float
    total_equipment_cost: float
    total_material_cost: float
    total_direct_cost: float
    ocm_percentage: float
    ocm_amount: float
    cp_percentage: float
    cp_amount: float
    total_indirect_cost_percentage: float
    total_indirect_cost: float
    vat_percentage: float
    vat_amount: float
    total_project_cost: float
    total_boq_amount: float
    bracket_description: str
