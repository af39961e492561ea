from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from datetime import datetime
from typing import Any, Dict, Optional, Protocol, Tuple

from estimator.core.errors import NotFoundError, ValidationError
from estimator.services.cost_rollup import CostBreakdown, rollup
from estimator.services.dupa_types import (
    EquipmentLine,
    LaborLine,
    MaterialLine,
    TemplateData,
    lines_to_dicts,
)
from estimator.services.line_computer import compute_lines
from estimator.services.rate_resolver import RateLookup, resolve_rates

logger = logging.getLogger(__name__)


class TemplateStore(Protocol):
    def get_template_by_id(self, template_id: int) -> Optional[TemplateData]:
        ...


@dataclass(frozen=True)
class ComputedDupa:
    template_id: int
    pay_item_number: str
    pay_item_description: str
    unit_of_measurement: str
    output_per_hour: float
    category: str
    labor_computed: Tuple[LaborLine, ...]
    equipment_computed: Tuple[EquipmentLine, ...]
    material_computed: Tuple[MaterialLine, ...]
    breakdown: CostBreakdown
    location: str
    as_of_date: Optional[datetime]
    hauling_cost_per_unit: float
    instantiated_at: datetime

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "template_id": self.template_id,
            "pay_item_number": self.pay_item_number,
            "pay_item_description": self.pay_item_description,
            "unit_of_measurement": self.unit_of_measurement,
            "output_per_hour": self.output_per_hour,
            "category": self.category,
            "labor_computed": lines_to_dicts(self.labor_computed),
            "equipment_computed": lines_to_dicts(self.equipment_computed),
            "material_computed": lines_to_dicts(self.material_computed),
            "location": self.location,
            "as_of_date": self.as_of_date,
            "hauling_cost_per_unit": self.hauling_cost_per_unit,
            "instantiated_at": self.instantiated_at,
        }
        data.update(asdict(self.breakdown))
        return data


def compute_dupa(
    template: TemplateData,
    location: str,
    as_of: Optional[datetime] = None,
    *,
    lookup: RateLookup,
    ocm_percentage: Optional[float] = None,
    cp_percentage: Optional[float] = None,
    hauling_cost_per_unit: float = 0.0,
    instantiated_at: Optional[datetime] = None,
) -> ComputedDupa:
    """Resolve rates, price every line and roll up totals for an already-loaded template."""
    if not (location or "").strip():
        raise ValidationError("Location is required")

    rates = resolve_rates(template, location, as_of, lookup=lookup)
    lines = compute_lines(template, rates, hauling_cost_per_unit=hauling_cost_per_unit)

    ocm = template.ocm_percentage if ocm_percentage is None else ocm_percentage
    cp = template.cp_percentage if cp_percentage is None else cp_percentage

    breakdown = rollup(
        lines.labor,
        lines.equipment,
        lines.material,
        ocm,
        cp,
        template.vat_percentage,
    )

    return ComputedDupa(
        template_id=template.id,
        pay_item_number=template.pay_item_number,
        pay_item_description=template.pay_item_description,
        unit_of_measurement=template.unit_of_measurement,
        output_per_hour=template.output_per_hour,
        category=template.category,
        labor_computed=lines.labor,
        equipment_computed=lines.equipment,
        material_computed=lines.material,
        breakdown=breakdown,
        location=location,
        as_of_date=as_of,
        hauling_cost_per_unit=hauling_cost_per_unit,
        instantiated_at=instantiated_at or datetime.utcnow(),
    )


def instantiate(
    template_id: int,
    location: str,
    as_of: Optional[datetime] = None,
    *,
    templates: TemplateStore,
    lookup: RateLookup,
    ocm_percentage: Optional[float] = None,
    cp_percentage: Optional[float] = None,
    hauling_cost_per_unit: float = 0.0,
    instantiated_at: Optional[datetime] = None,
) -> ComputedDupa:
    """
    Price a stored DUPA template at a location.

    Raises NotFoundError for an unknown template, then ValidationError for
    a blank location and NotFoundError for a location without labor rates.
    The result is not persisted; see boq_service.save_boq_entry.
    """
    template = templates.get_template_by_id(template_id)
    if template is None:
        raise NotFoundError("DUPA template not found")

    computed = compute_dupa(
        template,
        location,
        as_of,
        lookup=lookup,
        ocm_percentage=ocm_percentage,
        cp_percentage=cp_percentage,
        hauling_cost_per_unit=hauling_cost_per_unit,
        instantiated_at=instantiated_at,
    )

    logger.info(
        "DUPA template instantiated",
        extra={
            "template_id": template.id,
            "pay_item_number": template.pay_item_number,
            "location": location,
            "direct_cost": computed.breakdown.direct_cost,
            "unit_cost": computed.breakdown.unit_cost,
        },
    )
    return computed
