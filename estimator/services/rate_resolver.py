from __future__ import annotations

import logging
from datetime import datetime
from typing import Dict, List, Optional, Protocol

from estimator.core.errors import NotFoundError
from estimator.models.labor_rate import Designation
from estimator.services.dupa_types import (
    EquipmentEntry,
    EquipmentRate,
    MaterialEntry,
    MaterialRate,
    ResolvedRates,
    TemplateData,
    normalize_material_code,
)

logger = logging.getLogger(__name__)


class RateLookup(Protocol):
    def get_labor_rates_for_location(self, location: str) -> Optional[Dict[Designation, float]]:
        ...

    def get_equipment_rate(self, equipment_id: int) -> Optional[EquipmentRate]:
        ...

    def get_material_unit_cost(
        self, material_code: str, location: str, as_of: datetime
    ) -> Optional[MaterialRate]:
        ...


def usable_equipment_entries(template: TemplateData) -> List[EquipmentEntry]:
    return [
        e for e in template.equipment
        if e.equipment_id is not None or (e.description or "").strip()
    ]


def usable_material_entries(template: TemplateData) -> List[MaterialEntry]:
    return [
        m for m in template.material
        if normalize_material_code(m.material_code) and (m.description or "").strip()
    ]


def resolve_rates(
    template: TemplateData,
    location: str,
    as_of: Optional[datetime] = None,
    *,
    lookup: RateLookup,
) -> ResolvedRates:
    """
    Fetch the rates a template needs at one location.

    Labor is all-or-nothing: a location without a LaborRate record raises
    NotFoundError. Missing equipment or material prices are simply absent
    from the result and price at zero downstream.
    """
    if as_of is None:
        as_of = datetime.utcnow()

    labor_rates = lookup.get_labor_rates_for_location(location)
    if labor_rates is None:
        raise NotFoundError(f"No labor rates found for location: {location}")

    equipment_rates: Dict[int, EquipmentRate] = {}
    for entry in usable_equipment_entries(template):
        if entry.equipment_id is None or entry.equipment_id in equipment_rates:
            continue
        rate = lookup.get_equipment_rate(entry.equipment_id)
        if rate is None:
            logger.info(
                "Equipment not found; pricing at zero",
                extra={"equipment_id": entry.equipment_id, "template_id": template.id},
            )
            continue
        equipment_rates[entry.equipment_id] = rate

    material_rates: Dict[str, MaterialRate] = {}
    for entry in usable_material_entries(template):
        code = normalize_material_code(entry.material_code)
        if code in material_rates:
            continue
        rate = lookup.get_material_unit_cost(code, location, as_of)
        if rate is None:
            logger.info(
                "No material price at location; pricing at zero",
                extra={"material_code": code, "location": location, "as_of": as_of.isoformat()},
            )
            continue
        material_rates[code] = rate

    return ResolvedRates(
        labor_rates=dict(labor_rates),
        equipment_rates=equipment_rates,
        material_rates=material_rates,
    )
