from __future__ import annotations

import math
from typing import Any, List

from estimator.core.config import MINOR_TOOLS_PERCENTAGE
from estimator.services.dupa_types import (
    ComputedLines,
    EquipmentLine,
    LaborLine,
    MaterialLine,
    ResolvedRates,
    TemplateData,
    normalize_material_code,
)
from estimator.services.rate_resolver import usable_equipment_entries, usable_material_entries

MINOR_TOOLS_DESCRIPTION = f"Minor Tools ({MINOR_TOOLS_PERCENTAGE:g}% of Labor Cost)"


def _num(value: Any) -> float:
    # Missing or non-numeric inputs count as zero.
    try:
        result = float(value)
    except (TypeError, ValueError):
        return 0.0
    return 0.0 if math.isnan(result) else result


def _amount(*factors: float) -> float:
    result = 1.0
    for f in factors:
        result *= f
    return 0.0 if math.isnan(result) else result


def compute_lines(
    template: TemplateData,
    rates: ResolvedRates,
    hauling_cost_per_unit: float = 0.0,
) -> ComputedLines:
    labor: List[LaborLine] = []
    for entry in template.labor:
        persons = _num(entry.no_of_persons)
        hours = _num(entry.no_of_hours)
        hourly_rate = _num(rates.labor_rates.get(entry.designation, 0.0))
        labor.append(
            LaborLine(
                designation=entry.designation.value,
                no_of_persons=persons,
                no_of_hours=hours,
                hourly_rate=hourly_rate,
                amount=_amount(persons, hours, hourly_rate),
            )
        )

    equipment: List[EquipmentLine] = []
    for entry in usable_equipment_entries(template):
        units = _num(entry.no_of_units)
        hours = _num(entry.no_of_hours)
        hourly_rate = 0.0
        description = entry.description or ""

        found = rates.equipment_rates.get(entry.equipment_id) if entry.equipment_id is not None else None
        if found is not None:
            hourly_rate = _num(found.hourly_rate)
            description = found.description or description

        if not description.strip():
            description = "Equipment Item"

        equipment.append(
            EquipmentLine(
                equipment_id=entry.equipment_id,
                description=description.strip(),
                no_of_units=units,
                no_of_hours=hours,
                hourly_rate=hourly_rate,
                amount=_amount(units, hours, hourly_rate),
            )
        )

    labor_total = sum(line.amount for line in labor)
    minor_tools = _amount(labor_total, MINOR_TOOLS_PERCENTAGE / 100)
    equipment.append(
        EquipmentLine(
            equipment_id=None,
            description=MINOR_TOOLS_DESCRIPTION,
            no_of_units=1.0,
            no_of_hours=1.0,
            hourly_rate=minor_tools,
            amount=minor_tools,
        )
    )

    hauling = _num(hauling_cost_per_unit)
    material: List[MaterialLine] = []
    for entry in usable_material_entries(template):
        code = normalize_material_code(entry.material_code)
        quantity = _num(entry.quantity)
        price = rates.material_rates.get(code)

        base_price = 0.0
        hauling_applied = 0.0
        if price is not None:
            base_price = _num(price.unit_cost)
            if price.include_hauling and hauling > 0:
                hauling_applied = hauling

        unit_cost = base_price + hauling_applied
        material.append(
            MaterialLine(
                material_code=code,
                description=entry.description.strip(),
                unit=(entry.unit or "").strip() or "unit",
                quantity=quantity,
                unit_cost=unit_cost,
                amount=_amount(quantity, unit_cost),
                base_price=base_price,
                hauling_cost=hauling_applied,
                hauling_included=hauling_applied > 0,
            )
        )

    return ComputedLines(labor=tuple(labor), equipment=tuple(equipment), material=tuple(material))
