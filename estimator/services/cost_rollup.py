from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from estimator.services.dupa_types import EquipmentLine, LaborLine, MaterialLine


@dataclass(frozen=True)
class CostBreakdown:
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


def rollup(
    labor_lines: Iterable[LaborLine],
    equipment_lines: Iterable[EquipmentLine],
    material_lines: Iterable[MaterialLine],
    ocm_pct: float,
    cp_pct: float,
    vat_pct: float,
) -> CostBreakdown:
    """
    Layer OCM, CP and VAT over the direct cost of one pay item.

    Percentages are whole numbers (12 means 12%). OCM and CP apply to the
    direct cost; VAT applies to direct cost plus both markups. No rounding.

    unit_cost equals total_cost: template quantities are already per unit
    of measurement, so output_per_hour is not divided in here.
    """
    labor_cost = sum(line.amount for line in labor_lines)
    equipment_cost = sum(line.amount for line in equipment_lines)
    material_cost = sum(line.amount for line in material_lines)

    direct_cost = labor_cost + equipment_cost + material_cost
    ocm_cost = direct_cost * (ocm_pct / 100)
    cp_cost = direct_cost * (cp_pct / 100)
    subtotal_with_markup = direct_cost + ocm_cost + cp_cost
    vat_cost = subtotal_with_markup * (vat_pct / 100)
    total_cost = subtotal_with_markup + vat_cost

    return CostBreakdown(
        labor_cost=labor_cost,
        equipment_cost=equipment_cost,
        material_cost=material_cost,
        direct_cost=direct_cost,
        ocm_percentage=ocm_pct,
        ocm_cost=ocm_cost,
        cp_percentage=cp_pct,
        cp_cost=cp_cost,
        subtotal_with_markup=subtotal_with_markup,
        vat_percentage=vat_pct,
        vat_cost=vat_cost,
        total_cost=total_cost,
        unit_cost=total_cost,
    )
