from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple

from estimator.core.config import indirect_cost_brackets, project_vat_percentage

BracketRow = Tuple[Optional[float], float, float]


@dataclass(frozen=True)
class IndirectCostPercentages:
    ocm_percentage: float
    cp_percentage: float
    description: str

    @property
    def total_indirect_cost_percentage(self) -> float:
        return self.ocm_percentage + self.cp_percentage


@dataclass(frozen=True)
class BoqCostEntry:
    quantity: float
    direct_cost: float
    labor_cost: float = 0.0
    equipment_cost: float = 0.0
    material_cost: float = 0.0
    total_amount: float = 0.0


@dataclass(frozen=True)
class ProjectCostSummary:
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


def _millions(value: float) -> str:
    return f"₱{value / 1_000_000:g}M"


def _describe(lower: Optional[float], upper: Optional[float]) -> str:
    if lower is None and upper is None:
        return "All amounts"
    if lower is None:
        return f"Up to {_millions(upper)}"
    if upper is None:
        return f"Above {_millions(lower)}"
    return f"Above {_millions(lower)} up to {_millions(upper)}"


def get_indirect_cost_percentages(
    estimated_direct_cost: float,
    brackets: Optional[Sequence[BracketRow]] = None,
) -> IndirectCostPercentages:
    """
    Pick OCM/CP for an EDC from an ascending bracket table.

    Upper bounds are inclusive: an EDC of exactly 5,000,000 falls in the
    "up to 5M" bracket. An EDC above every bound uses the last row.
    """
    rows: List[BracketRow] = list(brackets if brackets is not None else indirect_cost_brackets())
    if not rows:
        raise ValueError("Indirect cost bracket table is empty")

    lower: Optional[float] = None
    for upper, ocm, cp in rows:
        if upper is None or estimated_direct_cost <= upper:
            return IndirectCostPercentages(ocm, cp, _describe(lower, upper))
        lower = upper

    upper, ocm, cp = rows[-1]
    return IndirectCostPercentages(ocm, cp, _describe(upper, None))


def bracket_description(
    estimated_direct_cost: float,
    brackets: Optional[Sequence[BracketRow]] = None,
) -> str:
    return get_indirect_cost_percentages(estimated_direct_cost, brackets).description


def aggregate(
    entries: Iterable[BoqCostEntry],
    brackets: Optional[Sequence[BracketRow]] = None,
    vat_percentage: Optional[float] = None,
) -> ProjectCostSummary:
    """
    Project-level cost summary over BOQ entries.

    Indirect costs are recomputed from the summed direct cost (each entry's
    direct_cost x quantity) instead of summing each entry's marked-up total,
    so OCM/CP/VAT are not applied twice.
    """
    entries = list(entries)
    if not entries:
        return ProjectCostSummary(
            item_count=0,
            total_labor_cost=0.0,
            total_equipment_cost=0.0,
            total_material_cost=0.0,
            total_direct_cost=0.0,
            ocm_percentage=0.0,
            ocm_amount=0.0,
            cp_percentage=0.0,
            cp_amount=0.0,
            total_indirect_cost_percentage=0.0,
            total_indirect_cost=0.0,
            vat_percentage=0.0,
            vat_amount=0.0,
            total_project_cost=0.0,
            total_boq_amount=0.0,
            bracket_description="",
        )

    vat_pct = project_vat_percentage() if vat_percentage is None else vat_percentage

    total_labor = sum(e.labor_cost * e.quantity for e in entries)
    total_equipment = sum(e.equipment_cost * e.quantity for e in entries)
    total_material = sum(e.material_cost * e.quantity for e in entries)
    total_direct = sum(e.direct_cost * e.quantity for e in entries)
    total_boq_amount = sum(e.total_amount for e in entries)

    pct = get_indirect_cost_percentages(total_direct, brackets)
    ocm_amount = total_direct * (pct.ocm_percentage / 100)
    cp_amount = total_direct * (pct.cp_percentage / 100)
    total_indirect = ocm_amount + cp_amount
    vat_amount = (total_direct + total_indirect) * (vat_pct / 100)

    return ProjectCostSummary(
        item_count=len(entries),
        total_labor_cost=total_labor,
        total_equipment_cost=total_equipment,
        total_material_cost=total_material,
        total_direct_cost=total_direct,
        ocm_percentage=pct.ocm_percentage,
        ocm_amount=ocm_amount,
        cp_percentage=pct.cp_percentage,
        cp_amount=cp_amount,
        total_indirect_cost_percentage=pct.total_indirect_cost_percentage,
        total_indirect_cost=total_indirect,
        vat_percentage=vat_pct,
        vat_amount=vat_amount,
        total_project_cost=total_direct + total_indirect + vat_amount,
        total_boq_amount=total_boq_amount,
        bracket_description=pct.description,
    )
