from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import datetime
from typing import Any, Dict, Optional, Tuple

from estimator.core.errors import ValidationError
from estimator.models.labor_rate import Designation


# ---------- Template entries (quantities only, no rates) ----------

@dataclass(frozen=True)
class LaborEntry:
    designation: Designation
    no_of_persons: float
    no_of_hours: float


@dataclass(frozen=True)
class EquipmentEntry:
    equipment_id: Optional[int]
    description: str
    no_of_units: float
    no_of_hours: float


@dataclass(frozen=True)
class MaterialEntry:
    material_code: Optional[str]
    description: str
    unit: str
    quantity: float


@dataclass(frozen=True)
class TemplateData:
    id: int
    pay_item_number: str
    pay_item_description: str
    unit_of_measurement: str
    output_per_hour: float
    labor: Tuple[LaborEntry, ...] = ()
    equipment: Tuple[EquipmentEntry, ...] = ()
    material: Tuple[MaterialEntry, ...] = ()
    ocm_percentage: float = 15.0
    cp_percentage: float = 10.0
    vat_percentage: float = 12.0
    category: str = ""

    @classmethod
    def from_row(cls, row: Any) -> "TemplateData":
        """Build from a DupaTemplate row (or anything with the same attributes)."""
        labor = []
        for raw in row.labor_template or []:
            try:
                designation = Designation(raw.get("designation"))
            except ValueError as exc:
                raise ValidationError(
                    f"Unknown labor designation in template {row.pay_item_number}: {raw.get('designation')!r}"
                ) from exc
            labor.append(
                LaborEntry(
                    designation=designation,
                    no_of_persons=raw.get("no_of_persons"),
                    no_of_hours=raw.get("no_of_hours"),
                )
            )

        equipment = [
            EquipmentEntry(
                equipment_id=raw.get("equipment_id"),
                description=raw.get("description") or "",
                no_of_units=raw.get("no_of_units"),
                no_of_hours=raw.get("no_of_hours"),
            )
            for raw in row.equipment_template or []
        ]

        material = [
            MaterialEntry(
                material_code=raw.get("material_code"),
                description=raw.get("description") or "",
                unit=raw.get("unit") or "",
                quantity=raw.get("quantity"),
            )
            for raw in row.material_template or []
        ]

        return cls(
            id=row.id,
            pay_item_number=row.pay_item_number,
            pay_item_description=row.pay_item_description,
            unit_of_measurement=row.unit_of_measurement,
            output_per_hour=row.output_per_hour,
            labor=tuple(labor),
            equipment=tuple(equipment),
            material=tuple(material),
            ocm_percentage=row.ocm_percentage,
            cp_percentage=row.cp_percentage,
            vat_percentage=row.vat_percentage,
            category=row.category or "",
        )


# ---------- Resolved rates ----------

@dataclass(frozen=True)
class EquipmentRate:
    hourly_rate: float
    description: str = ""


@dataclass(frozen=True)
class MaterialRate:
    unit_cost: float
    effective_date: Optional[datetime] = None
    include_hauling: bool = False


@dataclass(frozen=True)
class ResolvedRates:
    labor_rates: Dict[Designation, float] = field(default_factory=dict)
    equipment_rates: Dict[int, EquipmentRate] = field(default_factory=dict)
    material_rates: Dict[str, MaterialRate] = field(default_factory=dict)


# ---------- Computed lines ----------

@dataclass(frozen=True)
class LaborLine:
    designation: str
    no_of_persons: float
    no_of_hours: float
    hourly_rate: float
    amount: float


@dataclass(frozen=True)
class EquipmentLine:
    equipment_id: Optional[int]
    description: str
    no_of_units: float
    no_of_hours: float
    hourly_rate: float
    amount: float


@dataclass(frozen=True)
class MaterialLine:
    material_code: str
    description: str
    unit: str
    quantity: float
    unit_cost: float
    amount: float
    base_price: float = 0.0
    hauling_cost: float = 0.0
    hauling_included: bool = False


@dataclass(frozen=True)
class ComputedLines:
    labor: Tuple[LaborLine, ...]
    equipment: Tuple[EquipmentLine, ...]
    material: Tuple[MaterialLine, ...]


def lines_to_dicts(lines) -> list[dict]:
    return [asdict(line) for line in lines]


def normalize_material_code(code: Optional[str]) -> str:
    return (code or "").strip().upper()
