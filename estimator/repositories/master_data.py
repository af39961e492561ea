from __future__ import annotations

from datetime import datetime
from typing import Dict, Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session

from estimator.models.dupa_template import DupaTemplate
from estimator.models.equipment import Equipment
from estimator.models.labor_rate import Designation, LaborRate
from estimator.models.material import Material
from estimator.models.material_price import MaterialPrice
from estimator.services.dupa_types import (
    EquipmentRate,
    MaterialRate,
    TemplateData,
    normalize_material_code,
)


class SqlRateLookup:
    """Rate lookups against the master-data tables. Read-only."""

    def __init__(self, db: Session):
        self.db = db

    def get_labor_rates_for_location(self, location: str) -> Optional[Dict[Designation, float]]:
        row = self.db.query(LaborRate).filter(LaborRate.location == location).first()
        if row is None:
            return None
        return row.rates_by_designation()

    def get_equipment_rate(self, equipment_id: int) -> Optional[EquipmentRate]:
        row = self.db.query(Equipment).filter(Equipment.id == int(equipment_id)).first()
        if row is None:
            return None
        return EquipmentRate(
            hourly_rate=float(row.hourly_rate or 0),
            description=row.description or row.complete_description or "",
        )

    def get_material_unit_cost(
        self, material_code: str, location: str, as_of: datetime
    ) -> Optional[MaterialRate]:
        code = normalize_material_code(material_code)
        price = (
            self.db.query(MaterialPrice)
            .filter(
                MaterialPrice.material_code == code,
                MaterialPrice.location == location,
                MaterialPrice.effective_date <= as_of,
            )
            .order_by(MaterialPrice.effective_date.desc(), MaterialPrice.id.desc())
            .first()
        )
        if price is None:
            return None

        catalog = self.db.query(Material).filter(Material.material_code == code).first()
        return MaterialRate(
            unit_cost=float(price.unit_cost or 0),
            effective_date=price.effective_date,
            include_hauling=bool(catalog is not None and catalog.include_hauling),
        )

    def cheapest_hauling_equipment_rate(self) -> Optional[float]:
        row = (
            self.db.query(Equipment)
            .filter(
                or_(
                    Equipment.description.ilike("%truck%"),
                    Equipment.description.ilike("%hauling%"),
                    Equipment.description.ilike("%dump%"),
                )
            )
            .order_by(Equipment.hourly_rate.asc())
            .first()
        )
        return None if row is None else float(row.hourly_rate)


class SqlTemplateStore:
    def __init__(self, db: Session):
        self.db = db

    def get_template_by_id(self, template_id: int) -> Optional[TemplateData]:
        row = self.db.query(DupaTemplate).filter(DupaTemplate.id == int(template_id)).first()
        if row is None:
            return None
        return TemplateData.from_row(row)
