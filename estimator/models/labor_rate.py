from datetime import datetime
from enum import Enum

from sqlalchemy import CheckConstraint, Column, DateTime, Float, Integer, String

from estimator.database import Base


class Designation(Enum):
    FOREMAN = "Foreman"
    LEADMAN = "Leadman"
    EQUIPMENT_OPERATOR_HEAVY = "Equipment Operator - Heavy"
    EQUIPMENT_OPERATOR_HIGH_SKILLED = "Equipment Operator - High Skilled"
    EQUIPMENT_OPERATOR_LIGHT_SKILLED = "Equipment Operator - Light Skilled"
    DRIVER = "Driver"
    SKILLED_LABOR = "Skilled Labor"
    SEMI_SKILLED_LABOR = "Semi-Skilled Labor"
    UNSKILLED_LABOR = "Unskilled Labor"

    @property
    def rate_column(self) -> str:
        return DESIGNATION_RATE_COLUMNS[self]


DESIGNATION_RATE_COLUMNS = {
    Designation.FOREMAN: "foreman",
    Designation.LEADMAN: "leadman",
    Designation.EQUIPMENT_OPERATOR_HEAVY: "equipment_operator_heavy",
    Designation.EQUIPMENT_OPERATOR_HIGH_SKILLED: "equipment_operator_high_skilled",
    Designation.EQUIPMENT_OPERATOR_LIGHT_SKILLED: "equipment_operator_light_skilled",
    Designation.DRIVER: "driver",
    Designation.SKILLED_LABOR: "labor_skilled",
    Designation.SEMI_SKILLED_LABOR: "labor_semi_skilled",
    Designation.UNSKILLED_LABOR: "labor_unskilled",
}


class LaborRate(Base):
    __tablename__ = "labor_rates"

    __table_args__ = tuple(
        CheckConstraint(f"{col} >= 0", name=f"ck_labor_rates_{col}_nonnegative")
        for col in DESIGNATION_RATE_COLUMNS.values()
    )

    id = Column(Integer, primary_key=True, index=True)
    location = Column(String, nullable=False, unique=True, index=True)
    district = Column(String, nullable=False, default="Bukidnon 1st", index=True)

    foreman = Column(Float, nullable=False, default=0)
    leadman = Column(Float, nullable=False, default=0)
    equipment_operator_heavy = Column(Float, nullable=False, default=0)
    equipment_operator_high_skilled = Column(Float, nullable=False, default=0)
    equipment_operator_light_skilled = Column(Float, nullable=False, default=0)
    driver = Column(Float, nullable=False, default=0)
    labor_skilled = Column(Float, nullable=False, default=0)
    labor_semi_skilled = Column(Float, nullable=False, default=0)
    labor_unskilled = Column(Float, nullable=False, default=0)

    effective_date = Column(DateTime, nullable=False, default=datetime.utcnow)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    def rates_by_designation(self) -> dict:
        return {d: float(getattr(self, d.rate_column) or 0) for d in Designation}
