from datetime import datetime

from sqlalchemy import CheckConstraint, Column, DateTime, Float, Index, Integer, String, UniqueConstraint

from estimator.database import Base


class MaterialPrice(Base):
    """Price history: one row per (material_code, location, effective_date)."""

    __tablename__ = "material_prices"

    __table_args__ = (
        UniqueConstraint(
            "material_code",
            "location",
            "effective_date",
            name="uq_material_prices_code_location_effective",
        ),
        CheckConstraint("unit_cost >= 0", name="ck_material_prices_unit_cost_nonnegative"),
        Index("ix_material_prices_lookup", "material_code", "location", "effective_date"),
    )

    id = Column(Integer, primary_key=True, index=True)
    material_code = Column(String, nullable=False)  # stored upper-case
    description = Column(String, nullable=False)
    unit = Column(String, nullable=False)
    location = Column(String, nullable=False, index=True)
    unit_cost = Column(Float, nullable=False, default=0)
    brand = Column(String, nullable=False, default="")
    specification = Column(String, nullable=False, default="")
    supplier = Column(String, nullable=False, default="")
    effective_date = Column(DateTime, nullable=False, default=datetime.utcnow)

    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)
