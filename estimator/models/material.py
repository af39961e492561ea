from datetime import datetime

from sqlalchemy import Boolean, CheckConstraint, Column, DateTime, Float, Integer, String

from estimator.database import Base


class Material(Base):
    """Catalog entry. Location prices live in MaterialPrice."""

    __tablename__ = "materials"

    __table_args__ = (
        CheckConstraint("base_price >= 0", name="ck_materials_base_price_nonnegative"),
    )

    id = Column(Integer, primary_key=True, index=True)
    material_code = Column(String, nullable=False, unique=True, index=True)  # stored upper-case
    material_description = Column(String, nullable=False)
    unit = Column(String, nullable=False)
    base_price = Column(Float, nullable=False, default=0)
    category = Column(String, nullable=True, index=True)
    include_hauling = Column(Boolean, nullable=False, default=True)
    is_active = Column(Boolean, nullable=False, default=True, index=True)

    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)
