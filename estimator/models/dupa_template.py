from datetime import datetime

from sqlalchemy import JSON, Boolean, Column, DateTime, Float, ForeignKey, Integer, String

from estimator.database import Base


class DupaTemplate(Base):
    """
    Reusable unit price analysis for one pay item.

    Entry arrays hold quantities only; rates are resolved per location
    when the template is instantiated. Instantiation never writes here.
    """

    __tablename__ = "dupa_templates"

    id = Column(Integer, primary_key=True, index=True)
    pay_item_id = Column(Integer, ForeignKey("pay_items.id", ondelete="SET NULL"), nullable=True)
    pay_item_number = Column(String, nullable=False, unique=True, index=True)
    pay_item_description = Column(String, nullable=False)
    unit_of_measurement = Column(String, nullable=False)
    output_per_hour = Column(Float, nullable=False, default=1.0)

    # [{designation, no_of_persons, no_of_hours}]
    labor_template = Column(JSON, nullable=False, default=list)
    # [{equipment_id, description, no_of_units, no_of_hours}]
    equipment_template = Column(JSON, nullable=False, default=list)
    # [{material_code, description, unit, quantity}]
    material_template = Column(JSON, nullable=False, default=list)

    ocm_percentage = Column(Float, nullable=False, default=15)
    cp_percentage = Column(Float, nullable=False, default=10)
    vat_percentage = Column(Float, nullable=False, default=12)

    category = Column(String, nullable=False, default="", index=True)
    specification = Column(String, nullable=False, default="")
    notes = Column(String, nullable=False, default="")
    is_active = Column(Boolean, nullable=False, default=True, index=True)

    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)
