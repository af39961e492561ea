from datetime import datetime

from sqlalchemy import JSON, CheckConstraint, Column, DateTime, Float, ForeignKey, Index, Integer, String
from sqlalchemy.orm import relationship

from estimator.database import Base


class ProjectBoq(Base):
    """
    One BOQ line: a snapshot of an instantiated DUPA template plus a quantity.

    Rates are copied at instantiation time; later master-data edits do not
    change the stored figures until the line is recalculated.
    """

    __tablename__ = "project_boq"

    __table_args__ = (
        CheckConstraint("quantity >= 0", name="ck_project_boq_quantity_nonnegative"),
        Index("ix_project_boq_project_pay_item", "project_id", "pay_item_number"),
    )

    id = Column(Integer, primary_key=True, index=True)
    project_id = Column(
        Integer,
        ForeignKey("projects.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    template_id = Column(
        Integer,
        ForeignKey("dupa_templates.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )

    pay_item_number = Column(String, nullable=False)
    pay_item_description = Column(String, nullable=False)
    unit_of_measurement = Column(String, nullable=False)
    output_per_hour = Column(Float, nullable=False)
    category = Column(String, nullable=True)

    quantity = Column(Float, nullable=False)

    labor_items = Column(JSON, nullable=False, default=list)
    equipment_items = Column(JSON, nullable=False, default=list)
    material_items = Column(JSON, nullable=False, default=list)

    labor_cost = Column(Float, nullable=False, default=0)
    equipment_cost = Column(Float, nullable=False, default=0)
    material_cost = Column(Float, nullable=False, default=0)
    direct_cost = Column(Float, nullable=False)
    ocm_percentage = Column(Float, nullable=False)
    ocm_cost = Column(Float, nullable=False)
    cp_percentage = Column(Float, nullable=False)
    cp_cost = Column(Float, nullable=False)
    subtotal_with_markup = Column(Float, nullable=False)
    vat_percentage = Column(Float, nullable=False)
    vat_cost = Column(Float, nullable=False)
    total_cost = Column(Float, nullable=False)
    unit_cost = Column(Float, nullable=False)
    total_amount = Column(Float, nullable=False)

    location = Column(String, nullable=False)
    as_of_date = Column(DateTime, nullable=True)
    instantiated_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    project = relationship("Project", back_populates="boq_items")
