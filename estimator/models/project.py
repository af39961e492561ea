from datetime import datetime

from sqlalchemy import JSON, CheckConstraint, Column, Date, DateTime, Float, Index, Integer, String, text
from sqlalchemy.orm import relationship

from estimator.database import Base

PROJECT_STATUSES = ("Planning", "Approved", "Ongoing", "Completed", "Cancelled")


class Project(Base):
    __tablename__ = "projects"

    __table_args__ = (
        CheckConstraint(
            "status IN (" + ",".join(f"'{s}'" for s in PROJECT_STATUSES) + ")",
            name="ck_projects_status_allowed",
        ),
        CheckConstraint("hauling_cost_per_km >= 0", name="ck_projects_hauling_cost_nonnegative"),
        CheckConstraint("distance_from_office >= 0", name="ck_projects_distance_nonnegative"),
        # Contract IDs are optional; only assigned ones must be unique.
        Index(
            "uq_projects_contract_id",
            "contract_id",
            unique=True,
            sqlite_where=text("contract_id IS NOT NULL"),
            postgresql_where=text("contract_id IS NOT NULL"),
        ),
    )

    id = Column(Integer, primary_key=True, index=True)
    project_name = Column(String, nullable=False)
    project_location = Column(String, nullable=False, index=True)
    district = Column(String, nullable=False, default="Bukidnon 1st")
    implementing_office = Column(
        String, nullable=False, default="DPWH Bukidnon 1st District Engineering Office"
    )
    appropriation = Column(Float, nullable=False, default=0)
    contract_id = Column(String, nullable=True)
    project_type = Column(String, nullable=False, default="")
    status = Column(String, nullable=False, default="Planning", index=True)
    start_date = Column(Date, nullable=True)
    end_date = Column(Date, nullable=True)
    description = Column(String, nullable=False, default="")

    # Informational rate kept on the record; hauling is priced from
    # distance_from_office and hauling_config.
    hauling_cost_per_km = Column(Float, nullable=False, default=0)
    distance_from_office = Column(Float, nullable=False, default=0)
    # {total_distance, free_hauling_distance, route_segments[], equipment_rental_rate, equipment_capacity}
    hauling_config = Column(JSON, nullable=True)

    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    boq_items = relationship(
        "ProjectBoq",
        back_populates="project",
        cascade="all, delete-orphan",
    )
