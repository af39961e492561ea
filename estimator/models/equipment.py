from datetime import datetime

from sqlalchemy import CheckConstraint, Column, DateTime, Float, Integer, String

from estimator.database import Base


class Equipment(Base):
    __tablename__ = "equipment"

    __table_args__ = (
        CheckConstraint("hourly_rate >= 0", name="ck_equipment_hourly_rate_nonnegative"),
        CheckConstraint("rental_rate >= 0", name="ck_equipment_rental_rate_nonnegative"),
    )

    id = Column(Integer, primary_key=True, index=True)
    no = Column(Integer, nullable=False, unique=True, index=True)
    complete_description = Column(String, nullable=False)
    description = Column(String, nullable=False, index=True)
    equipment_model = Column(String, nullable=False, default="")
    capacity = Column(String, nullable=False, default="")
    flywheel_horsepower = Column(Float, nullable=False, default=0)
    rental_rate = Column(Float, nullable=False, default=0)
    hourly_rate = Column(Float, nullable=False, default=0)

    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)
