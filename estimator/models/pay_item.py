from datetime import datetime

from sqlalchemy import Boolean, Column, DateTime, Integer, String

from estimator.database import Base


class PayItem(Base):
    __tablename__ = "pay_items"

    id = Column(Integer, primary_key=True, index=True)
    division = Column(String, nullable=False, index=True)
    part = Column(String, nullable=False, index=True)
    item = Column(String, nullable=False, index=True)
    pay_item_number = Column(String, nullable=False, unique=True, index=True)
    description = Column(String, nullable=False)
    unit = Column(String, nullable=False)
    is_active = Column(Boolean, nullable=False, default=True, index=True)

    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)
