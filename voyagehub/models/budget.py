from sqlalchemy import Column, String, DateTime, ForeignKey, JSON

from voyagehub.db import Base
from voyagehub.models.types import DecimalText, new_id
from voyagehub.utils.date_utils import utcnow


class Budget(Base):
    __tablename__ = "budgets"

    id = Column(String(36), primary_key=True, default=new_id)
    # One budget per vacation
    vacation_id = Column(String(36), ForeignKey("vacations.id"), nullable=False, unique=True, index=True)
    total_budget = Column(DecimalText, nullable=False, default=0)
    currency = Column(String(3), nullable=False, default="USD")
    # [{id, name, allocated, spent, color}]
    categories = Column(JSON, nullable=False, default=list)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)
