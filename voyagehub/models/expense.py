from sqlalchemy import Column, String, Text, Date, DateTime, ForeignKey

from voyagehub.db import Base
from voyagehub.models.types import DecimalText, new_id
from voyagehub.utils.date_utils import utcnow


class Expense(Base):
    __tablename__ = "expenses"

    id = Column(String(36), primary_key=True, default=new_id)
    budget_id = Column(String(36), ForeignKey("budgets.id"), nullable=False, index=True)
    # Refers to an entry of Budget.categories, not a table
    category_id = Column(String, nullable=True)
    title = Column(String, nullable=False)
    amount = Column(DecimalText, nullable=False)
    currency = Column(String(3), nullable=False, default="USD")
    date = Column(Date, nullable=False)
    receipt = Column(String, nullable=True)
    description = Column(Text, nullable=True)
    created_at = Column(DateTime, default=utcnow, nullable=False)
