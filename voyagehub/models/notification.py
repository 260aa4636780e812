import enum
from sqlalchemy import Column, String, Text, Boolean, DateTime, ForeignKey, Enum as SQLEnum

from voyagehub.db import Base
from voyagehub.models.types import new_id
from voyagehub.utils.date_utils import utcnow


class NotificationType(enum.Enum):
    REMINDER = "reminder"
    COLLABORATION = "collaboration"
    BUDGET = "budget"
    DOCUMENT = "document"
    SYSTEM = "system"


class Notification(Base):
    __tablename__ = "notifications"

    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    type = Column(
        SQLEnum(NotificationType, name="notification_type_enum", values_callable=lambda obj: [e.value for e in obj]),
        nullable=False,
    )
    title = Column(String, nullable=False)
    message = Column(Text, nullable=False)
    read = Column(Boolean, nullable=False, default=False)
    action_url = Column(String, nullable=True)
    created_at = Column(DateTime, default=utcnow, nullable=False)
