import enum
from sqlalchemy import Column, String, Text, Date, DateTime, Boolean, ForeignKey, JSON, Enum as SQLEnum

from voyagehub.db import Base
from voyagehub.models.types import new_id
from voyagehub.utils.date_utils import utcnow


class VacationStatus(enum.Enum):
    """Enum for vacation planning states"""
    PLANNING = "planning"
    CONFIRMED = "confirmed"
    ACTIVE = "active"
    COMPLETED = "completed"


class Vacation(Base):
    __tablename__ = "vacations"

    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)
    status = Column(
        SQLEnum(VacationStatus, name="vacation_status_enum", values_callable=lambda obj: [e.value for e in obj]),
        nullable=False,
        default=VacationStatus.PLANNING,
    )
    # Destination objects and collaborator emails, validated by the schemas layer
    destinations = Column(JSON, nullable=False, default=list)
    collaborators = Column(JSON, nullable=False, default=list)
    is_public = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    def is_visible_to(self, user) -> bool:
        """Owner or listed collaborator (matched by email)."""
        if self.user_id == user.id:
            return True
        emails = {str(email).lower() for email in (self.collaborators or [])}
        return user.email.lower() in emails
