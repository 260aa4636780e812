import enum
from sqlalchemy import Column, String, Text, DateTime, ForeignKey, Enum as SQLEnum

from voyagehub.db import Base
from voyagehub.models.types import new_id
from voyagehub.utils.date_utils import utcnow


class TaskStatus(enum.Enum):
    PENDING = "pending"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"


class TaskPriority(enum.Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class Task(Base):
    __tablename__ = "tasks"

    id = Column(String(36), primary_key=True, default=new_id)
    vacation_id = Column(String(36), ForeignKey("vacations.id"), nullable=False, index=True)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    status = Column(
        SQLEnum(TaskStatus, name="task_status_enum", values_callable=lambda obj: [e.value for e in obj]),
        nullable=False,
        default=TaskStatus.PENDING,
    )
    priority = Column(
        SQLEnum(TaskPriority, name="task_priority_enum", values_callable=lambda obj: [e.value for e in obj]),
        nullable=False,
        default=TaskPriority.MEDIUM,
    )
    assigned_to = Column(String, nullable=True)
    due_date = Column(DateTime, nullable=True)
    # Only set while status is COMPLETED
    completed_at = Column(DateTime, nullable=True)
    created_by = Column(String(36), ForeignKey("users.id"), nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)
