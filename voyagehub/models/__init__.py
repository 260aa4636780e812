from voyagehub.db import Base
from voyagehub.models.user import User, DEFAULT_PREFERENCES
from voyagehub.models.vacation import Vacation, VacationStatus
from voyagehub.models.task import Task, TaskStatus, TaskPriority
from voyagehub.models.budget import Budget
from voyagehub.models.expense import Expense
from voyagehub.models.document import Document, DocumentType
from voyagehub.models.notification import Notification, NotificationType

__all__ = [
    "Base",
    "User",
    "DEFAULT_PREFERENCES",
    "Vacation",
    "VacationStatus",
    "Task",
    "TaskStatus",
    "TaskPriority",
    "Budget",
    "Expense",
    "Document",
    "DocumentType",
    "Notification",
    "NotificationType",
]
