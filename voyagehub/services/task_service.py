from datetime import datetime
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from voyagehub.exceptions import NotFoundError
from voyagehub.logging_config import get_logger
from voyagehub.models.task import Task, TaskStatus
from voyagehub.models.user import User
from voyagehub.models.vacation import Vacation
from voyagehub.schemas.task import TaskCreate, TaskUpdate
from voyagehub.services.vacation_service import get_visible_vacation
from voyagehub.utils.date_utils import utcnow

logger = get_logger(__name__)


def apply_status_transition(task: Task, new_status: TaskStatus, now: Optional[datetime] = None) -> None:
    """
    Move a task to ``new_status`` keeping ``completed_at`` consistent.

    Entering COMPLETED stamps the time, staying COMPLETED keeps the original
    stamp, and leaving it clears the stamp.
    """
    if new_status == TaskStatus.COMPLETED:
        if task.status != TaskStatus.COMPLETED or task.completed_at is None:
            task.completed_at = now or utcnow()
    else:
        task.completed_at = None
    task.status = new_status


async def list_tasks(session: AsyncSession, vacation: Vacation) -> List[Task]:
    result = await session.execute(
        select(Task).where(Task.vacation_id == vacation.id).order_by(Task.created_at.desc())
    )
    return list(result.scalars().all())


async def get_task_for_user(session: AsyncSession, task_id: str, user: User) -> Task:
    """Load a task whose vacation the user can see; 404 otherwise."""
    result = await session.execute(select(Task).where(Task.id == task_id))
    task = result.scalar_one_or_none()
    if task is None:
        raise NotFoundError("Task not found")
    try:
        await get_visible_vacation(session, task.vacation_id, user)
    except NotFoundError:
        raise NotFoundError("Task not found")
    return task


async def create_task(session: AsyncSession, user: User, payload: TaskCreate) -> Task:
    vacation = await get_visible_vacation(session, payload.vacation_id, user)
    task = Task(
        vacation_id=vacation.id,
        title=payload.title,
        description=payload.description,
        status=TaskStatus.PENDING,
        priority=payload.priority,
        assigned_to=payload.assigned_to,
        due_date=payload.due_date,
        created_by=user.id,
    )
    session.add(task)
    await session.commit()
    await session.refresh(task)
    logger.info(f"Created task {task.id} in vacation {vacation.id}")
    return task


async def update_task(session: AsyncSession, task: Task, payload: TaskUpdate) -> Task:
    changes = payload.changes()
    new_status = changes.pop("status", None)
    for field, value in changes.items():
        setattr(task, field, value)
    if new_status is not None:
        apply_status_transition(task, new_status)

    await session.commit()
    await session.refresh(task)
    return task


async def delete_task(session: AsyncSession, task: Task) -> None:
    await session.delete(task)
    await session.commit()
    logger.info(f"Deleted task {task.id}")
