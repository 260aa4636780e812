from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from voyagehub.dependencies import get_current_user, get_db, get_hub
from voyagehub.exceptions import BadRequestError
from voyagehub.logging_config import get_logger
from voyagehub.models.user import User
from voyagehub.realtime import TASK_UPDATED, RoomHub
from voyagehub.schemas.base import MessageResponse
from voyagehub.schemas.task import TaskCreate, TaskResponse, TaskUpdate
from voyagehub.services import task_service
from voyagehub.services.vacation_service import get_visible_vacation

logger = get_logger(__name__)
router = APIRouter(prefix="/tasks", tags=["tasks"])


@router.get("", response_model=List[TaskResponse])
async def list_tasks(
    vacation_id: Optional[str] = Query(None, alias="vacationId"),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Tasks of one vacation, newest first"""
    if not vacation_id:
        raise BadRequestError("vacationId is required")
    try:
        vacation = await get_visible_vacation(db, vacation_id, current_user)
        return await task_service.list_tasks(db, vacation)

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error fetching tasks for vacation {vacation_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch tasks"
        )


@router.post("", response_model=TaskResponse, status_code=status.HTTP_201_CREATED)
async def create_task(
    payload: TaskCreate,
    current_user: User = Depends(get_current_user),
    hub: RoomHub = Depends(get_hub),
    db: AsyncSession = Depends(get_db),
):
    try:
        task = await task_service.create_task(db, current_user, payload)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error creating task: {e}")
        await db.rollback()
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create task"
        )

    response = TaskResponse.model_validate(task)
    await hub.broadcast(task.vacation_id, TASK_UPDATED, {"action": "created", "task": response})
    return response


@router.patch("/{task_id}", response_model=TaskResponse)
async def update_task(
    task_id: str,
    payload: TaskUpdate,
    current_user: User = Depends(get_current_user),
    hub: RoomHub = Depends(get_hub),
    db: AsyncSession = Depends(get_db),
):
    try:
        task = await task_service.get_task_for_user(db, task_id, current_user)
        task = await task_service.update_task(db, task, payload)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error updating task {task_id}: {e}")
        await db.rollback()
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update task"
        )

    response = TaskResponse.model_validate(task)
    await hub.broadcast(task.vacation_id, TASK_UPDATED, {"action": "updated", "task": response})
    return response


@router.delete("/{task_id}", response_model=MessageResponse)
async def delete_task(
    task_id: str,
    current_user: User = Depends(get_current_user),
    hub: RoomHub = Depends(get_hub),
    db: AsyncSession = Depends(get_db),
):
    try:
        task = await task_service.get_task_for_user(db, task_id, current_user)
        vacation_id = task.vacation_id
        await task_service.delete_task(db, task)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error deleting task {task_id}: {e}")
        await db.rollback()
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to delete task"
        )

    await hub.broadcast(vacation_id, TASK_UPDATED, {"action": "deleted", "taskId": task_id})
    return MessageResponse(message="Task deleted successfully")
