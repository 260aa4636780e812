from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from voyagehub.dependencies import get_current_user, get_db
from voyagehub.exceptions import NotFoundError
from voyagehub.logging_config import get_logger
from voyagehub.models.notification import Notification
from voyagehub.models.user import User
from voyagehub.schemas.base import MessageResponse
from voyagehub.schemas.notification import NotificationCreate, NotificationResponse

logger = get_logger(__name__)
router = APIRouter(prefix="/notifications", tags=["notifications"])

LIST_LIMIT = 50


async def _get_own_notification(db: AsyncSession, notification_id: str, user: User) -> Notification:
    result = await db.execute(
        select(Notification).where(Notification.id == notification_id, Notification.user_id == user.id)
    )
    notification = result.scalar_one_or_none()
    if notification is None:
        raise NotFoundError("Notification not found")
    return notification


@router.get("", response_model=List[NotificationResponse])
async def list_notifications(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Newest notifications for the caller"""
    try:
        result = await db.execute(
            select(Notification)
            .where(Notification.user_id == current_user.id)
            .order_by(Notification.created_at.desc())
            .limit(LIST_LIMIT)
        )
        return result.scalars().all()

    except Exception as e:
        logger.error(f"Error fetching notifications: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch notifications"
        )


@router.post("", response_model=NotificationResponse, status_code=status.HTTP_201_CREATED)
async def create_notification(
    payload: NotificationCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    try:
        recipient = await db.execute(select(User.id).where(User.id == payload.user_id))
        if recipient.first() is None:
            raise NotFoundError("User not found")

        notification = Notification(
            user_id=payload.user_id,
            type=payload.type,
            title=payload.title,
            message=payload.message,
            action_url=payload.action_url,
        )
        db.add(notification)
        await db.commit()
        await db.refresh(notification)

        logger.info(f"User {current_user.id} created notification {notification.id} for {payload.user_id}")
        return notification

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error creating notification: {e}")
        await db.rollback()
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create notification"
        )


@router.patch("/read-all", response_model=MessageResponse)
async def mark_all_read(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    try:
        await db.execute(
            update(Notification)
            .where(Notification.user_id == current_user.id, Notification.read.is_(False))
            .values(read=True)
        )
        await db.commit()
        return MessageResponse(message="All notifications marked as read")

    except Exception as e:
        logger.error(f"Error marking notifications read: {e}")
        await db.rollback()
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update notifications"
        )


@router.patch("/{notification_id}/read", response_model=NotificationResponse)
async def mark_read(
    notification_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    try:
        notification = await _get_own_notification(db, notification_id, current_user)
        notification.read = True
        await db.commit()
        await db.refresh(notification)
        return notification

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error marking notification {notification_id} read: {e}")
        await db.rollback()
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update notification"
        )


@router.delete("/{notification_id}", response_model=MessageResponse)
async def delete_notification(
    notification_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    try:
        notification = await _get_own_notification(db, notification_id, current_user)
        await db.delete(notification)
        await db.commit()
        return MessageResponse(message="Notification deleted successfully")

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error deleting notification {notification_id}: {e}")
        await db.rollback()
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to delete notification"
        )
