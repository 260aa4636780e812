"""
Reminder Service
Periodic job that turns upcoming document expirations and budget overruns
into notifications for the vacation owner.
"""
from decimal import Decimal
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from voyagehub.config import Settings
from voyagehub.logging_config import get_logger
from voyagehub.models.budget import Budget
from voyagehub.models.document import Document
from voyagehub.models.notification import Notification, NotificationType
from voyagehub.models.user import User
from voyagehub.models.vacation import Vacation
from voyagehub.services.budget_aggregator import ALERT_OK, ALERT_OVER_BUDGET
from voyagehub.services.budget_service import build_summary, list_expenses
from voyagehub.utils.date_utils import days_until, expiry_window

logger = get_logger(__name__)


def reminders_enabled(user: User) -> bool:
    notifications = (user.preferences or {}).get("notifications") or {}
    return notifications.get("reminders", True) is not False


async def notify_once(
    session: AsyncSession,
    user_id: str,
    type: NotificationType,
    title: str,
    message: str,
    action_url: Optional[str] = None,
) -> bool:
    """
    Add a notification unless an identical one (user, type, title, action URL)
    already exists. Returns True when a row was added.
    """
    result = await session.execute(
        select(Notification.id).where(
            Notification.user_id == user_id,
            Notification.type == type,
            Notification.title == title,
            Notification.action_url == action_url,
        )
    )
    if result.first() is not None:
        return False
    session.add(
        Notification(user_id=user_id, type=type, title=title, message=message, action_url=action_url)
    )
    await session.flush()
    return True


async def document_expiry_reminders(session: AsyncSession, warning_days: int) -> int:
    start, end = expiry_window(warning_days)
    result = await session.execute(
        select(Document, Vacation, User)
        .join(Vacation, Document.vacation_id == Vacation.id)
        .join(User, Vacation.user_id == User.id)
        .where(
            Document.expiration_date.is_not(None),
            Document.expiration_date >= start,
            Document.expiration_date <= end,
        )
    )

    created = 0
    for document, vacation, owner in result.all():
        if not reminders_enabled(owner):
            continue
        days = days_until(document.expiration_date)
        when = "today" if days == 0 else f"in {days} day{'s' if days != 1 else ''}"
        added = await notify_once(
            session,
            owner.id,
            NotificationType.REMINDER,
            f"{document.title} expires soon",
            f"Your {document.type.value} for {vacation.title} expires {when} "
            f"({document.expiration_date.isoformat()}).",
            f"/vacations/{vacation.id}/documents",
        )
        created += int(added)
    return created


async def budget_alert_reminders(session: AsyncSession, warning_percent: int) -> int:
    result = await session.execute(
        select(Budget, Vacation, User)
        .join(Vacation, Budget.vacation_id == Vacation.id)
        .join(User, Vacation.user_id == User.id)
    )

    created = 0
    for budget, vacation, owner in result.all():
        if not reminders_enabled(owner):
            continue
        summary = build_summary(budget, await list_expenses(session, budget.id), Decimal(warning_percent))
        if summary.alert_level == ALERT_OK:
            continue
        if summary.alert_level == ALERT_OVER_BUDGET:
            title = f"{vacation.title} is over budget"
        else:
            title = f"{vacation.title} budget is running low"
        added = await notify_once(
            session,
            owner.id,
            NotificationType.BUDGET,
            title,
            f"You have spent {summary.total_spent} of {summary.total_budget} {budget.currency} "
            f"({summary.utilization_percent}%).",
            f"/vacations/{vacation.id}/budget",
        )
        created += int(added)
    return created


async def run_reminders(session_factory: async_sessionmaker, settings: Settings) -> int:
    """Scheduler entry point. Returns the number of notifications created."""
    async with session_factory() as session:
        try:
            created = await document_expiry_reminders(session, settings.DOCUMENT_EXPIRY_WARNING_DAYS)
            created += await budget_alert_reminders(session, settings.BUDGET_WARNING_PERCENT)
            await session.commit()
        except Exception as e:
            await session.rollback()
            logger.error(f"Reminder job failed: {e}")
            raise

    if created:
        logger.info(f"Reminder job created {created} notifications")
    return created
