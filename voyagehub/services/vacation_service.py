"""
Vacation Service
Ownership checks, creation with its budget, partial updates and the
transactional cascade delete.
"""
from dataclasses import asdict, dataclass
from typing import Dict, List, Optional

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from voyagehub.exceptions import BadRequestError, NotFoundError
from voyagehub.logging_config import get_logger
from voyagehub.models.budget import Budget
from voyagehub.models.document import Document
from voyagehub.models.expense import Expense
from voyagehub.models.task import Task
from voyagehub.models.user import User
from voyagehub.models.vacation import Vacation
from voyagehub.schemas.vacation import VacationCreate, VacationUpdate
from voyagehub.services.document_storage import DocumentStorage

logger = get_logger(__name__)

VACATION_NOT_FOUND = "Vacation not found or unauthorized"


@dataclass
class CascadeDeleteResult:
    """Rows removed per table, plus the outcome of best-effort file cleanup."""
    tasks: int = 0
    documents: int = 0
    expenses: int = 0
    budgets: int = 0
    vacations: int = 0
    files_removed: int = 0
    files_failed: int = 0

    def as_dict(self) -> Dict[str, int]:
        return asdict(self)


async def get_owned_vacation(session: AsyncSession, vacation_id: str, user_id: str) -> Vacation:
    """
    Fetch a vacation owned by ``user_id``.

    Raises:
        NotFoundError: missing or owned by someone else (existence is not leaked)
    """
    result = await session.execute(
        select(Vacation).where(Vacation.id == vacation_id, Vacation.user_id == user_id)
    )
    vacation = result.scalar_one_or_none()
    if vacation is None:
        raise NotFoundError(VACATION_NOT_FOUND)
    return vacation


async def get_visible_vacation(session: AsyncSession, vacation_id: str, user: User) -> Vacation:
    """Fetch a vacation the user owns or collaborates on."""
    result = await session.execute(select(Vacation).where(Vacation.id == vacation_id))
    vacation = result.scalar_one_or_none()
    if vacation is None or not vacation.is_visible_to(user):
        raise NotFoundError("Vacation not found")
    return vacation


async def list_user_vacations(session: AsyncSession, user_id: str) -> List[Vacation]:
    result = await session.execute(
        select(Vacation).where(Vacation.user_id == user_id).order_by(Vacation.created_at.desc())
    )
    return list(result.scalars().all())


async def get_budgets_by_vacation(session: AsyncSession, vacation_ids: List[str]) -> Dict[str, Budget]:
    if not vacation_ids:
        return {}
    result = await session.execute(select(Budget).where(Budget.vacation_id.in_(vacation_ids)))
    return {budget.vacation_id: budget for budget in result.scalars().all()}


def _destinations_json(destinations) -> list:
    return [d.model_dump(mode="json", by_alias=True, exclude_none=True) for d in destinations]


async def create_vacation(session: AsyncSession, user: User, payload: VacationCreate) -> tuple[Vacation, Budget]:
    """Insert the vacation and its (empty) budget in one transaction."""
    vacation = Vacation(
        user_id=user.id,
        title=payload.title,
        description=payload.description,
        start_date=payload.start_date,
        end_date=payload.end_date,
        destinations=_destinations_json(payload.destinations),
        collaborators=list(payload.collaborators),
    )
    session.add(vacation)
    await session.flush()

    budget = Budget(vacation_id=vacation.id, total_budget=0, currency=_preferred_currency(user), categories=[])
    session.add(budget)

    await session.commit()
    await session.refresh(vacation)
    await session.refresh(budget)
    logger.info(f"Created vacation {vacation.id} with budget {budget.id} for user {user.id}")
    return vacation, budget


def _preferred_currency(user: User) -> str:
    currency = (user.preferences or {}).get("currency") or "USD"
    return str(currency).upper()[:3]


async def update_vacation(session: AsyncSession, vacation: Vacation, payload: VacationUpdate) -> Vacation:
    changes = payload.changes()
    if "destinations" in changes:
        changes["destinations"] = _destinations_json(payload.destinations)

    start_date = changes.get("start_date", vacation.start_date)
    end_date = changes.get("end_date", vacation.end_date)
    if start_date >= end_date:
        raise BadRequestError("startDate must be before endDate")

    for field, value in changes.items():
        setattr(vacation, field, value)

    await session.commit()
    await session.refresh(vacation)
    logger.info(f"Updated vacation {vacation.id}: {sorted(changes)}")
    return vacation


async def delete_vacation_cascade(
    session: AsyncSession,
    vacation_id: str,
    user_id: str,
    storage: Optional[DocumentStorage] = None,
) -> CascadeDeleteResult:
    """
    Delete a vacation and every row that depends on it.

    Tasks, documents, the budget's expenses, the budget and finally the
    vacation are deleted in that order inside a single transaction. Any
    store error rolls the whole sequence back and is re-raised. Stored
    document files are removed only after the commit, best effort.

    Raises:
        NotFoundError: no vacation with this id owned by ``user_id``; nothing is changed
        SQLAlchemyError: a delete failed; nothing is changed
    """
    await get_owned_vacation(session, vacation_id, user_id)

    result = CascadeDeleteResult()
    try:
        task_rows = await session.execute(delete(Task).where(Task.vacation_id == vacation_id))
        result.tasks = task_rows.rowcount

        file_urls = (
            await session.execute(select(Document.file_url).where(Document.vacation_id == vacation_id))
        ).scalars().all()
        document_rows = await session.execute(delete(Document).where(Document.vacation_id == vacation_id))
        result.documents = document_rows.rowcount

        budget_id = (
            await session.execute(select(Budget.id).where(Budget.vacation_id == vacation_id))
        ).scalar_one_or_none()
        if budget_id is not None:
            expense_rows = await session.execute(delete(Expense).where(Expense.budget_id == budget_id))
            result.expenses = expense_rows.rowcount
            budget_rows = await session.execute(delete(Budget).where(Budget.id == budget_id))
            result.budgets = budget_rows.rowcount

        vacation_rows = await session.execute(
            delete(Vacation).where(Vacation.id == vacation_id, Vacation.user_id == user_id)
        )
        result.vacations = vacation_rows.rowcount

        await session.commit()
    except SQLAlchemyError as e:
        await session.rollback()
        logger.error(f"Cascade delete of vacation {vacation_id} rolled back: {e}")
        raise

    if storage is not None:
        for url in file_urls:
            if storage.remove(url.rsplit("/", 1)[-1]):
                result.files_removed += 1
            else:
                result.files_failed += 1

    logger.info(f"Deleted vacation {vacation_id}: {result.as_dict()}")
    return result
