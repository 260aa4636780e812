"""
Budget Service
Loads budgets with their expenses, applies budget and expense edits, and
attaches the aggregated summary to responses.
"""
from decimal import Decimal
from typing import List, Tuple

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from voyagehub.exceptions import NotFoundError
from voyagehub.logging_config import get_logger
from voyagehub.models.budget import Budget
from voyagehub.models.expense import Expense
from voyagehub.models.user import User
from voyagehub.models.vacation import Vacation
from voyagehub.schemas.budget import (
    BudgetResponse,
    BudgetSummaryResponse,
    BudgetUpdate,
    ExpenseCreate,
    ExpenseResponse,
    ExpenseUpdate,
)
from voyagehub.services.budget_aggregator import (
    BudgetSummary,
    allocations_from_json,
    entries_from_expenses,
    summarize_budget,
)
from voyagehub.services.vacation_service import get_visible_vacation

logger = get_logger(__name__)


async def get_budget_for_vacation(session: AsyncSession, vacation_id: str) -> Budget:
    result = await session.execute(select(Budget).where(Budget.vacation_id == vacation_id))
    budget = result.scalar_one_or_none()
    if budget is None:
        raise NotFoundError("Budget not found")
    return budget


async def list_expenses(session: AsyncSession, budget_id: str) -> List[Expense]:
    result = await session.execute(
        select(Expense)
        .where(Expense.budget_id == budget_id)
        .order_by(Expense.date.desc(), Expense.created_at.desc())
    )
    return list(result.scalars().all())


def build_summary(budget: Budget, expenses: List[Expense], warning_percent) -> BudgetSummary:
    return summarize_budget(
        budget.total_budget,
        allocations_from_json(budget.categories),
        entries_from_expenses(expenses),
        Decimal(warning_percent),
    )


def budget_response(budget: Budget, expenses: List[Expense], warning_percent) -> BudgetResponse:
    """Serialize a budget with its expenses and derived summary."""
    summary = build_summary(budget, expenses, warning_percent)
    return BudgetResponse.model_validate(budget).model_copy(
        update={
            "expenses": [ExpenseResponse.model_validate(e) for e in expenses],
            "summary": BudgetSummaryResponse.model_validate(summary),
        }
    )


async def update_budget(session: AsyncSession, budget: Budget, payload: BudgetUpdate) -> Budget:
    changes = payload.changes()
    if "categories" in changes:
        changes["categories"] = [
            c.model_dump(mode="json", by_alias=True, exclude_none=True) for c in payload.categories
        ]
    for field, value in changes.items():
        setattr(budget, field, value)

    await session.commit()
    await session.refresh(budget)
    logger.info(f"Updated budget {budget.id}: {sorted(changes)}")
    return budget


async def add_expense(session: AsyncSession, budget: Budget, payload: ExpenseCreate) -> Expense:
    expense = Expense(
        budget_id=budget.id,
        category_id=payload.category_id,
        title=payload.title,
        amount=payload.amount,
        currency=payload.currency,
        date=payload.date,
        receipt=payload.receipt,
        description=payload.description,
    )
    session.add(expense)
    await session.commit()
    await session.refresh(expense)
    logger.info(f"Added expense {expense.id} to budget {budget.id}")
    return expense


async def get_expense_for_user(session: AsyncSession, expense_id: str, user: User) -> Tuple[Expense, Vacation]:
    """Resolve an expense through its budget to a vacation the user can see."""
    result = await session.execute(
        select(Expense, Budget.vacation_id)
        .join(Budget, Expense.budget_id == Budget.id)
        .where(Expense.id == expense_id)
    )
    row = result.first()
    if row is None:
        raise NotFoundError("Expense not found")
    expense, vacation_id = row
    try:
        vacation = await get_visible_vacation(session, vacation_id, user)
    except NotFoundError:
        raise NotFoundError("Expense not found")
    return expense, vacation


async def update_expense(session: AsyncSession, expense: Expense, payload: ExpenseUpdate) -> Expense:
    changes = payload.changes()
    for field, value in changes.items():
        setattr(expense, field, value)
    await session.commit()
    await session.refresh(expense)
    return expense


async def delete_expense(session: AsyncSession, expense: Expense) -> None:
    await session.delete(expense)
    await session.commit()
    logger.info(f"Deleted expense {expense.id}")
