from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from voyagehub.config import Settings
from voyagehub.dependencies import get_current_user, get_db, get_hub, get_settings
from voyagehub.logging_config import get_logger
from voyagehub.models.user import User
from voyagehub.realtime import BUDGET_UPDATED, RoomHub
from voyagehub.schemas.base import MessageResponse
from voyagehub.schemas.budget import (
    BudgetResponse,
    BudgetSummaryResponse,
    BudgetUpdate,
    ExpenseCreate,
    ExpenseResponse,
    ExpenseUpdate,
)
from voyagehub.services import budget_service
from voyagehub.services.vacation_service import get_visible_vacation

logger = get_logger(__name__)
router = APIRouter(prefix="/budget", tags=["budget"])


@router.patch("/expenses/{expense_id}", response_model=ExpenseResponse)
async def update_expense(
    expense_id: str,
    payload: ExpenseUpdate,
    current_user: User = Depends(get_current_user),
    hub: RoomHub = Depends(get_hub),
    db: AsyncSession = Depends(get_db),
):
    try:
        expense, vacation = await budget_service.get_expense_for_user(db, expense_id, current_user)
        expense = await budget_service.update_expense(db, expense, payload)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error updating expense {expense_id}: {e}")
        await db.rollback()
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update expense"
        )

    response = ExpenseResponse.model_validate(expense)
    await hub.broadcast(vacation.id, BUDGET_UPDATED, {"action": "expense-updated", "expense": response})
    return response


@router.delete("/expenses/{expense_id}", response_model=MessageResponse)
async def delete_expense(
    expense_id: str,
    current_user: User = Depends(get_current_user),
    hub: RoomHub = Depends(get_hub),
    db: AsyncSession = Depends(get_db),
):
    try:
        expense, vacation = await budget_service.get_expense_for_user(db, expense_id, current_user)
        await budget_service.delete_expense(db, expense)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error deleting expense {expense_id}: {e}")
        await db.rollback()
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to delete expense"
        )

    await hub.broadcast(vacation.id, BUDGET_UPDATED, {"action": "expense-deleted", "expenseId": expense_id})
    return MessageResponse(message="Expense deleted successfully")


@router.get("/{vacation_id}", response_model=BudgetResponse)
async def get_budget(
    vacation_id: str,
    current_user: User = Depends(get_current_user),
    settings: Settings = Depends(get_settings),
    db: AsyncSession = Depends(get_db),
):
    """Budget with its expenses (newest first) and derived summary"""
    try:
        vacation = await get_visible_vacation(db, vacation_id, current_user)
        budget = await budget_service.get_budget_for_vacation(db, vacation.id)
        expenses = await budget_service.list_expenses(db, budget.id)
        return budget_service.budget_response(budget, expenses, settings.BUDGET_WARNING_PERCENT)

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error fetching budget for vacation {vacation_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch budget"
        )


@router.get("/{vacation_id}/summary", response_model=BudgetSummaryResponse)
async def get_budget_summary(
    vacation_id: str,
    current_user: User = Depends(get_current_user),
    settings: Settings = Depends(get_settings),
    db: AsyncSession = Depends(get_db),
):
    try:
        vacation = await get_visible_vacation(db, vacation_id, current_user)
        budget = await budget_service.get_budget_for_vacation(db, vacation.id)
        expenses = await budget_service.list_expenses(db, budget.id)
        summary = budget_service.build_summary(budget, expenses, settings.BUDGET_WARNING_PERCENT)
        return BudgetSummaryResponse.model_validate(summary)

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error summarizing budget for vacation {vacation_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to summarize budget"
        )


@router.patch("/{vacation_id}", response_model=BudgetResponse)
async def update_budget(
    vacation_id: str,
    payload: BudgetUpdate,
    current_user: User = Depends(get_current_user),
    settings: Settings = Depends(get_settings),
    hub: RoomHub = Depends(get_hub),
    db: AsyncSession = Depends(get_db),
):
    try:
        vacation = await get_visible_vacation(db, vacation_id, current_user)
        budget = await budget_service.get_budget_for_vacation(db, vacation.id)
        budget = await budget_service.update_budget(db, budget, payload)
        expenses = await budget_service.list_expenses(db, budget.id)
        response = budget_service.budget_response(budget, expenses, settings.BUDGET_WARNING_PERCENT)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error updating budget for vacation {vacation_id}: {e}")
        await db.rollback()
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update budget"
        )

    await hub.broadcast(vacation_id, BUDGET_UPDATED, {"action": "budget-updated", "summary": response.summary})
    return response


@router.post("/{vacation_id}/expenses", response_model=ExpenseResponse, status_code=status.HTTP_201_CREATED)
async def add_expense(
    vacation_id: str,
    payload: ExpenseCreate,
    current_user: User = Depends(get_current_user),
    hub: RoomHub = Depends(get_hub),
    db: AsyncSession = Depends(get_db),
):
    try:
        vacation = await get_visible_vacation(db, vacation_id, current_user)
        budget = await budget_service.get_budget_for_vacation(db, vacation.id)
        expense = await budget_service.add_expense(db, budget, payload)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error adding expense to vacation {vacation_id}: {e}")
        await db.rollback()
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to add expense"
        )

    response = ExpenseResponse.model_validate(expense)
    await hub.broadcast(vacation_id, BUDGET_UPDATED, {"action": "expense-added", "expense": response})
    return response
