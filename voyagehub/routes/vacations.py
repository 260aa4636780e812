from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from voyagehub.config import Settings
from voyagehub.dependencies import get_current_user, get_db, get_settings, get_storage
from voyagehub.logging_config import get_logger
from voyagehub.models.budget import Budget
from voyagehub.models.user import User
from voyagehub.models.vacation import Vacation
from voyagehub.schemas.budget import BudgetResponse
from voyagehub.schemas.vacation import CascadeDeleteResponse, VacationCreate, VacationResponse, VacationUpdate
from voyagehub.services import budget_service, vacation_service
from voyagehub.services.document_storage import DocumentStorage

logger = get_logger(__name__)
router = APIRouter(prefix="/vacations", tags=["vacations"])


def _vacation_response(vacation: Vacation, budget: Optional[BudgetResponse] = None) -> VacationResponse:
    return VacationResponse.model_validate(vacation).model_copy(update={"budget": budget})


def _plain_budget(budget: Optional[Budget]) -> Optional[BudgetResponse]:
    return BudgetResponse.model_validate(budget) if budget is not None else None


@router.get("", response_model=List[VacationResponse])
async def list_vacations(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """List the caller's vacations, newest first, each with its budget."""
    try:
        vacations = await vacation_service.list_user_vacations(db, current_user.id)
        budgets = await vacation_service.get_budgets_by_vacation(db, [v.id for v in vacations])
        return [_vacation_response(v, _plain_budget(budgets.get(v.id))) for v in vacations]

    except Exception as e:
        logger.error(f"Error fetching vacations: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch vacations"
        )


@router.post("", response_model=VacationResponse, status_code=status.HTTP_201_CREATED)
async def create_vacation(
    payload: VacationCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    try:
        vacation, budget = await vacation_service.create_vacation(db, current_user, payload)
        return _vacation_response(vacation, _plain_budget(budget))

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error creating vacation: {e}")
        await db.rollback()
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create vacation"
        )


@router.get("/{vacation_id}", response_model=VacationResponse)
async def get_vacation(
    vacation_id: str,
    current_user: User = Depends(get_current_user),
    settings: Settings = Depends(get_settings),
    db: AsyncSession = Depends(get_db),
):
    """Get a vacation the caller owns or collaborates on, with budget and expenses."""
    try:
        vacation = await vacation_service.get_visible_vacation(db, vacation_id, current_user)
        budgets = await vacation_service.get_budgets_by_vacation(db, [vacation.id])
        budget = budgets.get(vacation.id)
        budget_out = None
        if budget is not None:
            expenses = await budget_service.list_expenses(db, budget.id)
            budget_out = budget_service.budget_response(budget, expenses, settings.BUDGET_WARNING_PERCENT)
        return _vacation_response(vacation, budget_out)

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error fetching vacation {vacation_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch vacation"
        )


@router.patch("/{vacation_id}", response_model=VacationResponse)
async def update_vacation(
    vacation_id: str,
    payload: VacationUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    try:
        vacation = await vacation_service.get_owned_vacation(db, vacation_id, current_user.id)
        vacation = await vacation_service.update_vacation(db, vacation, payload)
        budgets = await vacation_service.get_budgets_by_vacation(db, [vacation.id])
        return _vacation_response(vacation, _plain_budget(budgets.get(vacation.id)))

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error updating vacation {vacation_id}: {e}")
        await db.rollback()
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update vacation"
        )


@router.delete("/{vacation_id}", response_model=CascadeDeleteResponse)
async def delete_vacation(
    vacation_id: str,
    current_user: User = Depends(get_current_user),
    storage: DocumentStorage = Depends(get_storage),
    db: AsyncSession = Depends(get_db),
):
    """Delete a vacation with its tasks, documents, budget and expenses."""
    try:
        result = await vacation_service.delete_vacation_cascade(db, vacation_id, current_user.id, storage)
        return CascadeDeleteResponse(
            message="Vacation deleted successfully",
            deleted={
                "tasks": result.tasks,
                "documents": result.documents,
                "expenses": result.expenses,
                "budgets": result.budgets,
                "vacations": result.vacations,
            },
        )

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error deleting vacation {vacation_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to delete vacation"
        )
