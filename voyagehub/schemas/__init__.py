from voyagehub.schemas.base import CamelModel, PatchModel, MessageResponse
from voyagehub.schemas.user import (
    RegisterRequest,
    LoginRequest,
    UserPreferences,
    UserResponse,
    AuthResponse,
    ProfileUpdate,
)
from voyagehub.schemas.budget import (
    BudgetCategory,
    BudgetUpdate,
    BudgetResponse,
    BudgetSummaryResponse,
    ExpenseCreate,
    ExpenseUpdate,
    ExpenseResponse,
)
from voyagehub.schemas.vacation import (
    Destination,
    VacationCreate,
    VacationUpdate,
    VacationResponse,
    CascadeDeleteResponse,
)
from voyagehub.schemas.task import TaskCreate, TaskUpdate, TaskResponse
from voyagehub.schemas.document import DocumentUpdate, DocumentResponse
from voyagehub.schemas.notification import NotificationCreate, NotificationResponse

__all__ = [
    "CamelModel",
    "PatchModel",
    "MessageResponse",
    "RegisterRequest",
    "LoginRequest",
    "UserPreferences",
    "UserResponse",
    "AuthResponse",
    "ProfileUpdate",
    "BudgetCategory",
    "BudgetUpdate",
    "BudgetResponse",
    "BudgetSummaryResponse",
    "ExpenseCreate",
    "ExpenseUpdate",
    "ExpenseResponse",
    "Destination",
    "VacationCreate",
    "VacationUpdate",
    "VacationResponse",
    "CascadeDeleteResponse",
    "TaskCreate",
    "TaskUpdate",
    "TaskResponse",
    "DocumentUpdate",
    "DocumentResponse",
    "NotificationCreate",
    "NotificationResponse",
]
