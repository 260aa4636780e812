from fastapi import APIRouter

api_router = APIRouter()

# Import route modules here
from voyagehub.routes import auth, vacations, tasks, budget, documents, notifications

api_router.include_router(auth.router)
api_router.include_router(vacations.router)
api_router.include_router(tasks.router)
api_router.include_router(budget.router)
api_router.include_router(documents.router)
api_router.include_router(notifications.router)
