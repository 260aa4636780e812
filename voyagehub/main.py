from contextlib import asynccontextmanager
from typing import Optional

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from slowapi.util import get_remote_address
from starlette.middleware.cors import CORSMiddleware

from voyagehub.config import Settings, settings as default_settings
from voyagehub.db import Database
from voyagehub.exceptions import AppException
from voyagehub.logging_config import get_logger, setup_logging
from voyagehub.middleware.logging_middleware import LoggingMiddleware
from voyagehub.middleware.security_headers import SecurityHeadersMiddleware
from voyagehub.realtime import RoomHub
from voyagehub.routes import api_router
from voyagehub.routes import realtime as realtime_routes
from voyagehub.services.document_storage import DocumentStorage
from voyagehub.services.reminder_service import run_reminders
from voyagehub.utils.date_utils import utcnow

logger = get_logger(__name__)

VERSION = "1.0.0"

LOCATION_PREFIXES = ("body", "query", "path", "form", "header")


def _validation_errors(exc: RequestValidationError) -> list:
    errors = []
    for error in exc.errors():
        loc = [str(part) for part in error.get("loc", ()) if part not in LOCATION_PREFIXES]
        errors.append({"field": ".".join(loc), "message": error.get("msg", "Invalid value")})
    return errors


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or default_settings
    setup_logging(settings.LOG_LEVEL)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Starting up...")
        database = Database(settings.DATABASE_URL)
        if settings.AUTO_CREATE_TABLES:
            await database.create_all()

        storage = DocumentStorage(
            settings.UPLOAD_DIR,
            settings.MAX_UPLOAD_SIZE_BYTES,
            settings.ALLOWED_UPLOAD_MIME_TYPES,
        )
        storage.ensure_directory()

        app.state.settings = settings
        app.state.db = database
        app.state.storage = storage
        app.state.hub = RoomHub()

        scheduler = None
        try:
            if settings.SCHEDULER_ENABLED:
                scheduler = AsyncIOScheduler()
                scheduler.add_job(
                    run_reminders,
                    'interval',
                    minutes=settings.REMINDER_INTERVAL_MINUTES,
                    kwargs={'session_factory': database.session_factory, 'settings': settings},
                )
                scheduler.start()
                logger.info(
                    f"Scheduler started. Checking reminders every {settings.REMINDER_INTERVAL_MINUTES} minutes."
                )

            yield
        finally:
            logger.info("Shutting down...")
            if scheduler is not None and scheduler.running:
                scheduler.shutdown()
                logger.info("Scheduler shut down.")
            await database.dispose()

    app = FastAPI(
        title="VoyageHub API",
        description="Collaborative vacation planning API",
        version=VERSION,
        lifespan=lifespan
    )

    limiter = Limiter(
        key_func=get_remote_address,
        default_limits=[settings.RATE_LIMIT],
        enabled=settings.RATE_LIMIT_ENABLED,
    )
    app.state.limiter = limiter

    # Rate limiting and security headers
    app.add_middleware(SlowAPIMiddleware)
    app.add_middleware(SecurityHeadersMiddleware)

    # Logging middleware
    app.add_middleware(LoggingMiddleware)

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["DELETE", "GET", "POST", "PATCH"],
        allow_headers=["*"],
    )

    @app.exception_handler(AppException)
    async def app_exception_handler(request: Request, exc: AppException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"detail": exc.detail},
            headers=exc.headers,
        )

    # SlowAPIMiddleware calls this handler synchronously
    @app.exception_handler(RateLimitExceeded)
    def rate_limit_handler(request: Request, exc: RateLimitExceeded):
        logger.warning(f"Rate limit exceeded for {get_remote_address(request)} on {request.url.path}")
        return JSONResponse(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            content={"detail": "Too many requests, please try again later."},
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        errors = _validation_errors(exc)
        logger.info(f"Validation failed for {request.method} {request.url.path}: {errors}")
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"detail": "Validation failed", "errors": errors},
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "Internal server error"},
        )

    # Include routers
    app.include_router(api_router, prefix="/api")
    app.include_router(realtime_routes.router)

    @app.get("/health")
    @limiter.exempt
    async def health(request: Request):
        db_status = await request.app.state.db.check_connection()
        return {
            "status": "ok" if db_status else "degraded",
            "database": "connected" if db_status else "disconnected",
            "timestamp": utcnow().isoformat() + "Z",
        }

    @app.get("/")
    async def root():
        return {
            "message": "VoyageHub API",
            "version": VERSION,
            "endpoints": {
                "health": "/health",
                "auth": "/api/auth",
                "vacations": "/api/vacations",
                "tasks": "/api/tasks",
                "budget": "/api/budget",
                "documents": "/api/documents",
                "notifications": "/api/notifications",
                "websocket": "/ws",
            },
        }

    return app


app = create_app()
