import time
import uuid
import logging
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

logger = logging.getLogger(__name__)

QUIET_PATHS = {"/health"}


class LoggingMiddleware(BaseHTTPMiddleware):
    """Logs each API request with a request id and its processing time."""

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex[:12]
        request.state.request_id = request_id
        start_time = time.perf_counter()
        quiet = request.url.path in QUIET_PATHS

        if not quiet:
            logger.info(
                f"[{request_id}] {request.method} {request.url.path} - "
                f"client={request.client.host if request.client else 'unknown'}"
            )

        try:
            response = await call_next(request)
        except Exception:
            logger.exception(f"[{request_id}] Unhandled error on {request.method} {request.url.path}")
            raise

        elapsed = time.perf_counter() - start_time

        # Bodies and auth headers are never logged, only the outcome
        if not quiet:
            logger.info(
                f"[{request_id}] {request.method} {request.url.path} -> "
                f"{response.status_code} in {elapsed:.4f}s"
            )

        response.headers["X-Process-Time"] = f"{elapsed:.4f}"
        response.headers["X-Request-ID"] = request_id
        return response
