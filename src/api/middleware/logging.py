"""
Request logging middleware.

Binds the request id and acting user into the structlog context so that
ledger events emitted while serving the request carry them too.
"""

import time
import uuid
from collections.abc import Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from src.api.dependencies import SYSTEM_ACTOR
from src.config import bind_request_context, clear_request_context, get_logger

logger = get_logger(__name__)

ACTOR_HEADER = "X-User-Id"


class LoggingMiddleware(BaseHTTPMiddleware):
    """Logs request start, completion and timing."""

    async def dispatch(
        self,
        request: Request,
        call_next: Callable,
    ) -> Response:
        request_id = str(uuid.uuid4())[:8]
        request.state.request_id = request_id

        actor = (request.headers.get(ACTOR_HEADER) or "").strip() or SYSTEM_ACTOR
        bind_request_context(request_id, actor)

        start = time.time()
        logger.info(
            "request_started",
            method=request.method,
            path=request.url.path,
            client=request.client.host if request.client else "unknown",
        )

        try:
            response = await call_next(request)
        except Exception as e:
            logger.error(
                "request_failed",
                method=request.method,
                path=request.url.path,
                error=str(e),
                duration_ms=round((time.time() - start) * 1000, 2),
            )
            raise

        duration_ms = (time.time() - start) * 1000
        level = logger.warning if response.status_code >= 400 else logger.info
        level(
            "request_completed",
            method=request.method,
            path=request.url.path,
            status=response.status_code,
            duration_ms=round(duration_ms, 2),
        )

        response.headers["X-Request-ID"] = request_id
        response.headers["X-Response-Time"] = f"{duration_ms:.2f}ms"
        clear_request_context()
        return response
