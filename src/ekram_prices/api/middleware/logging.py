"""
Request logging middleware.

Each request gets a short id bound into structlog's context variables, so
events logged by the use cases (price_updated, material_added, ...) carry
the same request_id as the request_started/request_completed pair.
"""

import time
import uuid
from collections.abc import Awaitable, Callable

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from ekram_prices.config import get_logger

logger = get_logger(__name__)


def _elapsed_ms(start: float) -> float:
    return round((time.perf_counter() - start) * 1000, 2)


class LoggingMiddleware(BaseHTTPMiddleware):
    """Log every request with its id, outcome and duration."""

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        request_id = request.headers.get("x-request-id") or uuid.uuid4().hex[:8]
        request.state.request_id = request_id

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            method=request.method,
            path=request.url.path,
        )

        start = time.perf_counter()
        logger.info(
            "request_started",
            client=request.client.host if request.client else "unknown",
            source=request.headers.get("user-agent", ""),
        )

        try:
            response = await call_next(request)
        except Exception as e:
            logger.error("request_failed", error=str(e), duration_ms=_elapsed_ms(start))
            raise
        finally:
            duration_ms = _elapsed_ms(start)

        log = logger.warning if response.status_code >= 400 else logger.info
        log("request_completed", status=response.status_code, duration_ms=duration_ms)

        structlog.contextvars.clear_contextvars()

        response.headers["X-Request-ID"] = request_id
        response.headers["X-Response-Time"] = f"{duration_ms:.2f}ms"
        return response
