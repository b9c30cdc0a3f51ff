"""
Error handling middleware.

Every error leaves the API as JSON with a machine-readable "error" code.
Domain errors map to 4xx codes; anything else becomes a 500 whose
"details" carries the raw failure description.
"""

import traceback
from collections.abc import Awaitable, Callable

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from ekram_prices.application.dto.responses import ErrorResponse
from ekram_prices.config import get_logger
from ekram_prices.core.exceptions import (
    AuthError,
    EkramError,
    UnknownMaterialError,
    ValidationError,
)

logger = get_logger(__name__)


# Map exceptions to HTTP status codes; anything unlisted is a 500
EXCEPTION_STATUS_MAP: dict[type[Exception], int] = {
    AuthError: status.HTTP_401_UNAUTHORIZED,
    ValidationError: status.HTTP_400_BAD_REQUEST,
}

# Error codes for plain HTTP errors raised by routing
HTTP_ERROR_CODES: dict[int, str] = {
    400: "BAD_REQUEST",
    401: "UNAUTHORIZED",
    404: "NOT_FOUND",
    405: "METHOD_NOT_ALLOWED",
}

SERVER_ERROR = "SERVER_ERROR"


def _status_for(exc: Exception) -> int:
    for exc_type, code in EXCEPTION_STATUS_MAP.items():
        if isinstance(exc, exc_type):
            return code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def _error_response(request: Request, exc: Exception) -> JSONResponse:
    """Convert exception to standardized JSON response."""
    status_code = _status_for(exc)
    request_id = getattr(request.state, "request_id", None)

    if status_code >= 500:
        logger.error(
            "unhandled_exception",
            request_id=request_id,
            path=request.url.path,
            error_type=type(exc).__name__,
            error=str(exc),
            traceback=traceback.format_exc(),
        )
        body = ErrorResponse(
            error=SERVER_ERROR,
            message="Server error",
            details=str(exc) or type(exc).__name__,
            path=request.url.path,
        )
    else:
        logger.info(
            "request_rejected",
            request_id=request_id,
            path=request.url.path,
            error=exc.code if isinstance(exc, EkramError) else type(exc).__name__,
            message=str(exc),
        )
        body = ErrorResponse(
            error=exc.code if isinstance(exc, EkramError) else type(exc).__name__,
            message=str(exc),
            valid=exc.valid if isinstance(exc, UnknownMaterialError) else None,
            path=request.url.path,
        )

    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(mode="json", exclude_none=True),
    )


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """
    Global error handling middleware.

    Converts exceptions that escaped the route handlers to JSON responses.
    """

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        """Handle request with error catching."""
        try:
            return await call_next(request)
        except Exception as e:
            return _error_response(request, e)


def setup_exception_handlers(app: FastAPI) -> None:
    """Set up FastAPI exception handlers."""
    from fastapi.exceptions import RequestValidationError
    from starlette.exceptions import HTTPException

    @app.exception_handler(EkramError)
    async def ekram_exception_handler(
        request: Request,
        exc: EkramError,
    ) -> JSONResponse:
        """Handle domain errors."""
        return _error_response(request, exc)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        """Handle malformed JSON and wrongly typed body fields."""
        errors = []
        for error in exc.errors():
            loc = " -> ".join(str(part) for part in error["loc"])
            errors.append(f"{loc}: {error['msg']}")

        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=ErrorResponse(
                error="VALIDATION_ERROR",
                message="invalid request body: " + "; ".join(errors),
                path=request.url.path,
            ).model_dump(mode="json", exclude_none=True),
        )

    @app.exception_handler(HTTPException)
    async def http_exception_handler(
        request: Request,
        exc: HTTPException,
    ) -> JSONResponse:
        """Handle HTTP exceptions (404, 405) with standardized format."""
        return JSONResponse(
            status_code=exc.status_code,
            content=ErrorResponse(
                error=HTTP_ERROR_CODES.get(exc.status_code, "HTTP_ERROR"),
                message=exc.detail or "An error occurred",
                path=request.url.path,
            ).model_dump(mode="json", exclude_none=True),
            headers=getattr(exc, "headers", None),
        )
