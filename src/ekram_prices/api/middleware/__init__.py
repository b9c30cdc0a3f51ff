"""API middleware."""

from ekram_prices.api.middleware.error_handler import ErrorHandlerMiddleware
from ekram_prices.api.middleware.logging import LoggingMiddleware

__all__ = ["LoggingMiddleware", "ErrorHandlerMiddleware"]
