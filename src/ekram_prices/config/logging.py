"""
structlog setup for the price service.

Development gets a colored console; every other environment emits one JSON
object per line. Secrets configured for the update endpoint and the remote
store never reach the log output.
"""

import logging
import sys
from typing import Any

import structlog
from structlog.types import EventDict, Processor

from ekram_prices.config.settings import Settings, get_settings

# Event keys whose values are masked before rendering
SECRET_KEYS = frozenset({"api_key", "x_api_key", "update_key", "token", "remote_token", "authorization"})

_configured = False


def redact_secrets(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    for key in SECRET_KEYS & event_dict.keys():
        if event_dict[key]:
            event_dict[key] = "***"
    return event_dict


def service_context(settings: Settings) -> Processor:
    """Bind app name, version, environment and blob store name to every event."""
    context = {
        "app": settings.app_name,
        "version": settings.app_version,
        "environment": settings.environment,
        "store": settings.store.name,
    }

    def processor(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
        for key, value in context.items():
            event_dict.setdefault(key, value)
        return event_dict

    return processor


def configure_logging(settings: Settings | None = None, force: bool = False) -> None:
    """Configure structlog and the stdlib root logger once per process."""
    global _configured
    if _configured and not force:
        return

    settings = settings or get_settings()

    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        service_context(settings),
        redact_secrets,
    ]

    if settings.environment == "development":
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty()))
    else:
        processors += [
            structlog.processors.format_exc_info,
            # Arabic material names stay readable
            structlog.processors.JSONRenderer(ensure_ascii=False),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, settings.log_level),
        force=force,
    )

    for noisy in ("httpx", "httpcore", "aiosqlite", "uvicorn.access"):
        logging.getLogger(noisy).setLevel(logging.WARNING)

    _configured = True


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)
