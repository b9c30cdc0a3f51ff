"""
FastAPI application factory.

    uvicorn ekram_prices.api.main:app

The blob store is opened when the app starts serving and closed on shutdown;
requests reach it through ``api.dependencies.get_store``.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ekram_prices.api.middleware import ErrorHandlerMiddleware, LoggingMiddleware
from ekram_prices.api.middleware.error_handler import setup_exception_handlers
from ekram_prices.api.routes import health_router, materials_router, prices_router
from ekram_prices.config import Settings, configure_logging, get_logger, get_settings
from ekram_prices.infrastructure.storage import close_blob_store, get_blob_store

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    settings: Settings = app.state.settings
    logger.info(
        "service_starting",
        store_backend=settings.store.backend,
        compare_and_swap=settings.store.compare_and_swap,
        update_key_configured=bool(settings.api.update_key),
    )

    store = get_blob_store(settings)
    try:
        await store.initialize()
    except Exception as e:
        logger.error("blob_store_unavailable_at_startup", error=str(e))
        raise

    try:
        yield
    finally:
        await close_blob_store()
        logger.info("service_stopped")


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the price API with middleware, error handlers and routers."""
    settings = settings or get_settings()
    configure_logging(settings)

    app = FastAPI(
        title=settings.app_name,
        description="Feed material price reports for the Ekram Telegram bot",
        version=settings.app_version,
        docs_url="/docs" if settings.api.debug else None,
        redoc_url=None,
        lifespan=lifespan,
    )
    app.state.settings = settings

    # Last added runs first: errors are converted inside the logged span
    app.add_middleware(ErrorHandlerMiddleware)
    app.add_middleware(LoggingMiddleware)
    if settings.api.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.api.cors_origins,
            allow_methods=["GET", "POST"],
            allow_headers=["Content-Type", "X-API-Key"],
        )

    setup_exception_handlers(app)

    for router in (prices_router, materials_router, health_router):
        app.include_router(router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "ekram_prices.api.main:app",
        host=settings.api.host,
        port=settings.api.port,
        reload=settings.api.debug,
    )
