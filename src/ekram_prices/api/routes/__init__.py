"""API route modules."""

from ekram_prices.api.routes.health import router as health_router
from ekram_prices.api.routes.materials import router as materials_router
from ekram_prices.api.routes.prices import router as prices_router

__all__ = [
    "health_router",
    "materials_router",
    "prices_router",
]
