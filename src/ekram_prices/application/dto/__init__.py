"""Request and response DTOs."""

from ekram_prices.application.dto.requests import AddMaterialRequest, UpdatePriceRequest
from ekram_prices.application.dto.responses import (
    AddMaterialResponse,
    ErrorResponse,
    HealthResponse,
    MaterialsResponse,
    PricesResponse,
    UpdatePriceResponse,
)

__all__ = [
    "AddMaterialRequest",
    "UpdatePriceRequest",
    "AddMaterialResponse",
    "ErrorResponse",
    "HealthResponse",
    "MaterialsResponse",
    "PricesResponse",
    "UpdatePriceResponse",
]
