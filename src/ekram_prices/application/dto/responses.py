"""Response DTOs for API endpoints.

Field aliases keep the camelCase names the Telegram bot consumes.
"""

from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class UpdatePriceResponse(BaseModel):
    """Result of a successful price update."""

    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    material: str
    material_name: str = Field(..., alias="materialName")
    price: float
    prev_price: float = Field(..., alias="prevPrice")
    change: str = Field(..., description="Signed percentage, e.g. +10.0%")
    dir: str = Field(..., description="up, down or stable")


class PricesResponse(BaseModel):
    """Current price snapshot and history."""

    prices: dict[str, Any] = Field(default_factory=dict)
    history: list[Any] = Field(default_factory=list)


class AddMaterialResponse(BaseModel):
    """Result of registering a custom material."""

    success: bool = True
    material: str
    name: str


class MaterialsResponse(BaseModel):
    """Known materials and bot aliases."""

    builtin: dict[str, str]
    custom: dict[str, Any]
    aliases: dict[str, str]


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str
    store: str
    uptime_seconds: float | None = None


class ErrorResponse(BaseModel):
    """Standardized error response DTO.

    Every error response includes a machine-readable error code. Server
    errors also carry the raw failure description in details.
    """

    error: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error description")
    details: str | None = Field(default=None, description="Raw failure description")
    valid: list[str] | None = Field(default=None, description="Valid material keys")
    path: str | None = Field(default=None, description="Request path")
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))
