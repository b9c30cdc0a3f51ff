"""Request DTOs for API endpoints.

Pydantic v2 models for API request validation. Field values are checked by
the use cases so that bad input maps to the documented error messages.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class UpdatePriceRequest(BaseModel):
    """Price report sent by the bot."""

    material: str | None = Field(
        default=None,
        description="Material key or bot alias",
        examples=["yellow_corn", "corn"],
    )
    price: Any = Field(
        default=None,
        description="New price, number or numeric string",
        examples=[12500, "12500.5"],
    )
    supplier: str | None = Field(default=None, description="Supplier name")
    user: str | None = Field(default=None, description="Reporting user")


class AddMaterialRequest(BaseModel):
    """Registration of a custom material."""

    model_config = ConfigDict(populate_by_name=True)

    key: str | None = Field(default=None, description="Material key, normalized on write")
    name_ar: str | None = Field(default=None, alias="nameAr", description="Arabic display name")
    name_en: str | None = Field(default=None, alias="nameEn", description="English name")
    icon: str | None = Field(default=None, description="Display glyph")
    unit: str | None = Field(default=None, description="Price unit")
