"""
Custom material entity.

Stored as one value of the custom-materials document, keyed by material key.
"""

from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field


def _now_iso() -> str:
    return datetime.now(UTC).isoformat()


class CustomMaterial(BaseModel):
    """A material registered at runtime in addition to the built-in catalog."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    name: str
    name_en: str = Field(alias="nameEn")
    icon: str
    unit: str
    added_at: str = Field(default_factory=_now_iso, alias="addedAt")
