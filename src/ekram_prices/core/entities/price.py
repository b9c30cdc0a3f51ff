"""
Price entities.

PriceRecord is the current-price document value for one material,
HistoryEntry is one element of the newest-first price history log.
Both serialize with the camelCase field names the bot reads.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Direction(str, Enum):
    """Direction of a price change relative to the previous price."""

    UP = "up"
    DOWN = "down"
    STABLE = "stable"


class PriceChange(BaseModel):
    """Computed delta between the previous and the new price."""

    price: float
    prev_price: float
    change: str
    direction: Direction


class PriceRecord(BaseModel):
    """Latest known price of a material."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    price: float
    prev_price: float = Field(alias="prevPrice")
    supplier: str = ""
    updated_by: str = Field(default="API", alias="updatedBy")
    updated_at: str = Field(alias="updatedAt")


class HistoryEntry(BaseModel):
    """One price change event."""

    model_config = ConfigDict(populate_by_name=True, use_enum_values=True)

    material_key: str = Field(alias="materialKey")
    material_name: str = Field(alias="materialName")
    price: float
    prev_price: float = Field(alias="prevPrice")
    change_pct: str = Field(alias="changePct")
    dir: Direction
    supplier: str = ""
    updated_by: str = Field(alias="updatedBy")
    time: str
