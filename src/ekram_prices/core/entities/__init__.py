"""Domain entities."""

from ekram_prices.core.entities.material import CustomMaterial
from ekram_prices.core.entities.price import Direction, HistoryEntry, PriceChange, PriceRecord

__all__ = [
    "CustomMaterial",
    "Direction",
    "HistoryEntry",
    "PriceChange",
    "PriceRecord",
]
