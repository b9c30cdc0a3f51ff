"""Core business services."""

from ekram_prices.core.services.documents import (
    CURRENT_PRICES,
    CUSTOM_MATERIALS,
    PRICE_HISTORY,
    DocumentRepository,
)
from ekram_prices.core.services.material_registry import MaterialRegistry, normalize_key
from ekram_prices.core.services.pricing import compute_change, parse_price, prepend_history

__all__ = [
    "CURRENT_PRICES",
    "CUSTOM_MATERIALS",
    "PRICE_HISTORY",
    "DocumentRepository",
    "MaterialRegistry",
    "normalize_key",
    "compute_change",
    "parse_price",
    "prepend_history",
]
