"""
Read Prices Use Case.

Returns the current price snapshot and the history log. This read never
fails: a document that cannot be read for any reason (missing, store
unreachable, malformed) is replaced by its empty default.
"""

from dataclasses import dataclass, field
from typing import Any

from ekram_prices.application.dto.responses import PricesResponse
from ekram_prices.config import get_logger
from ekram_prices.core.services import CURRENT_PRICES, PRICE_HISTORY, DocumentRepository

logger = get_logger(__name__)


@dataclass
class PricesSnapshot:
    """Current prices and history as stored."""

    prices: dict[str, Any] = field(default_factory=dict)
    history: list[Any] = field(default_factory=list)


class ReadPricesUseCase:
    """Use case for reading prices and history."""

    def __init__(self, documents: DocumentRepository):
        self._documents = documents

    async def _read_or_default(self, key: str, default: Any) -> Any:
        try:
            value, _ = await self._documents.read(key)
            return value
        except Exception as e:
            logger.warning(
                "prices_read_fallback",
                key=key,
                error_type=type(e).__name__,
                error=str(e),
            )
            return default

    async def execute(self) -> PricesSnapshot:
        """Execute the read-prices use case."""
        return PricesSnapshot(
            prices=await self._read_or_default(CURRENT_PRICES, {}),
            history=await self._read_or_default(PRICE_HISTORY, []),
        )

    def to_response(self, snapshot: PricesSnapshot) -> PricesResponse:
        """Convert snapshot to API response."""
        return PricesResponse(prices=snapshot.prices, history=snapshot.history)
