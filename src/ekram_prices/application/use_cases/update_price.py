"""
Update Price Use Case.

Validates a price report, overwrites the current price of the material and
prepends a history entry.

Flow:
1. Resolve bot alias
2. Validate material and price
3. Check the material against built-in and custom catalogs
4. Write current-prices (prev price, change, direction)
5. Prepend to price-history, keeping the newest entries only

Steps 4 and 5 are two separate document writes. A failure between them
leaves current-prices updated without a matching history entry.
"""

from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any

from ekram_prices.application.dto.requests import UpdatePriceRequest
from ekram_prices.application.dto.responses import UpdatePriceResponse
from ekram_prices.config import get_logger
from ekram_prices.core.entities import HistoryEntry, PriceChange, PriceRecord
from ekram_prices.core.exceptions import UnknownMaterialError, ValidationError
from ekram_prices.core.services import (
    CURRENT_PRICES,
    PRICE_HISTORY,
    DocumentRepository,
    MaterialRegistry,
    compute_change,
    parse_price,
    prepend_history,
)

logger = get_logger(__name__)


def _utc_now() -> str:
    return datetime.now(UTC).isoformat()


def _stored_price(record: Any) -> float | None:
    """Price of a stored record, or None if there is no usable one."""
    if not isinstance(record, dict):
        return None
    try:
        return float(record["price"])
    except (KeyError, TypeError, ValueError):
        return None


@dataclass
class UpdatePriceResult:
    """Result of the update-price operation."""

    material: str
    material_name: str
    change: PriceChange
    record: PriceRecord


class UpdatePriceUseCase:
    """Use case for recording a new price report."""

    def __init__(
        self,
        documents: DocumentRepository,
        registry: MaterialRegistry,
        history_limit: int = 100,
        clock: Callable[[], str] = _utc_now,
    ):
        self._documents = documents
        self._registry = registry
        self._history_limit = history_limit
        self._clock = clock

    async def execute(self, request: UpdatePriceRequest) -> UpdatePriceResult:
        """Execute the update-price use case."""
        material = self._registry.resolve_alias((request.material or "").strip())
        if not material:
            raise ValidationError("material", "material required", request.material)

        price = parse_price(request.price)

        if not await self._registry.is_valid(material):
            valid = await self._registry.valid_keys()
            logger.info("update_price_unknown_material", material=material)
            raise UnknownMaterialError(material, valid)

        material_name = await self._registry.display_name(material)
        now = self._clock()
        updated_by = request.user or "API"

        def apply(prices: dict) -> tuple[dict, tuple[PriceChange, PriceRecord]]:
            existing = prices.get(material)
            prev_price = _stored_price(existing)
            if prev_price is None:
                prev_price = price
            previous_supplier = existing.get("supplier") if isinstance(existing, dict) else None
            if not isinstance(previous_supplier, str):
                previous_supplier = None

            change = compute_change(price, prev_price)
            record = PriceRecord(
                price=price,
                prev_price=prev_price,
                supplier=request.supplier or previous_supplier or "",
                updated_by=updated_by,
                updated_at=now,
            )
            updated = dict(prices)
            updated[material] = record.model_dump(by_alias=True)
            return updated, (change, record)

        change, record = await self._documents.modify(CURRENT_PRICES, apply)

        entry = HistoryEntry(
            material_key=material,
            material_name=material_name,
            price=record.price,
            prev_price=record.prev_price,
            change_pct=change.change,
            dir=change.direction,
            supplier=record.supplier,
            updated_by=record.updated_by,
            time=now,
        )
        await self._documents.modify(
            PRICE_HISTORY,
            lambda history: (prepend_history(history, entry, self._history_limit), None),
        )

        logger.info(
            "price_updated",
            material=material,
            price=price,
            prev_price=change.prev_price,
            change=change.change,
            dir=change.direction.value,
            updated_by=updated_by,
        )
        return UpdatePriceResult(
            material=material,
            material_name=material_name,
            change=change,
            record=record,
        )

    def to_response(self, result: UpdatePriceResult) -> UpdatePriceResponse:
        """Convert result to API response."""
        return UpdatePriceResponse(
            material=result.material,
            material_name=result.material_name,
            price=result.change.price,
            prev_price=result.change.prev_price,
            change=result.change.change,
            dir=result.change.direction.value,
        )
