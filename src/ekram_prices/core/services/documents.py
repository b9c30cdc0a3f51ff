"""
Whole-document access to the blob store.

Each logical document (custom materials, current prices, price history) is
read, changed in memory and written back as a whole. With compare-and-swap
enabled the write is conditional on the version that was read, and the
read-modify-write cycle is retried when another writer got there first.
"""

from collections.abc import Callable
from typing import Any, TypeVar

from ekram_prices.config import get_logger
from ekram_prices.core.exceptions import DocumentConflictError, MalformedDocumentError
from ekram_prices.core.interfaces import IBlobStore

logger = get_logger(__name__)

CUSTOM_MATERIALS = "custom-materials"
CURRENT_PRICES = "current-prices"
PRICE_HISTORY = "price-history"

_DOCUMENT_TYPES: dict[str, type] = {
    CUSTOM_MATERIALS: dict,
    CURRENT_PRICES: dict,
    PRICE_HISTORY: list,
}

T = TypeVar("T")


class DocumentRepository:
    """Typed read and read-modify-write over the three price documents."""

    def __init__(
        self,
        store: IBlobStore,
        compare_and_swap: bool = True,
        max_retries: int = 5,
    ):
        self.store = store
        self.compare_and_swap = compare_and_swap
        self.max_retries = max_retries

    async def read(self, key: str) -> tuple[Any, int]:
        """
        Read a document and its version.

        Missing documents come back as an empty dict/list with version 0.

        Raises:
            MalformedDocumentError: stored JSON has the wrong top-level type.
        """
        expected = _DOCUMENT_TYPES.get(key, dict)
        doc = await self.store.get(key)
        if doc is None or doc.value is None:
            return expected(), 0
        if not isinstance(doc.value, expected):
            raise MalformedDocumentError(key, expected.__name__)
        return doc.value, doc.version

    async def modify(
        self,
        key: str,
        mutate: Callable[[Any], tuple[Any, T]],
    ) -> T:
        """
        Apply mutate to the current document and write the result back.

        mutate receives the current value and returns (new_value, result);
        result is handed back to the caller. It may run more than once when
        a conditional write conflicts, so it must not have side effects.
        """
        attempt = 0
        while True:
            value, version = await self.read(key)
            new_value, result = mutate(value)

            if not self.compare_and_swap:
                await self.store.put(key, new_value)
                return result

            try:
                await self.store.put(key, new_value, if_version=version)
                return result
            except DocumentConflictError as e:
                attempt += 1
                if attempt > self.max_retries:
                    logger.error(
                        "document_conflict_exhausted",
                        key=key,
                        attempts=attempt,
                    )
                    raise
                logger.warning(
                    "document_conflict_retry",
                    key=key,
                    attempt=attempt,
                    expected=e.details.get("expected"),
                    actual=e.details.get("actual"),
                )
