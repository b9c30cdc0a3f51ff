"""Tests for DocumentRepository read-modify-write."""

import pytest

from ekram_prices.core.exceptions import DocumentConflictError, MalformedDocumentError
from ekram_prices.core.services import (
    CURRENT_PRICES,
    PRICE_HISTORY,
    DocumentRepository,
)
from ekram_prices.infrastructure.storage import InMemoryBlobStore


class ConflictingStore(InMemoryBlobStore):
    """Store where another writer sneaks in before the first N writes."""

    def __init__(self, conflicts: int):
        super().__init__()
        self.conflicts = conflicts
        self.put_calls = 0

    async def put(self, key, value, if_version=None):
        self.put_calls += 1
        if self.conflicts > 0:
            self.conflicts -= 1
            await super().put(key, {"intruder": self.conflicts})
        return await super().put(key, value, if_version)


class TestRead:
    async def test_missing_documents_default_empty(self, documents: DocumentRepository):
        assert await documents.read(CURRENT_PRICES) == ({}, 0)
        assert await documents.read(PRICE_HISTORY) == ([], 0)

    async def test_wrong_shape_raises(self, documents, memory_store):
        await memory_store.put(PRICE_HISTORY, {"not": "a list"})
        with pytest.raises(MalformedDocumentError):
            await documents.read(PRICE_HISTORY)


class TestModify:
    async def test_returns_mutate_result(self, documents, memory_store):
        result = await documents.modify(CURRENT_PRICES, lambda d: ({**d, "a": 1}, "done"))
        assert result == "done"
        assert (await memory_store.get(CURRENT_PRICES)).value == {"a": 1}

    async def test_retries_on_conflict(self):
        store = ConflictingStore(conflicts=2)
        documents = DocumentRepository(store, compare_and_swap=True, max_retries=5)

        await documents.modify(CURRENT_PRICES, lambda d: ({**d, "mine": True}, None))

        stored = (await store.get(CURRENT_PRICES)).value
        assert stored["mine"] is True
        # The intruder's last write survived the merge
        assert stored["intruder"] == 0

    async def test_gives_up_after_max_retries(self):
        store = ConflictingStore(conflicts=10)
        documents = DocumentRepository(store, compare_and_swap=True, max_retries=2)

        with pytest.raises(DocumentConflictError):
            await documents.modify(CURRENT_PRICES, lambda d: ({**d, "mine": True}, None))
        assert store.put_calls == 3

    async def test_without_cas_overwrites_blindly(self):
        store = ConflictingStore(conflicts=1)
        documents = DocumentRepository(store, compare_and_swap=False)

        await documents.modify(CURRENT_PRICES, lambda d: ({**d, "mine": True}, None))

        assert (await store.get(CURRENT_PRICES)).value == {"mine": True}
