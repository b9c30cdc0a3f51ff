"""Tests for InMemoryBlobStore."""

import pytest

from ekram_prices.core.exceptions import DocumentConflictError
from ekram_prices.infrastructure.storage import InMemoryBlobStore


class TestInMemoryBlobStore:
    async def test_get_missing(self, memory_store: InMemoryBlobStore):
        assert await memory_store.get("current-prices") is None

    async def test_versions_increase(self, memory_store: InMemoryBlobStore):
        assert await memory_store.put("k", {"a": 1}) == 1
        assert await memory_store.put("k", {"a": 2}) == 2
        doc = await memory_store.get("k")
        assert doc.value == {"a": 2}
        assert doc.version == 2

    async def test_values_are_copied(self, memory_store: InMemoryBlobStore):
        value = {"a": [1]}
        await memory_store.put("k", value)
        value["a"].append(2)
        doc = await memory_store.get("k")
        doc.value["a"].append(3)
        assert (await memory_store.get("k")).value == {"a": [1]}

    async def test_conditional_write(self, memory_store: InMemoryBlobStore):
        assert await memory_store.put("k", 1, if_version=0) == 1
        with pytest.raises(DocumentConflictError):
            await memory_store.put("k", 2, if_version=0)
        assert await memory_store.put("k", 3, if_version=1) == 2

    async def test_delete_and_list(self, memory_store: InMemoryBlobStore):
        await memory_store.put("b", 1)
        await memory_store.put("a", 1)
        assert await memory_store.list_keys() == ["a", "b"]
        assert await memory_store.delete("a") is True
        assert await memory_store.delete("a") is False
        assert await memory_store.list_keys() == ["b"]
