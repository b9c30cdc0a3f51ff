"""
In-process blob store.

Keeps documents in a dict guarded by an asyncio lock. Values are deep-copied
on the way in and out so callers never share state with the store. Used for
local development and tests; contents are lost on restart.
"""

import asyncio
import copy
from typing import Any

from ekram_prices.core.exceptions import DocumentConflictError
from ekram_prices.core.interfaces import IBlobStore, StoredDocument


class InMemoryBlobStore(IBlobStore):
    """Dict-backed implementation of IBlobStore."""

    def __init__(self) -> None:
        self._docs: dict[str, tuple[Any, int]] = {}
        self._lock = asyncio.Lock()

    async def get(self, key: str) -> StoredDocument | None:
        async with self._lock:
            if key not in self._docs:
                return None
            value, version = self._docs[key]
            return StoredDocument(key=key, value=copy.deepcopy(value), version=version)

    async def put(self, key: str, value: Any, if_version: int | None = None) -> int:
        async with self._lock:
            current = self._docs.get(key, (None, 0))[1]
            if if_version is not None and if_version != current:
                raise DocumentConflictError(key, if_version, current)
            version = current + 1
            self._docs[key] = (copy.deepcopy(value), version)
            return version

    async def delete(self, key: str) -> bool:
        async with self._lock:
            return self._docs.pop(key, None) is not None

    async def list_keys(self) -> list[str]:
        async with self._lock:
            return sorted(self._docs)
