"""
Abstract interface for the key-value blob store.

Documents are JSON values addressed by key inside one named store. Every
write bumps a per-key version so callers can make conditional writes.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class StoredDocument:
    """A JSON document together with the version it was read at."""

    key: str
    value: Any
    version: int


class IBlobStore(ABC):
    """
    Abstract interface for JSON document storage.

    Versions start at 1 for the first write of a key. A version of 0 stands
    for "key does not exist" when passed as if_version.
    """

    @abstractmethod
    async def get(self, key: str) -> StoredDocument | None:
        """Read a document. Returns None if the key was never written."""
        pass

    @abstractmethod
    async def put(self, key: str, value: Any, if_version: int | None = None) -> int:
        """
        Write a whole document and return its new version.

        Raises:
            DocumentConflictError: if_version is given and does not match
                the stored version.
        """
        pass

    @abstractmethod
    async def delete(self, key: str) -> bool:
        """Delete a document. Returns True if it existed."""
        pass

    @abstractmethod
    async def list_keys(self) -> list[str]:
        """List all keys in the store."""
        pass

    async def initialize(self) -> None:
        """Prepare backend resources. No-op by default."""

    async def close(self) -> None:
        """Release backend resources. No-op by default."""
