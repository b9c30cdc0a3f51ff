"""SQLite storage implementations."""

from ekram_prices.infrastructure.storage.sqlite.blob_store import SQLiteBlobStore
from ekram_prices.infrastructure.storage.sqlite.connection import ConnectionPool

__all__ = [
    "ConnectionPool",
    "SQLiteBlobStore",
]
