"""Core interfaces (ports) for dependency injection."""

from ekram_prices.core.interfaces.blob_store import IBlobStore, StoredDocument

__all__ = [
    "IBlobStore",
    "StoredDocument",
]
