"""Blob store implementations and factory."""

from ekram_prices.config import Settings, get_logger, get_settings
from ekram_prices.core.exceptions import ConfigurationError
from ekram_prices.core.interfaces import IBlobStore
from ekram_prices.infrastructure.storage.memory import InMemoryBlobStore
from ekram_prices.infrastructure.storage.remote import RemoteBlobStore
from ekram_prices.infrastructure.storage.sqlite import SQLiteBlobStore

logger = get_logger(__name__)

# Singleton instance
_blob_store: IBlobStore | None = None


def create_blob_store(settings: Settings) -> IBlobStore:
    """Build the blob store selected by STORE_BACKEND."""
    store = settings.store
    if store.backend == "sqlite":
        return SQLiteBlobStore(
            db_path=store.db_path,
            store_name=store.name,
            pool_size=store.pool_size,
            busy_timeout=store.busy_timeout,
        )
    if store.backend == "remote":
        return RemoteBlobStore(
            base_url=store.remote_url,
            store_name=store.name,
            token=store.remote_token,
            timeout=store.remote_timeout,
        )
    if store.backend == "memory":
        return InMemoryBlobStore()
    raise ConfigurationError(f"Unknown store backend: {store.backend}")


def get_blob_store(settings: Settings | None = None) -> IBlobStore:
    """Get or create the global blob store from the given or global settings."""
    global _blob_store
    if _blob_store is None:
        settings = settings or get_settings()
        _blob_store = create_blob_store(settings)
        logger.info("blob_store_created", backend=settings.store.backend, store=settings.store.name)
    return _blob_store


async def close_blob_store() -> None:
    """Close and forget the global blob store."""
    global _blob_store
    if _blob_store is not None:
        await _blob_store.close()
        _blob_store = None


__all__ = [
    "InMemoryBlobStore",
    "RemoteBlobStore",
    "SQLiteBlobStore",
    "create_blob_store",
    "get_blob_store",
    "close_blob_store",
]
