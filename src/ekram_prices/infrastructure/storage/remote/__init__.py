"""HTTP blob store client."""

from ekram_prices.infrastructure.storage.remote.blob_store import RemoteBlobStore

__all__ = ["RemoteBlobStore"]
