"""Pytest configuration and fixtures."""

from collections.abc import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient

from ekram_prices.api.dependencies import get_app_settings, get_store
from ekram_prices.api.main import app
from ekram_prices.config import Settings
from ekram_prices.config.settings import APISettings, PricingSettings, StoreSettings
from ekram_prices.core.services import DocumentRepository, MaterialRegistry
from ekram_prices.infrastructure.storage import InMemoryBlobStore


@pytest.fixture
def test_settings() -> Settings:
    """Settings isolated from the environment and any .env file."""
    return Settings(
        _env_file=None,
        environment="development",
        store=StoreSettings(backend="memory"),
        api=APISettings(update_key=None),
        pricing=PricingSettings(history_limit=100),
    )


@pytest.fixture
def memory_store() -> InMemoryBlobStore:
    """Fresh in-memory blob store."""
    return InMemoryBlobStore()


@pytest.fixture
def documents(memory_store: InMemoryBlobStore) -> DocumentRepository:
    """Document repository with compare-and-swap enabled."""
    return DocumentRepository(memory_store)


@pytest.fixture
def registry(documents: DocumentRepository) -> MaterialRegistry:
    """Material registry over the in-memory store."""
    return MaterialRegistry(documents)


@pytest.fixture
async def api_client(
    memory_store: InMemoryBlobStore,
    test_settings: Settings,
) -> AsyncGenerator[AsyncClient, None]:
    """Async client with store and settings dependencies overridden."""
    app.dependency_overrides[get_store] = lambda: memory_store
    app.dependency_overrides[get_app_settings] = lambda: test_settings
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
