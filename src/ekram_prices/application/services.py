"""
Service factory functions for dependency injection.

Wires the configured blob store into the document repository, the material
registry and the use cases. Everything here is cheap to build, so the
factories create fresh objects around the shared store on each call.
"""

from ekram_prices.application.use_cases import (
    AddMaterialUseCase,
    ReadPricesUseCase,
    UpdatePriceUseCase,
)
from ekram_prices.config import Settings, get_settings
from ekram_prices.core.interfaces import IBlobStore
from ekram_prices.core.services import DocumentRepository, MaterialRegistry
from ekram_prices.infrastructure.storage import get_blob_store


def get_document_repository(
    store: IBlobStore | None = None,
    settings: Settings | None = None,
) -> DocumentRepository:
    """Create a DocumentRepository over the given or global store."""
    settings = settings or get_settings()
    return DocumentRepository(
        store or get_blob_store(settings),
        compare_and_swap=settings.store.compare_and_swap,
        max_retries=settings.store.max_cas_retries,
    )


def get_material_registry(
    documents: DocumentRepository,
    settings: Settings | None = None,
) -> MaterialRegistry:
    """Create a MaterialRegistry with configured defaults."""
    settings = settings or get_settings()
    return MaterialRegistry(
        documents,
        default_icon=settings.pricing.default_icon,
        default_unit=settings.pricing.default_unit,
    )


def get_update_price_use_case(
    store: IBlobStore | None = None,
    settings: Settings | None = None,
) -> UpdatePriceUseCase:
    settings = settings or get_settings()
    documents = get_document_repository(store, settings)
    return UpdatePriceUseCase(
        documents=documents,
        registry=get_material_registry(documents, settings),
        history_limit=settings.pricing.history_limit,
    )


def get_read_prices_use_case(
    store: IBlobStore | None = None,
    settings: Settings | None = None,
) -> ReadPricesUseCase:
    return ReadPricesUseCase(get_document_repository(store, settings))


def get_add_material_use_case(
    store: IBlobStore | None = None,
    settings: Settings | None = None,
) -> AddMaterialUseCase:
    documents = get_document_repository(store, settings)
    return AddMaterialUseCase(get_material_registry(documents, settings))
