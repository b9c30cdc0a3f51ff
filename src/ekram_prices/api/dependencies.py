"""
Dependency injection container for FastAPI.

Provides the blob store, settings and use case instances to route handlers.
Tests override get_store and get_app_settings.
"""

import json
import secrets

import pydantic
from fastapi import Depends, Header, Request
from fastapi.exceptions import RequestValidationError

from ekram_prices.application import services
from ekram_prices.application.dto.requests import UpdatePriceRequest
from ekram_prices.application.use_cases import (
    AddMaterialUseCase,
    ReadPricesUseCase,
    UpdatePriceUseCase,
)
from ekram_prices.config import Settings, get_settings
from ekram_prices.core.exceptions import AuthError
from ekram_prices.core.interfaces import IBlobStore
from ekram_prices.infrastructure.storage import get_blob_store


def get_app_settings(request: Request) -> Settings:
    """Settings the app was created with, else the global settings."""
    return getattr(request.app.state, "settings", None) or get_settings()


def get_store(settings: Settings = Depends(get_app_settings)) -> IBlobStore:
    """Get the configured blob store."""
    return get_blob_store(settings)


def verify_update_key(
    x_api_key: str | None = Header(default=None),
    settings: Settings = Depends(get_app_settings),
) -> None:
    """
    Check the shared secret for price updates.

    Skipped entirely when API_UPDATE_KEY is not configured. Header values
    arrive latin-1 decoded, so the raw header bytes are compared with the
    UTF-8 encoded secret.
    """
    expected = settings.api.update_key
    if not expected:
        return
    if x_api_key is None:
        raise AuthError()
    try:
        supplied = x_api_key.encode("latin-1")
    except UnicodeEncodeError:
        supplied = x_api_key.encode("utf-8")
    if not secrets.compare_digest(supplied, expected.encode("utf-8")):
        raise AuthError()


async def update_price_body(request: Request) -> UpdatePriceRequest:
    """
    Parse the update-price body.

    Declared as an endpoint parameter so it resolves after the route's
    verify_update_key dependency: unauthorized callers get 401 even for
    malformed bodies.
    """
    raw = await request.body()
    try:
        payload = json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise RequestValidationError(
            [
                {
                    "type": "json_invalid",
                    "loc": ("body",),
                    "msg": "JSON decode error",
                    "input": {},
                    "ctx": {"error": str(e)},
                }
            ],
            body=raw,
        ) from e
    try:
        return UpdatePriceRequest.model_validate(payload)
    except pydantic.ValidationError as e:
        raise RequestValidationError(
            [{**error, "loc": ("body", *error["loc"])} for error in e.errors(include_url=False)],
            body=payload,
        ) from e


def get_update_price_use_case(
    store: IBlobStore = Depends(get_store),
    settings: Settings = Depends(get_app_settings),
) -> UpdatePriceUseCase:
    return services.get_update_price_use_case(store, settings)


def get_read_prices_use_case(
    store: IBlobStore = Depends(get_store),
    settings: Settings = Depends(get_app_settings),
) -> ReadPricesUseCase:
    return services.get_read_prices_use_case(store, settings)


def get_add_material_use_case(
    store: IBlobStore = Depends(get_store),
    settings: Settings = Depends(get_app_settings),
) -> AddMaterialUseCase:
    return services.get_add_material_use_case(store, settings)
