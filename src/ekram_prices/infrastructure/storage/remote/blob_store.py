"""
HTTP client for a hosted blob store.

Talks to a REST blob API laid out as {base_url}/{store}/{key}:

- GET returns the JSON document with its version in the ETag header,
  404 when the key does not exist.
- PUT writes the document; If-Match / If-None-Match make it conditional
  and a 412 answer means another writer got there first.
- DELETE removes a key; GET {base_url}/{store} lists keys as
  {"blobs": [{"key": ...}, ...]}.
"""

from typing import Any
from urllib.parse import quote

import httpx

from ekram_prices.config import get_logger
from ekram_prices.core.exceptions import DocumentConflictError, StoreUnavailableError
from ekram_prices.core.interfaces import IBlobStore, StoredDocument

logger = get_logger(__name__)


def _parse_etag(header: str | None) -> int:
    """Turn an ETag like W/"3" or "3" into a version number."""
    if not header:
        return 0
    tag = header.removeprefix("W/").strip('"')
    try:
        return int(tag)
    except ValueError:
        return 0


class RemoteBlobStore(IBlobStore):
    """IBlobStore backed by an HTTP blob service."""

    def __init__(
        self,
        base_url: str,
        store_name: str = "ekram-prices",
        token: str | None = None,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.store_name = store_name
        self.timeout = timeout
        self._headers = {"Authorization": f"Bearer {token}"} if token else {}
        self._transport = transport

    def _url(self, key: str | None = None) -> str:
        url = f"{self.base_url}/{quote(self.store_name, safe='')}"
        if key is not None:
            url = f"{url}/{quote(key, safe='')}"
        return url

    async def _request(
        self,
        method: str,
        url: str,
        headers: dict[str, str] | None = None,
        json: Any = None,
    ) -> httpx.Response:
        """Make HTTP request to the blob service."""
        async with httpx.AsyncClient(
            timeout=self.timeout,
            headers=self._headers,
            transport=self._transport,
        ) as client:
            try:
                return await client.request(method, url, headers=headers, json=json)
            except httpx.HTTPError as e:
                raise StoreUnavailableError("remote", f"{type(e).__name__}: {e}") from e

    @staticmethod
    def _raise_for_status(response: httpx.Response) -> None:
        if response.is_error:
            raise StoreUnavailableError(
                "remote", f"HTTP {response.status_code}: {response.text[:200]}"
            )

    async def get(self, key: str) -> StoredDocument | None:
        response = await self._request("GET", self._url(key))
        if response.status_code == 404:
            return None
        self._raise_for_status(response)
        return StoredDocument(
            key=key,
            value=response.json(),
            version=_parse_etag(response.headers.get("etag")),
        )

    async def put(self, key: str, value: Any, if_version: int | None = None) -> int:
        headers: dict[str, str] = {}
        if if_version == 0:
            headers["If-None-Match"] = "*"
        elif if_version is not None:
            headers["If-Match"] = f'"{if_version}"'

        response = await self._request("PUT", self._url(key), headers=headers, json=value)

        if response.status_code == 412:
            raise DocumentConflictError(
                key,
                if_version or 0,
                _parse_etag(response.headers.get("etag")),
            )
        self._raise_for_status(response)

        version = _parse_etag(response.headers.get("etag"))
        logger.debug("blob_written", store=self.store_name, key=key, version=version)
        return version

    async def delete(self, key: str) -> bool:
        response = await self._request("DELETE", self._url(key))
        if response.status_code == 404:
            return False
        self._raise_for_status(response)
        return True

    async def list_keys(self) -> list[str]:
        response = await self._request("GET", self._url())
        self._raise_for_status(response)
        return sorted(blob["key"] for blob in response.json().get("blobs", []))
