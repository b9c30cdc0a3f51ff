"""
SQLite implementation of the blob store.

All documents of one named store share the blobs table; rows are keyed by
(store, key) and carry a version counter used for conditional writes.
"""

import json
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

import aiosqlite

from ekram_prices.config import get_logger
from ekram_prices.core.exceptions import DocumentConflictError, StoreUnavailableError
from ekram_prices.core.interfaces import IBlobStore, StoredDocument
from ekram_prices.infrastructure.storage.sqlite.connection import ConnectionPool

logger = get_logger(__name__)

SCHEMA = """
CREATE TABLE IF NOT EXISTS blobs (
    store TEXT NOT NULL,
    key TEXT NOT NULL,
    value TEXT NOT NULL,
    version INTEGER NOT NULL DEFAULT 1,
    updated_at TEXT NOT NULL,
    PRIMARY KEY (store, key)
)
"""


class SQLiteBlobStore(IBlobStore):
    """SQLite-backed IBlobStore."""

    def __init__(
        self,
        db_path: Path,
        store_name: str = "ekram-prices",
        pool_size: int = 5,
        busy_timeout: int = 30000,
    ):
        self.store_name = store_name
        self._pool = ConnectionPool(db_path, pool_size=pool_size, busy_timeout=busy_timeout)
        self._schema_ready = False

    async def initialize(self) -> None:
        if self._schema_ready:
            return
        await self._pool.initialize()
        async with self._pool.write() as conn:
            await conn.execute(SCHEMA)
        self._schema_ready = True

    async def close(self) -> None:
        await self._pool.close()
        self._schema_ready = False

    async def get(self, key: str) -> StoredDocument | None:
        await self.initialize()
        try:
            async with self._pool.acquire() as conn:
                cursor = await conn.execute(
                    "SELECT value, version FROM blobs WHERE store = ? AND key = ?",
                    (self.store_name, key),
                )
                row = await cursor.fetchone()
        except aiosqlite.Error as e:
            raise StoreUnavailableError("sqlite", str(e)) from e

        if row is None:
            return None
        return StoredDocument(key=key, value=json.loads(row["value"]), version=row["version"])

    async def put(self, key: str, value: Any, if_version: int | None = None) -> int:
        await self.initialize()
        payload = json.dumps(value, ensure_ascii=False)
        now = datetime.now(UTC).isoformat()

        try:
            async with self._pool.write() as conn:
                if if_version is None:
                    await conn.execute(
                        """
                        INSERT INTO blobs (store, key, value, version, updated_at)
                        VALUES (?, ?, ?, 1, ?)
                        ON CONFLICT (store, key) DO UPDATE SET
                            value = excluded.value,
                            version = blobs.version + 1,
                            updated_at = excluded.updated_at
                        """,
                        (self.store_name, key, payload, now),
                    )
                elif if_version == 0:
                    cursor = await conn.execute(
                        """
                        INSERT INTO blobs (store, key, value, version, updated_at)
                        VALUES (?, ?, ?, 1, ?)
                        ON CONFLICT (store, key) DO NOTHING
                        """,
                        (self.store_name, key, payload, now),
                    )
                    if cursor.rowcount == 0:
                        raise DocumentConflictError(key, 0, await self._version(conn, key))
                else:
                    cursor = await conn.execute(
                        """
                        UPDATE blobs
                        SET value = ?, version = version + 1, updated_at = ?
                        WHERE store = ? AND key = ? AND version = ?
                        """,
                        (payload, now, self.store_name, key, if_version),
                    )
                    if cursor.rowcount == 0:
                        raise DocumentConflictError(
                            key, if_version, await self._version(conn, key)
                        )

                version = await self._version(conn, key)
        except aiosqlite.Error as e:
            raise StoreUnavailableError("sqlite", str(e)) from e

        logger.debug("blob_written", store=self.store_name, key=key, version=version)
        return version

    async def delete(self, key: str) -> bool:
        await self.initialize()
        async with self._pool.write() as conn:
            cursor = await conn.execute(
                "DELETE FROM blobs WHERE store = ? AND key = ?",
                (self.store_name, key),
            )
            return cursor.rowcount > 0

    async def list_keys(self) -> list[str]:
        await self.initialize()
        async with self._pool.acquire() as conn:
            cursor = await conn.execute(
                "SELECT key FROM blobs WHERE store = ? ORDER BY key",
                (self.store_name,),
            )
            rows = await cursor.fetchall()
        return [row["key"] for row in rows]

    async def _version(self, conn: aiosqlite.Connection, key: str) -> int:
        cursor = await conn.execute(
            "SELECT version FROM blobs WHERE store = ? AND key = ?",
            (self.store_name, key),
        )
        row = await cursor.fetchone()
        return row["version"] if row else 0
