"""
Async SQLite connection pool with aiosqlite.

Connections run in autocommit mode; writers open their own transaction with
BEGIN IMMEDIATE so a conditional write and the version read that follows it
see the same snapshot.
"""

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

import aiosqlite

from ekram_prices.config import get_logger

logger = get_logger(__name__)


class ConnectionPool:
    """Fixed-size pool of aiosqlite connections to one database file."""

    def __init__(
        self,
        db_path: Path,
        pool_size: int = 5,
        busy_timeout: int = 30000,
    ):
        self.db_path = db_path
        self.pool_size = pool_size
        self.busy_timeout = busy_timeout

        self._idle: asyncio.Queue[aiosqlite.Connection] = asyncio.Queue(maxsize=pool_size)
        self._connections: list[aiosqlite.Connection] = []
        self._lock = asyncio.Lock()

    @property
    def initialized(self) -> bool:
        return bool(self._connections)

    async def initialize(self) -> None:
        async with self._lock:
            if self._connections:
                return

            self.db_path.parent.mkdir(parents=True, exist_ok=True)
            for _ in range(self.pool_size):
                conn = await self._open()
                self._connections.append(conn)
                self._idle.put_nowait(conn)

            logger.info(
                "sqlite_pool_opened",
                db_path=str(self.db_path),
                pool_size=self.pool_size,
            )

    async def _open(self) -> aiosqlite.Connection:
        conn = await aiosqlite.connect(self.db_path, isolation_level=None)
        # WAL lets readers proceed while a price update is being written
        await conn.execute("PRAGMA journal_mode=WAL")
        await conn.execute("PRAGMA synchronous=NORMAL")
        await conn.execute(f"PRAGMA busy_timeout={self.busy_timeout}")
        conn.row_factory = aiosqlite.Row
        return conn

    @asynccontextmanager
    async def acquire(self) -> AsyncIterator[aiosqlite.Connection]:
        """Borrow an autocommit connection for reads."""
        if not self.initialized:
            await self.initialize()

        conn = await self._idle.get()
        try:
            yield conn
        finally:
            self._idle.put_nowait(conn)

    @asynccontextmanager
    async def write(self) -> AsyncIterator[aiosqlite.Connection]:
        """
        Borrow a connection inside an IMMEDIATE transaction.

        Commits when the block exits normally. Any other exit, cancellation
        included, rolls back before the connection returns to the pool.
        """
        async with self.acquire() as conn:
            await conn.execute("BEGIN IMMEDIATE")
            committed = False
            try:
                yield conn
                await conn.execute("COMMIT")
                committed = True
            finally:
                if not committed and conn.in_transaction:
                    await conn.execute("ROLLBACK")

    async def close(self) -> None:
        async with self._lock:
            for conn in self._connections:
                await conn.close()
            self._connections.clear()
            self._idle = asyncio.Queue(maxsize=self.pool_size)
            logger.info("sqlite_pool_closed", db_path=str(self.db_path))
