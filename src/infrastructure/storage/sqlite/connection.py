"""
SQLite access for the ledger snapshot table.

Reads borrow one of a few query-only connections. Every write goes
through a single writer connection held under a lock, inside an explicit
``BEGIN IMMEDIATE`` transaction, so a ledger commit that rewrites several
collections lands all at once or not at all.
"""

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

import aiosqlite

from src.config import get_logger, get_settings

logger = get_logger(__name__)


class ConnectionPool:
    """Reader pool plus one serialized writer over the same database file."""

    def __init__(
        self,
        db_path: Path,
        pool_size: int = 5,
        busy_timeout: int = 30000,
    ):
        self.db_path = db_path
        self.pool_size = pool_size
        self.busy_timeout = busy_timeout

        self._readers: asyncio.Queue[aiosqlite.Connection] = asyncio.Queue()
        self._reader_conns: list[aiosqlite.Connection] = []
        self._writer: aiosqlite.Connection | None = None
        self._write_lock = asyncio.Lock()
        self._open_lock = asyncio.Lock()

    @property
    def initialized(self) -> bool:
        return self._writer is not None

    @property
    def idle_readers(self) -> int:
        return self._readers.qsize()

    async def initialize(self) -> None:
        """Open the writer first (it switches the file to WAL), then the readers."""
        async with self._open_lock:
            if self._writer is not None:
                return

            self.db_path.parent.mkdir(parents=True, exist_ok=True)
            writer = await self._open()
            for _ in range(self.pool_size):
                conn = await self._open(query_only=True)
                self._reader_conns.append(conn)
                self._readers.put_nowait(conn)
            self._writer = writer

            logger.info(
                "sqlite_pool_opened",
                db_path=str(self.db_path),
                readers=self.pool_size,
            )

    async def _open(self, query_only: bool = False) -> aiosqlite.Connection:
        # Autocommit mode; transactions are opened explicitly by ``transaction``
        conn = await aiosqlite.connect(self.db_path, isolation_level=None)
        await conn.execute("PRAGMA journal_mode=WAL")
        await conn.execute("PRAGMA synchronous=NORMAL")
        await conn.execute(f"PRAGMA busy_timeout={self.busy_timeout}")
        if query_only:
            await conn.execute("PRAGMA query_only=ON")
        conn.row_factory = aiosqlite.Row
        return conn

    @asynccontextmanager
    async def acquire(self) -> AsyncIterator[aiosqlite.Connection]:
        """Borrow a read-only connection for the duration of the block."""
        if not self.initialized:
            await self.initialize()

        conn = await self._readers.get()
        try:
            yield conn
        finally:
            self._readers.put_nowait(conn)

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[aiosqlite.Connection]:
        """
        Hold the writer for one unit of work.

        Commits when the block exits cleanly and rolls back otherwise.
        Concurrent callers queue on the lock instead of contending for the
        SQLite write lock.
        """
        if not self.initialized:
            await self.initialize()

        async with self._write_lock:
            conn = self._writer
            await conn.execute("BEGIN IMMEDIATE")
            try:
                yield conn
                await conn.execute("COMMIT")
            except BaseException:
                if conn.in_transaction:
                    await conn.execute("ROLLBACK")
                raise

    async def close(self) -> None:
        async with self._open_lock:
            if self._writer is None:
                return
            async with self._write_lock:
                for conn in self._reader_conns:
                    await conn.close()
                await self._writer.close()
            self._reader_conns.clear()
            self._readers = asyncio.Queue()
            self._writer = None
            logger.info("sqlite_pool_closed", db_path=str(self.db_path))


# Process-wide pool over the configured database
_pool: ConnectionPool | None = None


async def get_pool() -> ConnectionPool:
    """Get or open the pool for ``settings.storage.db_path``."""
    global _pool
    if _pool is None:
        settings = get_settings()
        pool = ConnectionPool(
            db_path=settings.storage.db_path,
            pool_size=settings.storage.pool_size,
            busy_timeout=settings.storage.busy_timeout,
        )
        await pool.initialize()
        _pool = pool
    return _pool


async def close_pool() -> None:
    global _pool
    if _pool is not None:
        await _pool.close()
        _pool = None
