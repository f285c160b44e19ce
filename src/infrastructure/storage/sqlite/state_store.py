"""SQLite implementation of the ledger state store."""

from collections.abc import Mapping

import aiosqlite

from src.config import get_logger
from src.core.exceptions import DatabaseError
from src.core.interfaces.state_store import IStateStore
from src.infrastructure.storage.sqlite.connection import ConnectionPool, get_pool

logger = get_logger(__name__)

UPSERT_SQL = """
    INSERT INTO state_blobs (key, value, updated_at)
    VALUES (?, ?, datetime('now'))
    ON CONFLICT(key) DO UPDATE SET
        value = excluded.value,
        updated_at = excluded.updated_at
"""


class SQLiteStateStore(IStateStore):
    """
    Key-value blobs in the ``state_blobs`` table.

    Uses the process-wide pool unless a pool is passed in.
    """

    def __init__(self, pool: ConnectionPool | None = None):
        self._pool = pool

    async def _resolve_pool(self) -> ConnectionPool:
        return self._pool if self._pool is not None else await get_pool()

    async def get(self, key: str) -> str | None:
        try:
            pool = await self._resolve_pool()
            async with pool.acquire() as conn:
                cursor = await conn.execute(
                    "SELECT value FROM state_blobs WHERE key = ?",
                    (key,),
                )
                row = await cursor.fetchone()
        except aiosqlite.Error as e:
            raise DatabaseError("get", str(e)) from e
        return row[0] if row else None

    async def set(self, key: str, value: str) -> None:
        await self._upsert("set", {key: value})

    async def set_many(self, items: Mapping[str, str]) -> None:
        """Write every blob in one transaction."""
        if items:
            await self._upsert("set_many", items)

    async def _upsert(self, operation: str, items: Mapping[str, str]) -> None:
        try:
            pool = await self._resolve_pool()
            async with pool.transaction() as conn:
                await conn.executemany(UPSERT_SQL, list(items.items()))
        except aiosqlite.Error as e:
            raise DatabaseError(operation, str(e)) from e
        logger.debug(
            "state_blobs_written",
            keys=sorted(items),
            size=sum(len(v) for v in items.values()),
        )

    async def delete(self, key: str) -> None:
        try:
            pool = await self._resolve_pool()
            async with pool.transaction() as conn:
                await conn.execute("DELETE FROM state_blobs WHERE key = ?", (key,))
        except aiosqlite.Error as e:
            raise DatabaseError("delete", str(e)) from e

    async def keys(self, prefix: str = "") -> list[str]:
        # Escape LIKE wildcards so prefixes are matched literally
        pattern = prefix.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_") + "%"
        try:
            pool = await self._resolve_pool()
            async with pool.acquire() as conn:
                cursor = await conn.execute(
                    "SELECT key FROM state_blobs WHERE key LIKE ? ESCAPE '\\' ORDER BY key",
                    (pattern,),
                )
                rows = await cursor.fetchall()
        except aiosqlite.Error as e:
            raise DatabaseError("keys", str(e)) from e
        return [row[0] for row in rows]
