"""SQLite storage implementations."""

from src.infrastructure.storage.sqlite.connection import (
    ConnectionPool,
    close_pool,
    get_pool,
)
from src.infrastructure.storage.sqlite.state_store import SQLiteStateStore

# Singleton instance
_state_store: SQLiteStateStore | None = None


async def get_state_store() -> SQLiteStateStore:
    """Get singleton state store instance."""
    global _state_store
    if _state_store is None:
        _state_store = SQLiteStateStore()
    return _state_store


__all__ = [
    "ConnectionPool",
    "get_pool",
    "close_pool",
    "SQLiteStateStore",
    "get_state_store",
]
