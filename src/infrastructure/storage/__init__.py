"""Storage infrastructure implementations."""

from src.infrastructure.storage.memory import InMemoryStateStore
from src.infrastructure.storage.sqlite import (
    SQLiteStateStore,
    close_pool,
    get_pool,
    get_state_store,
)

__all__ = [
    # State stores
    "SQLiteStateStore",
    "InMemoryStateStore",
    "get_state_store",
    # Connection pool
    "get_pool",
    "close_pool",
]
