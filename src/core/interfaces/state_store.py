"""Abstract interface for the persisted key-value store."""

from abc import ABC, abstractmethod
from collections.abc import Mapping


class IStateStore(ABC):
    """
    Dumb blob store addressed by string key.

    Each ledger collection is saved as one serialized snapshot; the store
    knows nothing about the content.
    """

    @abstractmethod
    async def get(self, key: str) -> str | None:
        """Return the blob stored under ``key``, or None if never written."""
        pass

    @abstractmethod
    async def set(self, key: str, value: str) -> None:
        """Overwrite the blob stored under ``key``."""
        pass

    async def set_many(self, items: Mapping[str, str]) -> None:
        """
        Overwrite several blobs.

        Stores with transactions override this to apply the whole batch
        atomically.
        """
        for key, value in items.items():
            await self.set(key, value)

    @abstractmethod
    async def delete(self, key: str) -> None:
        """Remove ``key`` if present."""
        pass

    @abstractmethod
    async def keys(self, prefix: str = "") -> list[str]:
        """List stored keys starting with ``prefix``."""
        pass
