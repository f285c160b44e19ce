"""
Typed access to the persisted ledger collections.

Each collection lives as one JSON blob under ``<prefix><key>``. Reading a
missing blob yields seed data; reading a blob that no longer parses also
yields seed data, with a warning, so a corrupted store never surfaces to
the user.
"""

import json
from collections.abc import Iterable
from typing import Any

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from src.config import get_logger
from src.core.entities.common import Clock, utc_now
from src.core.entities.ledger_state import CollectionKey, LedgerState
from src.core.interfaces.state_store import IStateStore
from src.core.services.seed import seed_collection

logger = get_logger(__name__)

_ADAPTERS: dict[CollectionKey, TypeAdapter] = {
    key: TypeAdapter(LedgerState.model_fields[key.value].annotation) for key in CollectionKey
}


class LedgerRepository:
    """``load(key) -> T`` / ``save(key, T)`` over a string blob store."""

    def __init__(
        self,
        store: IStateStore,
        key_prefix: str = "",
        seed_on_empty: bool = True,
        clock: Clock = utc_now,
    ):
        self._store = store
        self._prefix = key_prefix
        self._seed_on_empty = seed_on_empty
        self._clock = clock

    def storage_key(self, key: CollectionKey) -> str:
        return f"{self._prefix}{key.value}"

    async def load(self, key: CollectionKey) -> Any:
        raw = await self._store.get(self.storage_key(key))
        if raw is None:
            return self._fallback(key)

        try:
            return _ADAPTERS[key].validate_json(raw)
        except (PydanticValidationError, json.JSONDecodeError, ValueError) as e:
            logger.warning(
                "state_blob_corrupted",
                key=self.storage_key(key),
                error=str(e)[:200],
            )
            return self._fallback(key)

    async def save(self, key: CollectionKey, value: Any) -> None:
        await self._store.set(self.storage_key(key), self._dump(key, value))

    async def load_state(self, keys: Iterable[CollectionKey] | None = None) -> LedgerState:
        """Assemble a ``LedgerState``; collections not requested stay empty."""
        values = {key.value: await self.load(key) for key in (keys or CollectionKey)}
        return LedgerState(**values)

    async def save_state(self, state: LedgerState, keys: Iterable[CollectionKey]) -> None:
        """Persist the touched collections together in one store write."""
        keys = list(keys)
        await self._store.set_many(
            {self.storage_key(key): self._dump(key, getattr(state, key.value)) for key in keys}
        )
        logger.debug("ledger_state_saved", keys=[k.value for k in keys])

    async def reset(self) -> None:
        """Forget every persisted collection under this prefix."""
        for stored in await self._store.keys(self._prefix):
            await self._store.delete(stored)
        logger.info("ledger_state_reset", prefix=self._prefix)

    def _fallback(self, key: CollectionKey) -> Any:
        if self._seed_on_empty:
            return seed_collection(key, self._clock())
        return getattr(LedgerState(), key.value)

    @staticmethod
    def _dump(key: CollectionKey, value: Any) -> str:
        return _ADAPTERS[key].dump_json(value).decode("utf-8")
