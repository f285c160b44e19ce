"""Shared plumbing for ledger use cases."""

from collections.abc import Iterable

from src.application.repository import LedgerRepository
from src.application.services import Ledgers, build_ledgers
from src.core.entities.common import Clock, utc_now
from src.core.entities.ledger_state import CollectionKey


class LedgerUseCase:
    """
    Load the ledger state, run one operation, save what it touched.

    A failing operation raises before ``_commit`` so nothing is written.
    """

    def __init__(
        self,
        repository: LedgerRepository | None = None,
        clock: Clock = utc_now,
    ):
        self._repository = repository
        self._clock = clock

    async def _get_repository(self) -> LedgerRepository:
        if self._repository is None:
            from src.application.services import get_ledger_repository

            self._repository = await get_ledger_repository()
        return self._repository

    async def _load(self, keys: Iterable[CollectionKey] | None = None) -> Ledgers:
        """Build the ledgers over the stored state, or only over ``keys``."""
        repository = await self._get_repository()
        state = await repository.load_state(keys)
        return build_ledgers(state, clock=self._clock)

    async def _commit(self, ledgers: Ledgers, *keys: CollectionKey) -> None:
        """Persist the touched collections plus the activity log."""
        repository = await self._get_repository()
        await repository.save_state(ledgers.state, (*keys, CollectionKey.ACTIVITY_LOG))
