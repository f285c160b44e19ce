"""
Service factory functions for dependency injection.

This module wires infrastructure implementations to the repository and
builds the ledger services around a loaded ``LedgerState``. Use cases
should import from here.

Clean Architecture: Application layer orchestrates DI, not core layer.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING

from src.application.repository import LedgerRepository
from src.config import get_settings
from src.core.entities.common import Clock, utc_now
from src.core.entities.ledger_state import LedgerState
from src.core.services import (
    ActivityLog,
    InventoryLedger,
    ShopRoster,
    ToolCustodyLedger,
    WorkOrderLedger,
)

if TYPE_CHECKING:
    from src.core.interfaces import IStateStore


@dataclass
class Ledgers:
    """The ledger services bound to one loaded state."""

    state: LedgerState
    activity: ActivityLog
    work_orders: WorkOrderLedger
    inventory: InventoryLedger
    tools: ToolCustodyLedger
    roster: ShopRoster


def build_ledgers(state: LedgerState, clock: Clock = utc_now) -> Ledgers:
    """
    Bind fresh ledger services to ``state``.

    Ledgers are cheap and stateless beyond the state they wrap, so they
    are built per call rather than cached.
    """
    settings = get_settings()
    activity = ActivityLog(
        state.activity_log,
        limit=settings.ledger.activity_log_limit,
        clock=clock,
    )
    roster = ShopRoster(state, activity)
    work_orders = WorkOrderLedger(state, activity, clock=clock, roster=roster)
    return Ledgers(
        state=state,
        activity=activity,
        work_orders=work_orders,
        inventory=InventoryLedger(
            state,
            activity,
            work_orders,
            tax_rate=settings.ledger.tax_rate,
            clock=clock,
            roster=roster,
        ),
        tools=ToolCustodyLedger(state, activity, clock=clock, roster=roster),
        roster=roster,
    )


# Singleton repository instance
_ledger_repository: LedgerRepository | None = None


async def get_ledger_repository(
    store: "IStateStore | None" = None,
) -> LedgerRepository:
    """
    Get or create the LedgerRepository.

    Uses the SQLite state store unless one is provided. Passing a store
    always builds a new repository.
    """
    global _ledger_repository

    if _ledger_repository is not None and store is None:
        return _ledger_repository

    if store is None:
        # Lazy import infrastructure to avoid circular imports
        from src.infrastructure.storage.sqlite import get_state_store

        store = await get_state_store()

    settings = get_settings()
    repository = LedgerRepository(
        store,
        key_prefix=settings.storage.key_prefix,
        seed_on_empty=settings.ledger.seed_on_empty,
    )
    _ledger_repository = repository
    return repository


def reset_services() -> None:
    """Reset singletons (for testing)."""
    global _ledger_repository
    _ledger_repository = None
