"""
Core business logic services.

Layer-pure services that depend only on:
- src/core/entities/*
- src/core/interfaces/*
- src/core/exceptions.py

NO infrastructure imports. All ledgers mutate a LedgerState passed in
through the constructor.
"""

from src.core.services.activity_log import ActivityLog
from src.core.services.inventory_ledger import InventoryLedger, compute_tax
from src.core.services.seed import seed_collection, seed_state
from src.core.services.shop_roster import ShopRoster
from src.core.services.tool_custody_ledger import ToolCustodyLedger
from src.core.services.work_order_ledger import (
    ALLOWED_TRANSITIONS,
    FinishResult,
    WorkOrderLedger,
)

__all__ = [
    # Audit trail
    "ActivityLog",
    # Work orders
    "WorkOrderLedger",
    "FinishResult",
    "ALLOWED_TRANSITIONS",
    # Inventory
    "InventoryLedger",
    "compute_tax",
    # Tool crib
    "ToolCustodyLedger",
    # Staff and equipment catalog
    "ShopRoster",
    # Demo data
    "seed_state",
    "seed_collection",
]
