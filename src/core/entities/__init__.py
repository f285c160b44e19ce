"""Core domain entities."""

from src.core.entities.activity import (
    ActivityAction,
    ActivityEntity,
    ActivityLogEntry,
    AppSettings,
    AppSettingsUpdate,
)
from src.core.entities.inventory import (
    BulkUpsertResult,
    ConsumptionItem,
    ConsumptionRecord,
    InventoryImportRow,
    InventoryItem,
    InventoryItemUpdate,
    SupplyDocType,
    SupplyDocument,
    SupplyItem,
)
from src.core.entities.ledger_state import CollectionKey, LedgerState
from src.core.entities.roster import (
    Component,
    ComponentUpdate,
    SparePart,
    Technician,
    TechnicianUpdate,
)
from src.core.entities.tool import (
    LoanStatus,
    MaintenanceDispatch,
    MaintenanceOutcome,
    MaintenanceType,
    Tool,
    ToolCategory,
    ToolLoan,
    ToolMaintenance,
    ToolReturn,
    ToolStatus,
    ToolUpdate,
    Urgency,
    WorkshopType,
)
from src.core.entities.work_order import (
    Area,
    Comment,
    LaborEntry,
    MaterialUsage,
    Priority,
    ServiceEntry,
    WorkOrder,
    WorkOrderStatus,
    WorkOrderTask,
    WorkOrderUpdate,
)

__all__ = [
    # Work order entities
    "WorkOrder",
    "WorkOrderStatus",
    "WorkOrderUpdate",
    "WorkOrderTask",
    "MaterialUsage",
    "LaborEntry",
    "ServiceEntry",
    "Comment",
    "Area",
    "Priority",
    # Inventory entities
    "InventoryItem",
    "InventoryItemUpdate",
    "InventoryImportRow",
    "BulkUpsertResult",
    "SupplyDocument",
    "SupplyDocType",
    "SupplyItem",
    "ConsumptionRecord",
    "ConsumptionItem",
    # Tool crib entities
    "Tool",
    "ToolStatus",
    "ToolCategory",
    "ToolUpdate",
    "ToolLoan",
    "LoanStatus",
    "ToolReturn",
    "ToolMaintenance",
    "MaintenanceType",
    "MaintenanceDispatch",
    "MaintenanceOutcome",
    "WorkshopType",
    "Urgency",
    # Staff and equipment catalog
    "Technician",
    "TechnicianUpdate",
    "Component",
    "ComponentUpdate",
    "SparePart",
    # Audit and settings
    "ActivityLogEntry",
    "ActivityAction",
    "ActivityEntity",
    "AppSettings",
    "AppSettingsUpdate",
    # State
    "LedgerState",
    "CollectionKey",
]
