"""Application use cases."""

from src.application.use_cases.base import LedgerUseCase
from src.application.use_cases.inventory import (
    AddInventoryItemUseCase,
    DispatchConsumptionUseCase,
    DispatchResult,
    ImportInventoryUseCase,
    ListConsumptionRecordsUseCase,
    ListInventoryUseCase,
    ListSupplyDocumentsUseCase,
    ReceiptResult,
    ReceiveSupplyUseCase,
    UpdateInventoryItemUseCase,
)
from src.application.use_cases.roster import (
    AddComponentUseCase,
    AddTechnicianUseCase,
    GetComponentUseCase,
    ListComponentsUseCase,
    ListTechniciansUseCase,
    UpdateComponentUseCase,
    UpdateTechnicianUseCase,
)
from src.application.use_cases.settings import (
    GetSettingsUseCase,
    ListActivityUseCase,
    UpdateSettingsUseCase,
)
from src.application.use_cases.tool_crib import (
    AddToolUseCase,
    CheckinToolUseCase,
    CheckoutToolUseCase,
    CustodyResult,
    ListToolLoansUseCase,
    ListToolMaintenancesUseCase,
    ListToolsUseCase,
    MaintenanceDueUseCase,
    MaintenanceResult,
    ProcessToolReturnsUseCase,
    RetireToolUseCase,
    ReturnFromMaintenanceUseCase,
    SendToMaintenanceUseCase,
    UpdateToolUseCase,
)
from src.application.use_cases.work_orders import (
    AddCommentUseCase,
    AddLaborUseCase,
    AddServiceUseCase,
    AddTaskUseCase,
    ApproveBudgetUseCase,
    ChangeWorkOrderStatusUseCase,
    CommentResult,
    CreateWorkOrderUseCase,
    GetWorkOrderUseCase,
    ListWorkOrdersUseCase,
    TaskResult,
    ToggleTaskUseCase,
    UpdateWorkOrderUseCase,
    WorkOrderAction,
    WorkOrderResult,
)

__all__ = [
    "LedgerUseCase",
    # Work orders
    "WorkOrderAction",
    "WorkOrderResult",
    "TaskResult",
    "CommentResult",
    "CreateWorkOrderUseCase",
    "UpdateWorkOrderUseCase",
    "ApproveBudgetUseCase",
    "ChangeWorkOrderStatusUseCase",
    "AddLaborUseCase",
    "AddServiceUseCase",
    "AddTaskUseCase",
    "ToggleTaskUseCase",
    "AddCommentUseCase",
    "ListWorkOrdersUseCase",
    "GetWorkOrderUseCase",
    # Inventory
    "ReceiptResult",
    "DispatchResult",
    "AddInventoryItemUseCase",
    "UpdateInventoryItemUseCase",
    "ReceiveSupplyUseCase",
    "DispatchConsumptionUseCase",
    "ImportInventoryUseCase",
    "ListInventoryUseCase",
    "ListSupplyDocumentsUseCase",
    "ListConsumptionRecordsUseCase",
    # Tool crib
    "CustodyResult",
    "MaintenanceResult",
    "AddToolUseCase",
    "UpdateToolUseCase",
    "RetireToolUseCase",
    "CheckoutToolUseCase",
    "CheckinToolUseCase",
    "ProcessToolReturnsUseCase",
    "SendToMaintenanceUseCase",
    "ReturnFromMaintenanceUseCase",
    "ListToolsUseCase",
    "MaintenanceDueUseCase",
    "ListToolLoansUseCase",
    "ListToolMaintenancesUseCase",
    # Technicians and components
    "ListTechniciansUseCase",
    "AddTechnicianUseCase",
    "UpdateTechnicianUseCase",
    "ListComponentsUseCase",
    "GetComponentUseCase",
    "AddComponentUseCase",
    "UpdateComponentUseCase",
    # Settings and activity
    "GetSettingsUseCase",
    "UpdateSettingsUseCase",
    "ListActivityUseCase",
]
