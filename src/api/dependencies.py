"""
Dependency injection container for FastAPI.

Provides use case instances and the acting user to route handlers.
"""

from functools import lru_cache

from fastapi import Header

from src.application.use_cases import (
    AddCommentUseCase,
    AddComponentUseCase,
    AddInventoryItemUseCase,
    AddLaborUseCase,
    AddServiceUseCase,
    AddTaskUseCase,
    AddTechnicianUseCase,
    AddToolUseCase,
    ApproveBudgetUseCase,
    ChangeWorkOrderStatusUseCase,
    CheckinToolUseCase,
    CheckoutToolUseCase,
    CreateWorkOrderUseCase,
    DispatchConsumptionUseCase,
    GetComponentUseCase,
    GetSettingsUseCase,
    GetWorkOrderUseCase,
    ImportInventoryUseCase,
    ListActivityUseCase,
    ListComponentsUseCase,
    ListConsumptionRecordsUseCase,
    ListInventoryUseCase,
    ListSupplyDocumentsUseCase,
    ListTechniciansUseCase,
    ListToolLoansUseCase,
    ListToolMaintenancesUseCase,
    ListToolsUseCase,
    ListWorkOrdersUseCase,
    MaintenanceDueUseCase,
    ProcessToolReturnsUseCase,
    ReceiveSupplyUseCase,
    RetireToolUseCase,
    ReturnFromMaintenanceUseCase,
    SendToMaintenanceUseCase,
    ToggleTaskUseCase,
    UpdateComponentUseCase,
    UpdateInventoryItemUseCase,
    UpdateSettingsUseCase,
    UpdateTechnicianUseCase,
    UpdateToolUseCase,
    UpdateWorkOrderUseCase,
)
from src.config import Settings, get_settings

SYSTEM_ACTOR = "system"


@lru_cache
def get_app_settings() -> Settings:
    """Get cached application settings."""
    return get_settings()


def get_actor(x_user_id: str | None = Header(default=None)) -> str:
    """Acting user for the audit trail, from the ``X-User-Id`` header."""
    if x_user_id and x_user_id.strip():
        return x_user_id.strip()
    return SYSTEM_ACTOR


# Work order use cases
def get_create_work_order_use_case() -> CreateWorkOrderUseCase:
    return CreateWorkOrderUseCase()


def get_update_work_order_use_case() -> UpdateWorkOrderUseCase:
    return UpdateWorkOrderUseCase()


def get_approve_budget_use_case() -> ApproveBudgetUseCase:
    return ApproveBudgetUseCase()


def get_change_status_use_case() -> ChangeWorkOrderStatusUseCase:
    return ChangeWorkOrderStatusUseCase()


def get_add_labor_use_case() -> AddLaborUseCase:
    return AddLaborUseCase()


def get_add_service_use_case() -> AddServiceUseCase:
    return AddServiceUseCase()


def get_add_task_use_case() -> AddTaskUseCase:
    return AddTaskUseCase()


def get_toggle_task_use_case() -> ToggleTaskUseCase:
    return ToggleTaskUseCase()


def get_add_comment_use_case() -> AddCommentUseCase:
    return AddCommentUseCase()


def get_list_work_orders_use_case() -> ListWorkOrdersUseCase:
    return ListWorkOrdersUseCase()


def get_work_order_use_case() -> GetWorkOrderUseCase:
    return GetWorkOrderUseCase()


# Inventory use cases
def get_add_item_use_case() -> AddInventoryItemUseCase:
    return AddInventoryItemUseCase()


def get_update_item_use_case() -> UpdateInventoryItemUseCase:
    return UpdateInventoryItemUseCase()


def get_receive_supply_use_case() -> ReceiveSupplyUseCase:
    """Get receive supply use case."""
    return ReceiveSupplyUseCase()


def get_dispatch_use_case() -> DispatchConsumptionUseCase:
    """Get dispatch consumption use case."""
    return DispatchConsumptionUseCase()


def get_import_inventory_use_case() -> ImportInventoryUseCase:
    return ImportInventoryUseCase()


def get_list_inventory_use_case() -> ListInventoryUseCase:
    return ListInventoryUseCase()


def get_list_supply_documents_use_case() -> ListSupplyDocumentsUseCase:
    return ListSupplyDocumentsUseCase()


def get_list_consumption_use_case() -> ListConsumptionRecordsUseCase:
    return ListConsumptionRecordsUseCase()


# Tool crib use cases
def get_add_tool_use_case() -> AddToolUseCase:
    return AddToolUseCase()


def get_update_tool_use_case() -> UpdateToolUseCase:
    return UpdateToolUseCase()


def get_retire_tool_use_case() -> RetireToolUseCase:
    return RetireToolUseCase()


def get_checkout_use_case() -> CheckoutToolUseCase:
    return CheckoutToolUseCase()


def get_checkin_use_case() -> CheckinToolUseCase:
    return CheckinToolUseCase()


def get_process_returns_use_case() -> ProcessToolReturnsUseCase:
    return ProcessToolReturnsUseCase()


def get_send_to_maintenance_use_case() -> SendToMaintenanceUseCase:
    return SendToMaintenanceUseCase()


def get_return_from_maintenance_use_case() -> ReturnFromMaintenanceUseCase:
    return ReturnFromMaintenanceUseCase()


def get_list_tools_use_case() -> ListToolsUseCase:
    return ListToolsUseCase()


def get_maintenance_due_use_case() -> MaintenanceDueUseCase:
    return MaintenanceDueUseCase()


def get_list_loans_use_case() -> ListToolLoansUseCase:
    return ListToolLoansUseCase()


def get_list_maintenances_use_case() -> ListToolMaintenancesUseCase:
    return ListToolMaintenancesUseCase()


# Technicians and components
def get_list_technicians_use_case() -> ListTechniciansUseCase:
    return ListTechniciansUseCase()


def get_add_technician_use_case() -> AddTechnicianUseCase:
    return AddTechnicianUseCase()


def get_update_technician_use_case() -> UpdateTechnicianUseCase:
    return UpdateTechnicianUseCase()


def get_list_components_use_case() -> ListComponentsUseCase:
    return ListComponentsUseCase()


def get_component_use_case() -> GetComponentUseCase:
    return GetComponentUseCase()


def get_add_component_use_case() -> AddComponentUseCase:
    return AddComponentUseCase()


def get_update_component_use_case() -> UpdateComponentUseCase:
    return UpdateComponentUseCase()


# Settings and activity
def get_settings_use_case() -> GetSettingsUseCase:
    return GetSettingsUseCase()


def get_update_settings_use_case() -> UpdateSettingsUseCase:
    return UpdateSettingsUseCase()


def get_list_activity_use_case() -> ListActivityUseCase:
    return ListActivityUseCase()
