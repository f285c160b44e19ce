"""Data Transfer Objects for API layer.

Request DTOs: Validate and parse incoming API requests.
Response DTOs: Structure and serialize API responses.

These are the ONLY contracts between API handlers and use cases.
"""

from src.application.dto.requests import (
    AddCommentRequest,
    AddLaborRequest,
    AddServiceRequest,
    AddTaskRequest,
    CheckinToolRequest,
    CheckoutToolRequest,
    ConsumptionLineRequest,
    CreateComponentRequest,
    CreateInventoryItemRequest,
    CreateTechnicianRequest,
    CreateToolRequest,
    CreateWorkOrderRequest,
    DispatchConsumptionRequest,
    FinishWorkOrderRequest,
    ImportInventoryRequest,
    ProcessReturnsRequest,
    ReceiveSupplyRequest,
    ReturnFromMaintenanceRequest,
    SendToMaintenanceRequest,
    SparePartRequest,
    SupplyLineRequest,
)
from src.application.dto.responses import (
    ActivityListResponse,
    BulkImportResponse,
    CommentResponse,
    ComponentListResponse,
    ConsumptionListResponse,
    CustodyResponse,
    DispatchResponse,
    ErrorResponse,
    HealthResponse,
    InventoryItemResponse,
    InventoryListResponse,
    LoanListResponse,
    MaintenanceListResponse,
    MaintenanceRecordResponse,
    ProviderHealthResponse,
    ReceiptResponse,
    SettingsResponse,
    SupplyDocumentListResponse,
    TaskResponse,
    TechnicianListResponse,
    ToolListResponse,
    WorkOrderListResponse,
    WorkOrderResponse,
    WorkOrderStatusResponse,
)

__all__ = [
    # Requests
    "CreateWorkOrderRequest",
    "FinishWorkOrderRequest",
    "AddLaborRequest",
    "AddServiceRequest",
    "AddTaskRequest",
    "AddCommentRequest",
    "CreateInventoryItemRequest",
    "SupplyLineRequest",
    "ReceiveSupplyRequest",
    "ConsumptionLineRequest",
    "DispatchConsumptionRequest",
    "ImportInventoryRequest",
    "CreateToolRequest",
    "CheckoutToolRequest",
    "CheckinToolRequest",
    "ProcessReturnsRequest",
    "SendToMaintenanceRequest",
    "ReturnFromMaintenanceRequest",
    "CreateTechnicianRequest",
    "SparePartRequest",
    "CreateComponentRequest",
    # Responses
    "WorkOrderResponse",
    "WorkOrderListResponse",
    "WorkOrderStatusResponse",
    "TaskResponse",
    "CommentResponse",
    "InventoryItemResponse",
    "InventoryListResponse",
    "ReceiptResponse",
    "DispatchResponse",
    "SupplyDocumentListResponse",
    "ConsumptionListResponse",
    "BulkImportResponse",
    "ToolListResponse",
    "LoanListResponse",
    "CustodyResponse",
    "MaintenanceRecordResponse",
    "MaintenanceListResponse",
    "TechnicianListResponse",
    "ComponentListResponse",
    "ActivityListResponse",
    "SettingsResponse",
    "HealthResponse",
    "ProviderHealthResponse",
    "ErrorResponse",
]
