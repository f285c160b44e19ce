"""Response DTOs for API endpoints.

Pydantic v2 models for API response serialization.
These are the ONLY contracts between use cases and API layer. Mutations
answer with every collection entry they touched so a client can
re-render without another round trip.
"""

from datetime import datetime

from pydantic import BaseModel, Field

from src.core.entities import (
    ActivityLogEntry,
    AppSettings,
    Comment,
    Component,
    ConsumptionRecord,
    InventoryItem,
    SupplyDocument,
    Technician,
    Tool,
    ToolLoan,
    ToolMaintenance,
    WorkOrder,
    WorkOrderTask,
)

# =============================================================================
# Work orders
# =============================================================================


class WorkOrderResponse(WorkOrder):
    """Work order with its derived cost figures."""

    materials_total: float = Field(default=0.0, description="Dispatched materials at usage price")
    labor_hours_total: float = Field(default=0.0, description="Booked technician hours")
    labor_total: float = Field(default=0.0, description="Hours times hourly rate")
    services_total: float = Field(default=0.0, description="Outsourced services")
    cost_total: float = Field(default=0.0, description="Materials, labor and services")
    pending_task_count: int = 0
    overdue: bool = False

    @classmethod
    def from_entity(cls, order: WorkOrder, now: datetime) -> "WorkOrderResponse":
        return cls(
            **order.model_dump(),
            materials_total=order.materials_cost,
            labor_hours_total=order.labor_hours,
            labor_total=order.labor_cost,
            services_total=order.services_cost,
            cost_total=order.total_cost,
            pending_task_count=order.pending_tasks,
            overdue=order.is_overdue(now),
        )


class WorkOrderListResponse(BaseModel):
    """List of work orders."""

    items: list[WorkOrderResponse]
    total: int


class WorkOrderStatusResponse(BaseModel):
    """Outcome of a lifecycle transition."""

    work_order: WorkOrderResponse
    pending_tasks: int = Field(default=0, description="Open checklist items when finishing")
    warning: str | None = None


class TaskResponse(BaseModel):
    task: WorkOrderTask
    work_order: WorkOrderResponse


class CommentResponse(BaseModel):
    comment: Comment
    work_order: WorkOrderResponse


# =============================================================================
# Inventory
# =============================================================================


class InventoryItemResponse(InventoryItem):
    """Inventory item with stock indicators."""

    critical: bool = Field(default=False, description="Stock at or below minimum")
    stock_value: float = Field(default=0.0, description="Stock times price")

    @classmethod
    def from_entity(cls, item: InventoryItem) -> "InventoryItemResponse":
        return cls(
            **item.model_dump(),
            critical=item.is_critical,
            stock_value=item.total_value,
        )


class InventoryListResponse(BaseModel):
    """Inventory snapshot."""

    items: list[InventoryItemResponse]
    total: int
    critical_count: int = 0
    total_value: float = 0.0


class ReceiptResponse(BaseModel):
    """Recorded supply document and the items it restocked."""

    document: SupplyDocument
    items: list[InventoryItemResponse]


class DispatchResponse(BaseModel):
    """Recorded consumption, the items it drew down and the charged order."""

    record: ConsumptionRecord
    items: list[InventoryItemResponse]
    work_order: WorkOrderResponse


class SupplyDocumentListResponse(BaseModel):
    items: list[SupplyDocument]
    total: int


class ConsumptionListResponse(BaseModel):
    items: list[ConsumptionRecord]
    total: int


class BulkImportResponse(BaseModel):
    """Spreadsheet import summary."""

    created: int
    updated: int
    errors: list[str] = Field(default_factory=list, description="One message per rejected row")


# =============================================================================
# Tool crib
# =============================================================================


class ToolListResponse(BaseModel):
    items: list[Tool]
    total: int


class LoanListResponse(BaseModel):
    items: list[ToolLoan]
    total: int


class CustodyResponse(BaseModel):
    """Loans opened or closed and the tools whose status changed."""

    loans: list[ToolLoan]
    tools: list[Tool]


class MaintenanceRecordResponse(BaseModel):
    record: ToolMaintenance
    tool: Tool


class MaintenanceListResponse(BaseModel):
    items: list[ToolMaintenance]
    total: int


# =============================================================================
# Technicians and components
# =============================================================================


class TechnicianListResponse(BaseModel):
    items: list[Technician]
    total: int


class ComponentListResponse(BaseModel):
    items: list[Component]
    total: int


# =============================================================================
# Activity and settings
# =============================================================================


class ActivityListResponse(BaseModel):
    """Most recent audit entries, newest first."""

    items: list[ActivityLogEntry]
    total: int


class SettingsResponse(AppSettings):
    """Current application preferences."""


# =============================================================================
# Health and errors
# =============================================================================


class ProviderHealthResponse(BaseModel):
    """Health status of a backing provider."""

    name: str
    available: bool
    latency_ms: float | None = None
    error: str | None = None


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(..., description="healthy, degraded or unhealthy")
    version: str
    uptime_seconds: float
    database: ProviderHealthResponse | None = None


class ErrorResponse(BaseModel):
    """Standardized error response DTO.

    Every error response includes:
    - error_code: machine-readable code (e.g. WORK_ORDER_NOT_FOUND)
    - message: human-readable description
    - hint: suggested recovery action
    - path: request path that triggered the error
    """

    error_code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error description")
    hint: str | None = Field(default=None, description="Suggested recovery action")
    detail: str | None = Field(default=None, description="Additional details")
    path: str | None = Field(default=None, description="Request path")
    timestamp: datetime = Field(default_factory=datetime.now)
