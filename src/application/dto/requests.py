"""Request DTOs for API endpoints.

Pydantic v2 models for API request validation.
These are the ONLY contracts between API and use cases. Partial edits
(work order, item, tool, settings) reuse the ``*Update`` entities.
"""

import datetime as dt
from typing import Any

from pydantic import BaseModel, Field

from src.core.entities import (
    Area,
    MaintenanceType,
    Priority,
    SupplyDocType,
    ToolCategory,
    ToolReturn,
    ToolStatus,
    Urgency,
    WorkshopType,
)

# =============================================================================
# Work orders
# =============================================================================


class CreateWorkOrderRequest(BaseModel):
    """Open a new work order (OT)."""

    id: str = Field(..., description="OT number", examples=["OT.1004"])
    title: str = Field(..., min_length=1)
    client_id: str = Field(..., min_length=1, description="Client name or code")
    identification: str | None = Field(default=None, description="Serial or tag of the piece")
    client_guide: str | None = None
    client_oc: str | None = Field(default=None, description="Client purchase order")
    reception_doc: str | None = None
    is_budget_approved: bool = Field(
        default=True,
        description="False holds the order until the client approves the quote",
    )
    quote_number: str | None = None
    quoted_value: float | None = Field(default=None, ge=0)
    area: Area = Area.MECHANICS
    priority: Priority = Priority.MEDIUM
    machine: str | None = None
    technician_id: str | None = None
    assigned_operators: list[str] = Field(default_factory=list)
    creation_date: dt.datetime | None = Field(default=None, description="Defaults to now")
    estimated_completion_date: dt.datetime
    description: str = ""
    tasks: list[str] = Field(default_factory=list, description="Initial checklist")


class FinishWorkOrderRequest(BaseModel):
    """Close an order as finished."""

    final_notes: str | None = Field(default=None, description="Delivery notes")


class AddLaborRequest(BaseModel):
    """Book technician hours."""

    technician_id: str = Field(..., min_length=1)
    technician_name: str = ""
    hours: float = Field(..., gt=0)
    date: dt.datetime | None = Field(default=None, description="Defaults to now")
    description: str = ""
    hourly_rate: float | None = Field(default=None, ge=0)


class AddServiceRequest(BaseModel):
    """Book outsourced work."""

    provider: str = Field(..., min_length=1)
    description: str = ""
    cost: float = Field(default=0.0, ge=0)
    reference_doc: str | None = Field(default=None, description="Purchase order or invoice")
    date: dt.datetime | None = None


class AddTaskRequest(BaseModel):
    description: str = Field(..., min_length=1)


class AddCommentRequest(BaseModel):
    text: str = Field(..., min_length=1)
    user_name: str = ""


# =============================================================================
# Inventory
# =============================================================================


class CreateInventoryItemRequest(BaseModel):
    """Register a catalogue item."""

    id: str | None = Field(default=None, description="Generated when omitted")
    sku: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    category: str = "General"
    stock: float = Field(default=0.0, ge=0, description="Opening stock")
    min_stock: float = Field(default=0.0, ge=0)
    unit: str = "un"
    location: str = ""
    price: float = Field(default=0.0, ge=0)


class SupplyLineRequest(BaseModel):
    item_id: str
    quantity: float
    unit_price: float = 0.0


class ReceiveSupplyRequest(BaseModel):
    """Inbound supply document."""

    id: str | None = Field(default=None, description="RCP-YYYY-NNNN when omitted")
    type: SupplyDocType = SupplyDocType.INVOICE
    provider: str
    external_reference: str = Field(default="", description="Provider invoice or guide number")
    date: dt.datetime | None = None
    items: list[SupplyLineRequest]
    received_by: str = ""


class ConsumptionLineRequest(BaseModel):
    item_id: str
    quantity: float
    unit_price: float | None = Field(default=None, description="Item price when omitted")


class DispatchConsumptionRequest(BaseModel):
    """Stock issued to a work order."""

    id: str | None = Field(default=None, description="DSP-YYYY-NNNN when omitted")
    work_order_id: str
    technician_id: str
    technician_name: str = ""
    date: dt.datetime | None = None
    items: list[ConsumptionLineRequest]
    dispatched_by: str = ""


class ImportInventoryRequest(BaseModel):
    """Spreadsheet rows as column-name -> cell dictionaries."""

    rows: list[dict[str, Any]] = Field(
        ...,
        examples=[[{"SKU": "st-304", "Nombre": "Acero 304", "Stock": 12}]],
    )


# =============================================================================
# Tool crib
# =============================================================================


class CreateToolRequest(BaseModel):
    """Register a tool in the crib."""

    id: str | None = Field(default=None, description="Generated when omitted")
    code: str = Field(..., min_length=1, description="Internal code or barcode")
    name: str = Field(..., min_length=1)
    brand: str = ""
    model: str = ""
    serial_number: str | None = None
    category: ToolCategory = ToolCategory.HAND_TOOLS
    status: ToolStatus = ToolStatus.AVAILABLE
    location: str = ""
    accumulated_usage_hours: float | None = None
    description: str | None = None
    purchase_date: dt.date | None = None
    purchase_price: float | None = Field(default=None, ge=0)
    provider: str | None = None
    invoice_ref: str | None = None
    next_maintenance_date: dt.date | None = None


class CheckoutToolRequest(BaseModel):
    """Lend a tool to a technician."""

    id: str | None = Field(default=None, description="PRS-YYYY-NNNN when omitted")
    tool_id: str
    technician_id: str
    technician_name: str = ""
    work_order_id: str | None = None
    condition_out: str = "Conforme"


class CheckinToolRequest(BaseModel):
    """Close a single loan."""

    condition_in: str
    status: ToolStatus = Field(
        default=ToolStatus.AVAILABLE,
        description="available, broken or maintenance",
    )


class ProcessReturnsRequest(BaseModel):
    """Close several loans at once."""

    returns: list[ToolReturn]
    return_date: dt.datetime | None = None
    technician_id: str | None = Field(
        default=None,
        description="When set, every loan must belong to this technician",
    )


class SendToMaintenanceRequest(BaseModel):
    """Dispatch a tool to a workshop."""

    date: dt.datetime | None = None
    type: WorkshopType = WorkshopType.INTERNAL
    urgency: Urgency = Urgency.MEDIUM
    reason: str = Field(..., min_length=1)
    provider: str = ""
    responsible: str = ""
    reference: str = Field(default="", description="Purchase order or work order")
    estimated_return_date: dt.date | None = None


class ReturnFromMaintenanceRequest(BaseModel):
    """Receive a tool back from its workshop."""

    status: ToolStatus = ToolStatus.AVAILABLE
    type: MaintenanceType = MaintenanceType.CORRECTIVE
    date: dt.datetime | None = None
    cost: float = Field(default=0.0, ge=0)
    invoice_ref: str | None = None
    description: str = ""
    next_scheduled_date: dt.date | None = None


# =============================================================================
# Technicians and components
# =============================================================================


class CreateTechnicianRequest(BaseModel):
    """Put a technician on the roster."""

    id: str = Field(..., min_length=1, description="User id the technician signs in with")
    name: str = Field(..., min_length=1)
    specialty: str = ""
    active: bool = True


class SparePartRequest(BaseModel):
    id: str | None = Field(default=None, description="Generated when omitted")
    name: str = Field(..., min_length=1)
    code: str = Field(..., min_length=1)
    quantity: float = Field(default=1, gt=0, description="Units fitted per component")


class CreateComponentRequest(BaseModel):
    """Catalog a client component and its spare parts."""

    id: str | None = Field(default=None, description="Generated when omitted")
    name: str = Field(..., min_length=1)
    client: str = ""
    model: str = ""
    spare_parts: list[SparePartRequest] = Field(default_factory=list)
