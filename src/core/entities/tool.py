"""Tool crib domain entities."""

import datetime as dt
from enum import Enum

from pydantic import BaseModel

from src.core.entities.common import Timestamp


class ToolStatus(str, Enum):
    """Custody status of a tool."""

    AVAILABLE = "available"
    IN_USE = "in_use"
    MAINTENANCE = "maintenance"
    BROKEN = "broken"
    RETIRED = "retired"


class ToolCategory(str, Enum):
    """Tool families."""

    POWER_TOOLS = "power_tools"
    HAND_TOOLS = "hand_tools"
    MEASURING = "measuring"
    SAFETY = "safety"
    CONSUMABLES = "consumables"
    MACHINERY = "machinery"


class WorkshopType(str, Enum):
    INTERNAL = "internal"
    EXTERNAL = "external"


class Urgency(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class MaintenanceDispatch(BaseModel):
    """Where a tool went when it was sent to maintenance."""

    date: Timestamp
    type: WorkshopType = WorkshopType.INTERNAL
    urgency: Urgency = Urgency.MEDIUM
    reason: str
    provider: str = ""
    responsible: str = ""  # who authorized the dispatch
    reference: str = ""  # purchase order or work order
    estimated_return_date: dt.date | None = None


class Tool(BaseModel):
    """A shared tool kept in the crib."""

    id: str
    code: str  # internal code / barcode
    name: str
    brand: str = ""
    model: str = ""
    serial_number: str | None = None
    category: ToolCategory = ToolCategory.HAND_TOOLS
    status: ToolStatus = ToolStatus.AVAILABLE
    location: str = ""
    accumulated_usage_hours: float | None = None
    description: str | None = None

    # Purchase data
    purchase_date: dt.date | None = None
    purchase_price: float | None = None
    provider: str | None = None
    invoice_ref: str | None = None

    next_maintenance_date: dt.date | None = None
    active_maintenance: MaintenanceDispatch | None = None


class ToolUpdate(BaseModel):
    """
    Direct edit of tool data.

    Status and the open maintenance dispatch change only through custody
    and maintenance operations.
    """

    code: str | None = None
    name: str | None = None
    brand: str | None = None
    model: str | None = None
    serial_number: str | None = None
    category: ToolCategory | None = None
    location: str | None = None
    accumulated_usage_hours: float | None = None
    description: str | None = None
    purchase_date: dt.date | None = None
    purchase_price: float | None = None
    provider: str | None = None
    invoice_ref: str | None = None
    next_maintenance_date: dt.date | None = None


class LoanStatus(str, Enum):
    ACTIVE = "active"
    RETURNED = "returned"


class ToolLoan(BaseModel):
    """Checkout of a tool to a technician."""

    id: str | None = None  # PRS-YYYY-NNNN, assigned on checkout when absent
    tool_id: str
    tool_name: str = ""  # snapshot
    technician_id: str
    technician_name: str = ""  # snapshot
    work_order_id: str | None = None
    loan_date: Timestamp | None = None
    return_date: Timestamp | None = None
    condition_out: str = "Conforme"
    condition_in: str | None = None
    status: LoanStatus = LoanStatus.ACTIVE


class ToolReturn(BaseModel):
    """One line of a batch return."""

    loan_id: str
    condition: str
    status: ToolStatus = ToolStatus.AVAILABLE


class MaintenanceType(str, Enum):
    PREVENTATIVE = "preventative"
    CORRECTIVE = "corrective"


class MaintenanceOutcome(BaseModel):
    """Result reported when a tool comes back from maintenance."""

    status: ToolStatus = ToolStatus.AVAILABLE
    type: MaintenanceType = MaintenanceType.CORRECTIVE
    date: Timestamp | None = None
    cost: float = 0.0
    invoice_ref: str | None = None
    description: str = ""
    next_scheduled_date: dt.date | None = None


class ToolMaintenance(BaseModel):
    """Completed maintenance, created when the tool is received back."""

    id: str
    tool_id: str
    type: MaintenanceType = MaintenanceType.CORRECTIVE
    date: Timestamp
    performed_by: str
    cost: float = 0.0
    invoice_ref: str | None = None
    purchase_order: str | None = None
    description: str = ""
    next_scheduled_date: dt.date | None = None
