"""Work order domain entities."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field, field_validator

from src.core.entities.common import Timestamp, new_id


class WorkOrderStatus(str, Enum):
    """Lifecycle states of a work order (OT)."""

    PENDING = "pending"
    IN_PROCESS = "in_process"
    WAITING = "waiting"
    FINISHED = "finished"
    CANCELLED = "cancelled"

    @property
    def is_terminal(self) -> bool:
        return self in (WorkOrderStatus.FINISHED, WorkOrderStatus.CANCELLED)


class Area(str, Enum):
    """Shop areas."""

    CNC = "cnc"
    MECHANICS = "mechanics"
    WELDING = "welding"
    QUALITY = "quality"


class Priority(str, Enum):
    """Work order priority."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"


class MaterialUsage(BaseModel):
    """Material consumed by a work order, priced at the moment of use."""

    item_id: str
    name: str  # snapshot of the item name at dispatch time
    quantity: float
    unit_price_at_usage: float = 0.0
    total_cost: float = 0.0
    date_added: Timestamp | None = None


class LaborEntry(BaseModel):
    """Technician hours booked against a work order."""

    id: str = Field(default_factory=new_id)
    technician_id: str
    technician_name: str = ""  # snapshot
    hours: float
    date: Timestamp
    description: str = ""
    hourly_rate: float | None = None

    @field_validator("hours")
    @classmethod
    def positive_hours(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("hours must be positive")
        return v

    @property
    def cost(self) -> float:
        return self.hours * (self.hourly_rate or 0.0)


class ServiceEntry(BaseModel):
    """Outsourced third-party work billed to a work order."""

    id: str = Field(default_factory=new_id)
    provider: str
    description: str = ""
    cost: float = 0.0
    reference_doc: str | None = None  # purchase order or invoice
    date: Timestamp


class WorkOrderTask(BaseModel):
    """Checklist item."""

    id: str = Field(default_factory=new_id)
    description: str
    is_completed: bool = False
    completed_by: str | None = None
    completed_at: Timestamp | None = None


class Comment(BaseModel):
    """Append-only note on a work order."""

    id: str = Field(default_factory=new_id)
    user_id: str
    user_name: str = ""
    text: str
    timestamp: Timestamp


class WorkOrder(BaseModel):
    """
    A unit of trackable shop work.

    ``start_date`` is set once the order first reaches ``in_process`` and
    ``finished_date`` only while the order is ``finished``.
    """

    id: str  # OT number, assigned by the caller
    title: str
    client_id: str
    identification: str | None = None  # serial / tag of the piece
    client_guide: str | None = None
    client_oc: str | None = None
    reception_doc: str | None = None

    # Commercial
    is_budget_approved: bool = True
    quote_number: str | None = None
    quoted_value: float | None = None

    status: WorkOrderStatus = WorkOrderStatus.PENDING
    area: Area = Area.MECHANICS
    machine: str | None = None
    technician_id: str | None = None
    assigned_operators: list[str] = Field(default_factory=list)

    # Resources
    materials: list[MaterialUsage] = Field(default_factory=list)
    labor: list[LaborEntry] = Field(default_factory=list)
    services: list[ServiceEntry] = Field(default_factory=list)
    tasks: list[WorkOrderTask] = Field(default_factory=list)
    comments: list[Comment] = Field(default_factory=list)

    creation_date: Timestamp
    start_date: Timestamp | None = None
    estimated_completion_date: Timestamp
    finished_date: Timestamp | None = None

    priority: Priority = Priority.MEDIUM
    description: str = ""
    final_notes: str | None = None

    @property
    def materials_cost(self) -> float:
        return sum(m.total_cost for m in self.materials)

    @property
    def labor_hours(self) -> float:
        return sum(entry.hours for entry in self.labor)

    @property
    def labor_cost(self) -> float:
        return sum(entry.cost for entry in self.labor)

    @property
    def services_cost(self) -> float:
        return sum(s.cost for s in self.services)

    @property
    def total_cost(self) -> float:
        """Materials, labor and outsourced services combined."""
        return self.materials_cost + self.labor_cost + self.services_cost

    @property
    def pending_tasks(self) -> int:
        return sum(1 for t in self.tasks if not t.is_completed)

    def is_overdue(self, now: datetime) -> bool:
        """Open orders past their estimated completion date."""
        return not self.status.is_terminal and self.estimated_completion_date < now


class WorkOrderUpdate(BaseModel):
    """Supervisor edit of a work order. Absent fields are left untouched."""

    title: str | None = None
    client_id: str | None = None
    identification: str | None = None
    client_guide: str | None = None
    client_oc: str | None = None
    reception_doc: str | None = None
    quote_number: str | None = None
    quoted_value: float | None = None
    status: WorkOrderStatus | None = None
    area: Area | None = None
    machine: str | None = None
    technician_id: str | None = None
    assigned_operators: list[str] | None = None
    creation_date: Timestamp | None = None
    estimated_completion_date: Timestamp | None = None
    priority: Priority | None = None
    description: str | None = None
