"""The in-memory snapshot of every collection the ledger owns."""

from enum import Enum

from pydantic import BaseModel, Field

from src.core.entities.activity import ActivityLogEntry, AppSettings
from src.core.entities.inventory import ConsumptionRecord, InventoryItem, SupplyDocument
from src.core.entities.roster import Component, Technician
from src.core.entities.tool import Tool, ToolLoan, ToolMaintenance
from src.core.entities.work_order import WorkOrder


class CollectionKey(str, Enum):
    """Stable persistence key of each collection.

    Values double as ``LedgerState`` attribute names.
    """

    WORK_ORDERS = "work_orders"
    INVENTORY = "inventory"
    SUPPLY_DOCUMENTS = "supply_documents"
    CONSUMPTION_RECORDS = "consumption_records"
    TOOLS = "tools"
    TOOL_LOANS = "tool_loans"
    TOOL_MAINTENANCES = "tool_maintenances"
    TECHNICIANS = "technicians"
    COMPONENTS = "components"
    SETTINGS = "settings"
    ACTIVITY_LOG = "activity_log"


class LedgerState(BaseModel):
    """
    Explicit store object owning all ledger collections.

    Passed by reference to the ledger services, which are its only
    mutation surface. Newest-first collections (documents, loans,
    maintenances, activity) are prepended to.
    """

    work_orders: list[WorkOrder] = Field(default_factory=list)
    inventory: list[InventoryItem] = Field(default_factory=list)
    supply_documents: list[SupplyDocument] = Field(default_factory=list)
    consumption_records: list[ConsumptionRecord] = Field(default_factory=list)
    tools: list[Tool] = Field(default_factory=list)
    tool_loans: list[ToolLoan] = Field(default_factory=list)
    tool_maintenances: list[ToolMaintenance] = Field(default_factory=list)
    technicians: list[Technician] = Field(default_factory=list)
    components: list[Component] = Field(default_factory=list)
    settings: AppSettings = Field(default_factory=AppSettings)
    activity_log: list[ActivityLogEntry] = Field(default_factory=list)

    def find_work_order(self, order_id: str) -> WorkOrder | None:
        return next((o for o in self.work_orders if o.id == order_id), None)

    def find_item(self, item_id: str) -> InventoryItem | None:
        return next((i for i in self.inventory if i.id == item_id), None)

    def find_item_by_sku(self, sku: str) -> InventoryItem | None:
        key = sku.strip().upper()
        return next((i for i in self.inventory if i.sku == key), None)

    def find_tool(self, tool_id: str) -> Tool | None:
        return next((t for t in self.tools if t.id == tool_id), None)

    def find_loan(self, loan_id: str) -> ToolLoan | None:
        return next((loan for loan in self.tool_loans if loan.id == loan_id), None)

    def find_technician(self, technician_id: str) -> Technician | None:
        return next((t for t in self.technicians if t.id == technician_id), None)

    def find_component(self, component_id: str) -> Component | None:
        return next((c for c in self.components if c.id == component_id), None)
