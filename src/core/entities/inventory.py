"""Inventory domain entities."""

from enum import Enum

from pydantic import BaseModel, Field, field_validator

from src.core.entities.common import Timestamp


class InventoryItem(BaseModel):
    """Stock level and catalogue data for a spare part or consumable."""

    id: str
    sku: str
    name: str
    category: str = "General"
    stock: float = 0.0
    min_stock: float = 0.0
    unit: str = "un"
    location: str = ""
    price: float = 0.0

    @field_validator("sku")
    @classmethod
    def normalize_sku(cls, v: str) -> str:
        return v.strip().upper()

    @field_validator("stock")
    @classmethod
    def non_negative_stock(cls, v: float) -> float:
        if v < 0:
            raise ValueError("stock cannot be negative")
        return v

    @property
    def is_critical(self) -> bool:
        """At or below the reorder threshold."""
        return self.stock <= self.min_stock

    @property
    def total_value(self) -> float:
        return self.stock * self.price


class InventoryItemUpdate(BaseModel):
    """Catalogue edit. Stock only moves through receipts and dispatches."""

    sku: str | None = None
    name: str | None = None
    category: str | None = None
    min_stock: float | None = None
    unit: str | None = None
    location: str | None = None
    price: float | None = None


class SupplyDocType(str, Enum):
    """Kind of inbound document."""

    INVOICE = "invoice"
    DISPATCH_GUIDE = "dispatch_guide"
    RECEIPT = "receipt"


class SupplyItem(BaseModel):
    """Line of a supply document."""

    item_id: str
    sku: str = ""  # snapshot
    name: str = ""  # snapshot
    quantity: float
    unit_price: float = 0.0

    @property
    def net(self) -> float:
        return self.quantity * self.unit_price


class SupplyDocument(BaseModel):
    """Inbound stock from a provider. Immutable once recorded."""

    id: str | None = None  # RCP-YYYY-NNNN, assigned on receipt when absent
    type: SupplyDocType = SupplyDocType.INVOICE
    provider: str
    external_reference: str = ""
    date: Timestamp
    items: list[SupplyItem] = Field(default_factory=list)
    net_amount: float = 0.0
    tax: float = 0.0
    total_amount: float = 0.0
    received_by: str = ""
    timestamp: Timestamp | None = None


class ConsumptionItem(BaseModel):
    """Line of a dispatch, priced at historical cost."""

    item_id: str
    sku: str = ""
    name: str = ""
    quantity: float
    unit_price: float | None = None  # item price at dispatch when omitted
    total: float = 0.0


class ConsumptionRecord(BaseModel):
    """Stock issued against a work order. Immutable once recorded."""

    id: str | None = None  # DSP-YYYY-NNNN, assigned on dispatch when absent
    work_order_id: str
    technician_id: str
    technician_name: str = ""  # snapshot
    date: Timestamp
    items: list[ConsumptionItem] = Field(default_factory=list)
    total_cost: float = 0.0
    dispatched_by: str = ""
    timestamp: Timestamp | None = None


class InventoryImportRow(BaseModel):
    """One parsed spreadsheet row. ``None`` means the column was absent."""

    row_number: int | None = None  # spreadsheet row, header is row 1
    sku: str | None = None
    name: str | None = None
    category: str | None = None
    stock: float | None = None
    min_stock: float | None = None
    unit: str | None = None
    location: str | None = None
    price: float | None = None


class BulkUpsertResult(BaseModel):
    """Outcome of a bulk import. Errors are per-row messages."""

    created: int = 0
    updated: int = 0
    errors: list[str] = Field(default_factory=list)
