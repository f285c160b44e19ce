"""
Inventory stock bookkeeping.

Stock moves only through receipts (supply documents) and dispatches
(consumption records). Dispatches are mirrored into the target work
order's materials so job costing stays in step with the warehouse.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

from src.config import get_logger
from src.core.entities.activity import ActivityAction, ActivityEntity
from src.core.entities.common import Clock, new_id, sequence_id, utc_now
from src.core.entities.inventory import (
    BulkUpsertResult,
    ConsumptionItem,
    ConsumptionRecord,
    InventoryImportRow,
    InventoryItem,
    InventoryItemUpdate,
    SupplyDocument,
    SupplyItem,
)
from src.core.entities.ledger_state import LedgerState
from src.core.entities.work_order import MaterialUsage
from src.core.exceptions import (
    DuplicateEntityError,
    InventoryItemNotFoundError,
    ValidationError,
    WorkOrderClosedError,
)
from src.core.services.activity_log import ActivityLog
from src.core.services.shop_roster import ShopRoster
from src.core.services.work_order_ledger import WorkOrderLedger

logger = get_logger(__name__)

DEFAULT_TAX_RATE = 0.19

# Defaults for items created by a bulk import
IMPORT_DEFAULTS = {
    "name": "Unnamed",
    "category": "General",
    "unit": "un",
    "location": "Warehouse",
}


def _decimal(value: float) -> Decimal:
    return Decimal(str(value))


def compute_tax(net: float, rate: float = DEFAULT_TAX_RATE) -> float:
    """Tax on a net amount, rounded half-up to whole currency units."""
    tax = (_decimal(net) * _decimal(rate)).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    return float(tax)


class InventoryLedger:
    """Mutation surface for inventory, supply documents and consumption."""

    def __init__(
        self,
        state: LedgerState,
        activity: ActivityLog,
        work_orders: WorkOrderLedger,
        tax_rate: float = DEFAULT_TAX_RATE,
        clock: Clock = utc_now,
        roster: ShopRoster | None = None,
    ) -> None:
        self._state = state
        self._activity = activity
        self._work_orders = work_orders
        self._tax_rate = tax_rate
        self._clock = clock
        self._roster = roster or ShopRoster(state, activity)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_item(self, item_id: str) -> InventoryItem:
        item = self._state.find_item(item_id)
        if item is None:
            raise InventoryItemNotFoundError(item_id)
        return item

    def critical_items(self) -> list[InventoryItem]:
        """Items at or below their reorder threshold."""
        return [i for i in self._state.inventory if i.is_critical]

    # ------------------------------------------------------------------
    # Catalogue
    # ------------------------------------------------------------------

    def add_item(self, item: InventoryItem, actor: str) -> InventoryItem:
        if not item.id.strip():
            raise ValidationError("id", "item id is required")
        if self._state.find_item(item.id) is not None:
            raise DuplicateEntityError("Inventory item", "id", item.id)
        if not item.sku:
            raise ValidationError("sku", "SKU is required")
        if self._state.find_item_by_sku(item.sku) is not None:
            raise DuplicateEntityError("Inventory item", "sku", item.sku)
        if not item.name.strip():
            raise ValidationError("name", "name is required")
        self._check_non_negative(min_stock=item.min_stock, price=item.price)

        created = item.model_copy()
        self._state.inventory.append(created)
        self._activity.append(
            ActivityAction.CREATE,
            ActivityEntity.INVENTORY,
            f"Added item {created.sku}",
            actor,
        )
        logger.info("inventory_item_created", item_id=created.id, sku=created.sku)
        return created

    def update_item(self, item_id: str, changes: InventoryItemUpdate, actor: str) -> InventoryItem:
        item = self.get_item(item_id)
        fields = {k: v for k, v in changes.model_dump(exclude_unset=True).items() if v is not None}

        if "sku" in fields:
            fields["sku"] = fields["sku"].strip().upper()
            if not fields["sku"]:
                raise ValidationError("sku", "SKU cannot be empty")
            other = self._state.find_item_by_sku(fields["sku"])
            if other is not None and other.id != item.id:
                raise DuplicateEntityError("Inventory item", "sku", fields["sku"])
        if "name" in fields and not fields["name"].strip():
            raise ValidationError("name", "name cannot be empty")
        self._check_non_negative(min_stock=fields.get("min_stock"), price=fields.get("price"))

        if not fields:
            return item
        for name, value in fields.items():
            setattr(item, name, value)
        self._activity.append(
            ActivityAction.UPDATE,
            ActivityEntity.INVENTORY,
            f"Updated item {item.id}",
            actor,
        )
        logger.info("inventory_item_updated", item_id=item.id, fields=sorted(fields))
        return item

    # ------------------------------------------------------------------
    # Stock movements
    # ------------------------------------------------------------------

    def receive(self, document: SupplyDocument, actor: str) -> SupplyDocument:
        """
        Record inbound stock.

        Adds every line quantity to its item and freezes the document with
        net, tax and total computed from the lines. Has no work order side
        effect.
        """
        if not document.provider.strip():
            raise ValidationError("provider", "provider is required")
        if not document.items:
            raise ValidationError("items", "document has no lines")
        if document.id and any(d.id == document.id for d in self._state.supply_documents):
            raise DuplicateEntityError("Supply document", "id", document.id)

        lines: list[tuple[InventoryItem, SupplyItem]] = []
        for line in document.items:
            if line.quantity <= 0:
                raise ValidationError("quantity", "received quantity must be positive", line.quantity)
            if line.unit_price < 0:
                raise ValidationError("unit_price", "unit price cannot be negative", line.unit_price)
            item = self.get_item(line.item_id)
            lines.append((item, line))

        now = self._clock()
        net = sum((_decimal(line.quantity) * _decimal(line.unit_price) for _, line in lines), Decimal("0"))
        tax = compute_tax(float(net), self._tax_rate)

        frozen_items = [
            line.model_copy(update={"sku": line.sku or item.sku, "name": line.name or item.name})
            for item, line in lines
        ]
        recorded = document.model_copy(
            update={
                "id": document.id
                or sequence_id(
                    "RCP",
                    now.year,
                    len(self._state.supply_documents),
                    {d.id for d in self._state.supply_documents},
                ),
                "items": frozen_items,
                "net_amount": float(net),
                "tax": tax,
                "total_amount": float(net) + tax,
                "received_by": document.received_by or actor,
                "timestamp": now,
            }
        )

        for item, line in lines:
            item.stock += line.quantity
        self._state.supply_documents.insert(0, recorded)

        self._activity.append(
            ActivityAction.RECEIVE_STOCK,
            ActivityEntity.DOCUMENT,
            f"Receipt {recorded.id} ({recorded.type.value})",
            actor,
        )
        logger.info(
            "stock_received",
            document_id=recorded.id,
            provider=recorded.provider,
            lines=len(recorded.items),
            total=recorded.total_amount,
        )
        return recorded

    def consume(self, record: ConsumptionRecord, actor: str) -> ConsumptionRecord:
        """
        Dispatch stock to a work order.

        Stock is floored at zero: dispatching more than is on hand empties
        the item instead of failing. Each line is mirrored into the work
        order's materials at its dispatch price.
        """
        order = self._work_orders.get(record.work_order_id)
        if order.status.is_terminal:
            raise WorkOrderClosedError(order.id, order.status.value)
        if not record.items:
            raise ValidationError("items", "dispatch has no lines")
        if record.id and any(c.id == record.id for c in self._state.consumption_records):
            raise DuplicateEntityError("Consumption record", "id", record.id)
        technician_name = self._roster.assign(record.technician_id, record.technician_name)

        lines: list[tuple[InventoryItem, ConsumptionItem]] = []
        for line in record.items:
            if line.quantity <= 0:
                raise ValidationError("quantity", "dispatched quantity must be positive", line.quantity)
            item = self.get_item(line.item_id)
            unit_price = item.price if line.unit_price is None else line.unit_price
            if unit_price < 0:
                raise ValidationError("unit_price", "unit price cannot be negative", unit_price)
            priced = line.model_copy(
                update={
                    "sku": line.sku or item.sku,
                    "name": line.name or item.name,
                    "unit_price": unit_price,
                    "total": line.quantity * unit_price,
                }
            )
            lines.append((item, priced))

        now = self._clock()
        recorded = record.model_copy(
            update={
                "id": record.id
                or sequence_id(
                    "DSP",
                    now.year,
                    len(self._state.consumption_records),
                    {r.id for r in self._state.consumption_records},
                ),
                "items": [line for _, line in lines],
                "total_cost": sum(line.total for _, line in lines),
                "technician_name": technician_name,
                "dispatched_by": record.dispatched_by or actor,
                "timestamp": now,
            }
        )

        for item, line in lines:
            if line.quantity > item.stock:
                logger.warning(
                    "stock_over_consumed",
                    item_id=item.id,
                    sku=item.sku,
                    stock=item.stock,
                    requested=line.quantity,
                )
            item.stock = max(0.0, item.stock - line.quantity)

        self._work_orders.attach_materials(
            order.id,
            [
                MaterialUsage(
                    item_id=line.item_id,
                    name=line.name,
                    quantity=line.quantity,
                    unit_price_at_usage=line.unit_price or 0.0,
                    total_cost=line.total,
                    date_added=recorded.date,
                )
                for _, line in lines
            ],
        )
        self._state.consumption_records.insert(0, recorded)

        self._activity.append(
            ActivityAction.DISPATCH_STOCK,
            ActivityEntity.CONSUMPTION,
            f"Dispatch {recorded.id} for OT {order.id}",
            actor,
        )
        logger.info(
            "stock_dispatched",
            record_id=recorded.id,
            work_order_id=order.id,
            lines=len(recorded.items),
            total_cost=recorded.total_cost,
        )
        return recorded

    # ------------------------------------------------------------------
    # Bulk import
    # ------------------------------------------------------------------

    def bulk_upsert(self, rows: list[InventoryImportRow], actor: str) -> BulkUpsertResult:
        """
        Create or update items from spreadsheet rows, matched by SKU.

        Rows are independent: a bad row is reported and skipped, the rest
        still apply. Matched items only take the columns present in the row.
        """
        result = BulkUpsertResult()

        for index, row in enumerate(rows):
            row_number = row.row_number or index + 2
            sku = (row.sku or "").strip().upper()
            if not sku:
                result.errors.append(f"Row {row_number}: empty SKU.")
                continue
            negative = next(
                (
                    name
                    for name in ("stock", "min_stock", "price")
                    if (getattr(row, name) or 0) < 0
                ),
                None,
            )
            if negative:
                result.errors.append(f"Row {row_number}: {negative} cannot be negative.")
                continue

            existing = self._state.find_item_by_sku(sku)
            if existing is not None:
                self._merge_row(existing, row)
                result.updated += 1
            else:
                self._state.inventory.append(self._item_from_row(sku, row))
                result.created += 1

        if result.created or result.updated:
            self._activity.append(
                ActivityAction.UPDATE,
                ActivityEntity.INVENTORY,
                f"Bulk import: {result.created} created, {result.updated} updated.",
                actor,
            )
        logger.info(
            "inventory_bulk_upserted",
            created=result.created,
            updated=result.updated,
            errors=len(result.errors),
        )
        return result

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    @staticmethod
    def _merge_row(item: InventoryItem, row: InventoryImportRow) -> None:
        for name in ("name", "category", "unit", "location"):
            value = getattr(row, name)
            if value:
                setattr(item, name, value)
        for name in ("stock", "min_stock", "price"):
            value = getattr(row, name)
            if value is not None:
                setattr(item, name, value)

    @staticmethod
    def _item_from_row(sku: str, row: InventoryImportRow) -> InventoryItem:
        return InventoryItem(
            id=f"MAT-{new_id()}",
            sku=sku,
            name=row.name or IMPORT_DEFAULTS["name"],
            category=row.category or IMPORT_DEFAULTS["category"],
            unit=row.unit or IMPORT_DEFAULTS["unit"],
            location=row.location or IMPORT_DEFAULTS["location"],
            stock=row.stock or 0.0,
            min_stock=row.min_stock or 0.0,
            price=row.price or 0.0,
        )

    @staticmethod
    def _check_non_negative(**values: float | None) -> None:
        for name, value in values.items():
            if value is not None and value < 0:
                raise ValidationError(name, "cannot be negative", value)
