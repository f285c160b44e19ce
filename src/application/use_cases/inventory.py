"""Inventory use cases: catalogue, receipts, dispatches and bulk import."""

from dataclasses import dataclass

from src.application.dto.requests import (
    CreateInventoryItemRequest,
    DispatchConsumptionRequest,
    ImportInventoryRequest,
    ReceiveSupplyRequest,
)
from src.application.dto.responses import (
    BulkImportResponse,
    ConsumptionListResponse,
    DispatchResponse,
    InventoryItemResponse,
    InventoryListResponse,
    ReceiptResponse,
    SupplyDocumentListResponse,
    WorkOrderResponse,
)
from src.application.import_rows import parse_import_rows
from src.application.use_cases.base import LedgerUseCase
from src.config import get_logger
from src.core.entities import (
    BulkUpsertResult,
    ConsumptionItem,
    ConsumptionRecord,
    InventoryItem,
    InventoryItemUpdate,
    SupplyDocument,
    SupplyItem,
    WorkOrder,
)
from src.core.entities.common import new_id
from src.core.entities.ledger_state import CollectionKey

logger = get_logger(__name__)


class AddInventoryItemUseCase(LedgerUseCase):
    """Register a catalogue item."""

    async def execute(self, request: CreateInventoryItemRequest, actor: str) -> InventoryItem:
        item = InventoryItem(
            **request.model_dump(exclude={"id"}),
            id=request.id or f"MAT-{new_id()}",
        )
        ledgers = await self._load()
        created = ledgers.inventory.add_item(item, actor)
        await self._commit(ledgers, CollectionKey.INVENTORY)
        return created

    def to_response(self, item: InventoryItem) -> InventoryItemResponse:
        return InventoryItemResponse.from_entity(item)


class UpdateInventoryItemUseCase(LedgerUseCase):
    """Edit catalogue data. Stock is not editable here."""

    async def execute(self, item_id: str, changes: InventoryItemUpdate, actor: str) -> InventoryItem:
        ledgers = await self._load()
        item = ledgers.inventory.update_item(item_id, changes, actor)
        await self._commit(ledgers, CollectionKey.INVENTORY)
        return item

    def to_response(self, item: InventoryItem) -> InventoryItemResponse:
        return InventoryItemResponse.from_entity(item)


@dataclass
class ReceiptResult:
    document: SupplyDocument
    items: list[InventoryItem]


class ReceiveSupplyUseCase(LedgerUseCase):
    """Record an inbound invoice, dispatch guide or receipt."""

    async def execute(self, request: ReceiveSupplyRequest, actor: str) -> ReceiptResult:
        document = SupplyDocument(
            id=request.id,
            type=request.type,
            provider=request.provider,
            external_reference=request.external_reference,
            date=request.date or self._clock(),
            items=[SupplyItem(**line.model_dump()) for line in request.items],
            received_by=request.received_by,
        )

        ledgers = await self._load()
        recorded = ledgers.inventory.receive(document, actor)
        await self._commit(ledgers, CollectionKey.INVENTORY, CollectionKey.SUPPLY_DOCUMENTS)

        items = _distinct_items(ledgers.inventory.get_item, [i.item_id for i in recorded.items])
        return ReceiptResult(document=recorded, items=items)

    def to_response(self, result: ReceiptResult) -> ReceiptResponse:
        return ReceiptResponse(
            document=result.document,
            items=[InventoryItemResponse.from_entity(i) for i in result.items],
        )


@dataclass
class DispatchResult:
    record: ConsumptionRecord
    items: list[InventoryItem]
    order: WorkOrder


class DispatchConsumptionUseCase(LedgerUseCase):
    """Issue stock to a work order and charge it with the materials."""

    async def execute(self, request: DispatchConsumptionRequest, actor: str) -> DispatchResult:
        record = ConsumptionRecord(
            id=request.id,
            work_order_id=request.work_order_id,
            technician_id=request.technician_id,
            technician_name=request.technician_name,
            date=request.date or self._clock(),
            items=[ConsumptionItem(**line.model_dump()) for line in request.items],
            dispatched_by=request.dispatched_by,
        )

        ledgers = await self._load()
        recorded = ledgers.inventory.consume(record, actor)
        await self._commit(
            ledgers,
            CollectionKey.INVENTORY,
            CollectionKey.CONSUMPTION_RECORDS,
            CollectionKey.WORK_ORDERS,
        )

        return DispatchResult(
            record=recorded,
            items=_distinct_items(ledgers.inventory.get_item, [i.item_id for i in recorded.items]),
            order=ledgers.work_orders.get(recorded.work_order_id),
        )

    def to_response(self, result: DispatchResult) -> DispatchResponse:
        return DispatchResponse(
            record=result.record,
            items=[InventoryItemResponse.from_entity(i) for i in result.items],
            work_order=WorkOrderResponse.from_entity(result.order, self._clock()),
        )


class ImportInventoryUseCase(LedgerUseCase):
    """
    Bulk create or update items from spreadsheet rows.

    Unreadable cells and ledger rejections are both reported per row; the
    remaining rows still apply.
    """

    async def execute(self, request: ImportInventoryRequest, actor: str) -> BulkUpsertResult:
        rows, parse_errors = parse_import_rows(request.rows)

        ledgers = await self._load()
        result = ledgers.inventory.bulk_upsert(rows, actor)
        if result.created or result.updated:
            await self._commit(ledgers, CollectionKey.INVENTORY)

        result.errors = parse_errors + result.errors
        if result.errors:
            logger.warning(
                "inventory_import_rows_rejected",
                rejected=len(result.errors),
                total=len(request.rows),
            )
        return result

    def to_response(self, result: BulkUpsertResult) -> BulkImportResponse:
        return BulkImportResponse(
            created=result.created,
            updated=result.updated,
            errors=result.errors,
        )


class ListInventoryUseCase(LedgerUseCase):
    async def execute(self, critical_only: bool = False) -> list[InventoryItem]:
        ledgers = await self._load()
        if critical_only:
            return ledgers.inventory.critical_items()
        return list(ledgers.state.inventory)

    def to_response(self, items: list[InventoryItem]) -> InventoryListResponse:
        return InventoryListResponse(
            items=[InventoryItemResponse.from_entity(i) for i in items],
            total=len(items),
            critical_count=sum(1 for i in items if i.is_critical),
            total_value=sum(i.total_value for i in items),
        )


class ListSupplyDocumentsUseCase(LedgerUseCase):
    async def execute(self, limit: int | None = None) -> list[SupplyDocument]:
        ledgers = await self._load([CollectionKey.SUPPLY_DOCUMENTS])
        documents = ledgers.state.supply_documents
        return documents[:limit] if limit else list(documents)

    def to_response(self, documents: list[SupplyDocument]) -> SupplyDocumentListResponse:
        return SupplyDocumentListResponse(items=documents, total=len(documents))


class ListConsumptionRecordsUseCase(LedgerUseCase):
    async def execute(
        self,
        work_order_id: str | None = None,
        limit: int | None = None,
    ) -> list[ConsumptionRecord]:
        ledgers = await self._load([CollectionKey.CONSUMPTION_RECORDS])
        records = [
            r
            for r in ledgers.state.consumption_records
            if work_order_id is None or r.work_order_id == work_order_id
        ]
        return records[:limit] if limit else records

    def to_response(self, records: list[ConsumptionRecord]) -> ConsumptionListResponse:
        return ConsumptionListResponse(items=records, total=len(records))


def _distinct_items(lookup, item_ids: list[str]) -> list[InventoryItem]:
    return [lookup(item_id) for item_id in dict.fromkeys(item_ids)]
