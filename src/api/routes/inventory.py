"""Inventory management endpoints."""

from fastapi import APIRouter, Depends, status

from src.api.dependencies import (
    get_actor,
    get_add_item_use_case,
    get_dispatch_use_case,
    get_import_inventory_use_case,
    get_list_consumption_use_case,
    get_list_inventory_use_case,
    get_list_supply_documents_use_case,
    get_receive_supply_use_case,
    get_update_item_use_case,
)
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
    ErrorResponse,
    InventoryItemResponse,
    InventoryListResponse,
    ReceiptResponse,
    SupplyDocumentListResponse,
)
from src.application.use_cases import (
    AddInventoryItemUseCase,
    DispatchConsumptionUseCase,
    ImportInventoryUseCase,
    ListConsumptionRecordsUseCase,
    ListInventoryUseCase,
    ListSupplyDocumentsUseCase,
    ReceiveSupplyUseCase,
    UpdateInventoryItemUseCase,
)
from src.core.entities import InventoryItemUpdate

router = APIRouter(prefix="/api/inventory", tags=["inventory"])


@router.get("", response_model=InventoryListResponse)
async def list_inventory(
    critical: bool = False,
    use_case: ListInventoryUseCase = Depends(get_list_inventory_use_case),
) -> InventoryListResponse:
    """Current stock, or only the items at or below their minimum."""
    items = await use_case.execute(critical_only=critical)
    return use_case.to_response(items)


@router.post(
    "",
    response_model=InventoryItemResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}},
)
async def add_item(
    request: CreateInventoryItemRequest,
    actor: str = Depends(get_actor),
    use_case: AddInventoryItemUseCase = Depends(get_add_item_use_case),
) -> InventoryItemResponse:
    item = await use_case.execute(request, actor)
    return use_case.to_response(item)


@router.patch(
    "/{item_id}",
    response_model=InventoryItemResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def update_item(
    item_id: str,
    changes: InventoryItemUpdate,
    actor: str = Depends(get_actor),
    use_case: UpdateInventoryItemUseCase = Depends(get_update_item_use_case),
) -> InventoryItemResponse:
    """Edit catalogue data. Stock moves only through receipts and dispatches."""
    item = await use_case.execute(item_id, changes, actor)
    return use_case.to_response(item)


@router.post(
    "/receive",
    response_model=ReceiptResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def receive_supply(
    request: ReceiveSupplyRequest,
    actor: str = Depends(get_actor),
    use_case: ReceiveSupplyUseCase = Depends(get_receive_supply_use_case),
) -> ReceiptResponse:
    """Record an inbound document and add its quantities to stock."""
    result = await use_case.execute(request, actor)
    return use_case.to_response(result)


@router.post(
    "/dispatch",
    response_model=DispatchResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
    },
)
async def dispatch_consumption(
    request: DispatchConsumptionRequest,
    actor: str = Depends(get_actor),
    use_case: DispatchConsumptionUseCase = Depends(get_dispatch_use_case),
) -> DispatchResponse:
    """Issue stock to an open work order."""
    result = await use_case.execute(request, actor)
    return use_case.to_response(result)


@router.post("/import", response_model=BulkImportResponse)
async def import_inventory(
    request: ImportInventoryRequest,
    actor: str = Depends(get_actor),
    use_case: ImportInventoryUseCase = Depends(get_import_inventory_use_case),
) -> BulkImportResponse:
    """Upsert items from spreadsheet rows matched by SKU."""
    result = await use_case.execute(request, actor)
    return use_case.to_response(result)


@router.get("/documents", response_model=SupplyDocumentListResponse)
async def list_supply_documents(
    limit: int | None = None,
    use_case: ListSupplyDocumentsUseCase = Depends(get_list_supply_documents_use_case),
) -> SupplyDocumentListResponse:
    documents = await use_case.execute(limit=limit)
    return use_case.to_response(documents)


@router.get("/consumptions", response_model=ConsumptionListResponse)
async def list_consumptions(
    work_order_id: str | None = None,
    limit: int | None = None,
    use_case: ListConsumptionRecordsUseCase = Depends(get_list_consumption_use_case),
) -> ConsumptionListResponse:
    records = await use_case.execute(work_order_id=work_order_id, limit=limit)
    return use_case.to_response(records)
