"""Tests for inventory use cases."""

import pytest

from src.application.dto.requests import (
    ConsumptionLineRequest,
    CreateInventoryItemRequest,
    DispatchConsumptionRequest,
    ImportInventoryRequest,
    ReceiveSupplyRequest,
    SupplyLineRequest,
)
from src.application.use_cases import (
    AddInventoryItemUseCase,
    DispatchConsumptionUseCase,
    GetWorkOrderUseCase,
    ImportInventoryUseCase,
    ListConsumptionRecordsUseCase,
    ListInventoryUseCase,
    ListSupplyDocumentsUseCase,
    ReceiveSupplyUseCase,
    UpdateInventoryItemUseCase,
)
from src.core.entities import InventoryItemUpdate
from src.core.exceptions import DuplicateEntityError, WorkOrderClosedError


def dispatch_request(order_id: str, item_id: str, quantity: float) -> DispatchConsumptionRequest:
    return DispatchConsumptionRequest(
        work_order_id=order_id,
        technician_id="U3",
        items=[ConsumptionLineRequest(item_id=item_id, quantity=quantity)],
    )


class TestCatalogueUseCases:
    async def test_add_item_generates_id(self, make):
        item = await make(AddInventoryItemUseCase).execute(
            CreateInventoryItemRequest(sku="disc-115", name="Cutting disc", stock=30), "U1"
        )
        assert item.id.startswith("MAT-")
        stored = await make(ListInventoryUseCase).execute()
        assert stored[-1].sku == "DISC-115"

    async def test_add_duplicate_sku(self, make):
        with pytest.raises(DuplicateEntityError):
            await make(AddInventoryItemUseCase).execute(
                CreateInventoryItemRequest(sku="BOLT-M10", name="Bolt"), "U1"
            )

    async def test_update_item(self, make):
        use_case = make(UpdateInventoryItemUseCase)
        item = await use_case.execute("MAT-001", InventoryItemUpdate(min_stock=2), "U1")
        response = use_case.to_response(item)
        assert response.critical is False
        assert response.stock_value == 25000

    async def test_list_critical(self, make):
        use_case = make(ListInventoryUseCase)
        response = use_case.to_response(await use_case.execute(critical_only=True))
        assert [i.id for i in response.items] == ["MAT-001"]
        assert response.critical_count == 1


class TestReceiveSupplyUseCase:
    async def test_receipt_updates_stock_and_documents(self, make, now):
        use_case = make(ReceiveSupplyUseCase)
        result = await use_case.execute(
            ReceiveSupplyRequest(
                provider="AceroMundo S.A.",
                items=[
                    SupplyLineRequest(item_id="MAT-002", quantity=10, unit_price=100),
                    SupplyLineRequest(item_id="MAT-002", quantity=5, unit_price=100),
                ],
            ),
            "U1",
        )

        assert result.document.date == now
        assert result.document.total_amount == 1785
        assert [i.id for i in result.items] == ["MAT-002"]
        assert result.items[0].stock == 215

        documents = await make(ListSupplyDocumentsUseCase).execute(limit=1)
        assert documents[0].id == result.document.id

    async def test_response_shape(self, make):
        use_case = make(ReceiveSupplyUseCase)
        result = await use_case.execute(
            ReceiveSupplyRequest(
                provider="AceroMundo S.A.",
                items=[SupplyLineRequest(item_id="MAT-001", quantity=10, unit_price=100)],
            ),
            "U1",
        )
        response = use_case.to_response(result)
        assert response.document.net_amount == 1000
        assert response.document.tax == 190
        assert response.items[0].critical is False


class TestDispatchConsumptionUseCase:
    async def test_dispatch_charges_work_order(self, make):
        result = await make(DispatchConsumptionUseCase).execute(
            dispatch_request("OT.1001", "MAT-003", 2), "U1"
        )

        assert result.record.total_cost == 7000
        assert result.items[0].stock == 18
        assert result.order.materials_cost == 17000

        stored = await make(GetWorkOrderUseCase).execute("OT.1001")
        assert stored.materials_cost == 17000
        records = await make(ListConsumptionRecordsUseCase).execute(work_order_id="OT.1001")
        assert len(records) == 1

    async def test_closed_order_persists_nothing(self, make, memory_store):
        with pytest.raises(WorkOrderClosedError):
            await make(DispatchConsumptionUseCase).execute(
                dispatch_request("OT.1003", "MAT-003", 2), "U1"
            )
        assert await memory_store.keys() == []

    async def test_over_consumption(self, make):
        result = await make(DispatchConsumptionUseCase).execute(
            dispatch_request("OT.1001", "MAT-001", 50), "U1"
        )
        assert result.items[0].stock == 0


class TestImportInventoryUseCase:
    async def test_import_merges_by_sku(self, make):
        use_case = make(ImportInventoryUseCase)
        result = await use_case.execute(
            ImportInventoryRequest(
                rows=[
                    {"SKU": "st-304", "Stock": 12},
                    {"SKU": "grease-2", "Nombre": "Grasa EP2", "Precio": "3,5"},
                    {"SKU": "", "Stock": 1},
                    {"SKU": "X-9", "Stock": "many"},
                ]
            ),
            "U1",
        )

        response = use_case.to_response(result)
        assert response.created == 1
        assert response.updated == 1
        assert response.errors == [
            "Row 5: invalid number in 'stock': 'many'.",
            "Row 4: empty SKU.",
        ]

        items = {i.sku: i for i in await make(ListInventoryUseCase).execute()}
        assert items["ST-304"].stock == 12
        assert items["GREASE-2"].price == 3.5

    async def test_single_existing_sku_updates(self, make):
        result = await make(ImportInventoryUseCase).execute(
            ImportInventoryRequest(rows=[{"SKU": "ST-304", "Nombre": "Acero inoxidable 304"}]),
            "U1",
        )
        assert (result.created, result.updated) == (0, 1)

    async def test_nothing_applied_writes_nothing(self, make, memory_store):
        result = await make(ImportInventoryUseCase).execute(
            ImportInventoryRequest(rows=[{"Nombre": "No code"}]), "U1"
        )
        assert result.errors == ["Row 2: empty SKU."]
        assert await memory_store.keys() == []
