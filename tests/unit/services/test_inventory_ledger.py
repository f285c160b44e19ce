"""Tests for stock receipts, dispatches and the bulk import."""

import pytest

from src.core.entities import (
    ActivityAction,
    ConsumptionItem,
    ConsumptionRecord,
    InventoryImportRow,
    InventoryItem,
    InventoryItemUpdate,
    SupplyDocument,
    SupplyItem,
)
from src.core.exceptions import (
    DuplicateEntityError,
    InventoryItemNotFoundError,
    TechnicianInactiveError,
    ValidationError,
    WorkOrderClosedError,
    WorkOrderNotFoundError,
)
from src.core.services import compute_tax


def supply(now, *lines, **overrides) -> SupplyDocument:
    data = {
        "provider": "AceroMundo S.A.",
        "date": now,
        "items": [SupplyItem(item_id=i, quantity=q, unit_price=p) for i, q, p in lines],
    }
    data.update(overrides)
    return SupplyDocument(**data)


def dispatch(now, order_id, *lines, **overrides) -> ConsumptionRecord:
    data = {
        "work_order_id": order_id,
        "technician_id": "U3",
        "date": now,
        "items": [ConsumptionItem(item_id=i, quantity=q, unit_price=p) for i, q, p in lines],
    }
    data.update(overrides)
    return ConsumptionRecord(**data)


class TestComputeTax:
    @pytest.mark.parametrize(
        "net, tax",
        [(1000, 190), (48000, 9120), (50, 10), (13, 2), (0, 0)],
    )
    def test_rounds_half_up(self, net, tax):
        assert compute_tax(net) == tax

    def test_custom_rate(self):
        assert compute_tax(1000, rate=0.21) == 210


class TestCatalogue:
    def test_critical_items(self, ledgers):
        assert [i.id for i in ledgers.inventory.critical_items()] == ["MAT-001"]

    def test_add_item(self, ledgers):
        item = ledgers.inventory.add_item(
            InventoryItem(id="MAT-010", sku="disc-115", name="Cutting disc", price=900), "U1"
        )
        assert item.sku == "DISC-115"
        assert ledgers.state.find_item("MAT-010") is not None
        assert ledgers.state.activity_log[0].details == "Added item DISC-115"

    def test_add_item_duplicate_sku(self, ledgers):
        with pytest.raises(DuplicateEntityError):
            ledgers.inventory.add_item(InventoryItem(id="MAT-010", sku="st-304", name="x"), "U1")

    def test_add_item_negative_price(self, ledgers):
        with pytest.raises(ValidationError):
            ledgers.inventory.add_item(
                InventoryItem(id="MAT-010", sku="X-1", name="x", price=-5), "U1"
            )

    def test_update_item(self, ledgers):
        item = ledgers.inventory.update_item(
            "MAT-002", InventoryItemUpdate(location="B3", min_stock=80), "U1"
        )
        assert item.location == "B3"
        assert item.min_stock == 80
        assert item.stock == 200

    def test_update_item_sku_taken(self, ledgers):
        with pytest.raises(DuplicateEntityError):
            ledgers.inventory.update_item("MAT-002", InventoryItemUpdate(sku="st-304"), "U1")

    def test_update_unknown_item(self, ledgers):
        with pytest.raises(InventoryItemNotFoundError):
            ledgers.inventory.update_item("MAT-404", InventoryItemUpdate(name="x"), "U1")


class TestReceive:
    def test_receive_adds_stock_and_freezes_totals(self, ledgers, now):
        doc = ledgers.inventory.receive(supply(now, ("MAT-002", 10, 100)), "U1")

        assert doc.id == "RCP-2024-1002"
        assert doc.net_amount == 1000
        assert doc.tax == 190
        assert doc.total_amount == 1190
        assert doc.received_by == "U1"
        assert doc.timestamp == now
        assert doc.items[0].sku == "BOLT-M10"
        assert ledgers.state.find_item("MAT-002").stock == 210
        assert ledgers.state.supply_documents[0] is doc

    def test_receive_logs_activity(self, ledgers, now):
        ledgers.inventory.receive(supply(now, ("MAT-002", 1, 1)), "U1")
        entry = ledgers.state.activity_log[0]
        assert entry.action == ActivityAction.RECEIVE_STOCK
        assert entry.details == "Receipt RCP-2024-1002 (invoice)"

    def test_receive_keeps_given_id(self, ledgers, now):
        doc = ledgers.inventory.receive(supply(now, ("MAT-003", 2, 3500), id="FAC-77"), "U1")
        assert doc.id == "FAC-77"

    def test_receive_has_no_work_order_effect(self, ledgers, now):
        before = [o.model_copy(deep=True) for o in ledgers.state.work_orders]
        ledgers.inventory.receive(supply(now, ("MAT-001", 10, 4800)), "U1")
        assert ledgers.state.work_orders == before

    def test_unknown_line_rejects_whole_document(self, ledgers, now):
        with pytest.raises(InventoryItemNotFoundError):
            ledgers.inventory.receive(supply(now, ("MAT-002", 5, 100), ("MAT-404", 1, 1)), "U1")
        assert ledgers.state.find_item("MAT-002").stock == 200
        assert len(ledgers.state.supply_documents) == 1

    def test_non_positive_quantity(self, ledgers, now):
        with pytest.raises(ValidationError):
            ledgers.inventory.receive(supply(now, ("MAT-002", 0, 100)), "U1")

    def test_empty_document(self, ledgers, now):
        with pytest.raises(ValidationError):
            ledgers.inventory.receive(supply(now), "U1")

    def test_duplicate_document_id(self, ledgers, now):
        with pytest.raises(DuplicateEntityError):
            ledgers.inventory.receive(supply(now, ("MAT-002", 1, 1), id="RCP-2024-001"), "U1")

    def test_generated_id_skips_caller_ids(self, ledgers, now):
        ledgers.inventory.receive(supply(now, ("MAT-002", 1, 1), id="RCP-2024-1003"), "U1")
        doc = ledgers.inventory.receive(supply(now, ("MAT-002", 1, 1)), "U1")

        assert doc.id == "RCP-2024-1004"
        assert [d.id for d in ledgers.state.supply_documents] == [
            "RCP-2024-1004",
            "RCP-2024-1003",
            "RCP-2024-001",
        ]


class TestConsume:
    def test_dispatch_moves_stock_and_charges_order(self, ledgers, now):
        record = ledgers.inventory.consume(dispatch(now, "OT.1001", ("MAT-002", 5, None)), "U1")

        assert record.id == "DSP-2024-1001"
        assert record.items[0].unit_price == 150
        assert record.total_cost == 750
        assert record.dispatched_by == "U1"
        assert ledgers.state.find_item("MAT-002").stock == 195

        order = ledgers.work_orders.get("OT.1001")
        usage = order.materials[-1]
        assert usage.item_id == "MAT-002"
        assert usage.name == "Hex bolt M10"
        assert usage.unit_price_at_usage == 150
        assert order.materials_cost == 10750

        entry = ledgers.state.activity_log[0]
        assert entry.action == ActivityAction.DISPATCH_STOCK
        assert entry.details == f"Dispatch {record.id} for OT OT.1001"

    def test_explicit_price_wins(self, ledgers, now):
        record = ledgers.inventory.consume(dispatch(now, "OT.1002", ("MAT-003", 2, 3000)), "U1")
        assert record.total_cost == 6000

    def test_over_consumption_floors_at_zero(self, ledgers, now):
        record = ledgers.inventory.consume(dispatch(now, "OT.1001", ("MAT-001", 8, None)), "U1")
        assert ledgers.state.find_item("MAT-001").stock == 0
        assert record.items[0].quantity == 8

    def test_closed_order_rejected(self, ledgers, now):
        with pytest.raises(WorkOrderClosedError):
            ledgers.inventory.consume(dispatch(now, "OT.1003", ("MAT-002", 1, None)), "U1")
        assert ledgers.state.find_item("MAT-002").stock == 200
        assert ledgers.state.consumption_records == []

    def test_unknown_order(self, ledgers, now):
        with pytest.raises(WorkOrderNotFoundError):
            ledgers.inventory.consume(dispatch(now, "OT.9999", ("MAT-002", 1, None)), "U1")

    def test_unknown_item_changes_nothing(self, ledgers, now):
        with pytest.raises(InventoryItemNotFoundError):
            ledgers.inventory.consume(
                dispatch(now, "OT.1001", ("MAT-002", 1, None), ("MAT-404", 1, None)), "U1"
            )
        assert ledgers.state.find_item("MAT-002").stock == 200
        assert len(ledgers.work_orders.get("OT.1001").materials) == 1

    def test_non_positive_quantity(self, ledgers, now):
        with pytest.raises(ValidationError):
            ledgers.inventory.consume(dispatch(now, "OT.1001", ("MAT-002", -1, None)), "U1")

    def test_technician_name_comes_from_roster(self, ledgers, now):
        record = ledgers.inventory.consume(
            dispatch(now, "OT.1001", ("MAT-002", 1, None), technician_name="Juan"), "U1"
        )
        assert record.technician_name == "Juan (technician)"

    def test_inactive_technician_changes_nothing(self, ledgers, now):
        ledgers.state.find_technician("U3").active = False
        with pytest.raises(TechnicianInactiveError):
            ledgers.inventory.consume(dispatch(now, "OT.1001", ("MAT-002", 1, None)), "U1")
        assert ledgers.state.find_item("MAT-002").stock == 200
        assert ledgers.state.consumption_records == []


class TestBulkUpsert:
    def test_existing_sku_is_updated(self, ledgers):
        result = ledgers.inventory.bulk_upsert([InventoryImportRow(sku="st-304", stock=12)], "U1")

        assert (result.created, result.updated, result.errors) == (0, 1, [])
        item = ledgers.state.find_item("MAT-001")
        assert item.stock == 12
        assert item.name == "Stainless steel 304"
        assert ledgers.state.activity_log[0].details == "Bulk import: 0 created, 1 updated."

    def test_new_sku_gets_defaults(self, ledgers):
        result = ledgers.inventory.bulk_upsert([InventoryImportRow(sku="grease-2")], "U1")

        assert result.created == 1
        item = ledgers.state.find_item_by_sku("GREASE-2")
        assert item.name == "Unnamed"
        assert item.location == "Warehouse"
        assert item.id.startswith("MAT-")

    def test_bad_rows_are_skipped(self, ledgers):
        result = ledgers.inventory.bulk_upsert(
            [
                InventoryImportRow(sku="  "),
                InventoryImportRow(sku="BOLT-M10", price=-3),
                InventoryImportRow(sku="BOLT-M10", price=160),
            ],
            "U1",
        )
        assert result.updated == 1
        assert result.errors == [
            "Row 2: empty SKU.",
            "Row 3: price cannot be negative.",
        ]
        assert ledgers.state.find_item("MAT-002").price == 160

    def test_row_number_from_sheet(self, ledgers):
        result = ledgers.inventory.bulk_upsert([InventoryImportRow(row_number=7, sku="")], "U1")
        assert result.errors == ["Row 7: empty SKU."]

    def test_nothing_applied_is_not_logged(self, ledgers):
        ledgers.inventory.bulk_upsert([InventoryImportRow(sku=None)], "U1")
        assert ledgers.state.activity_log == []
