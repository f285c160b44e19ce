"""
Demo data used when a collection has never been persisted.

Dates are relative to ``now`` so the sample shop always looks current.
The seed respects the custody rule: the tool seeded as ``in_use`` has
its matching active loan.
"""

from datetime import date, datetime, timedelta

from src.core.entities.activity import AppSettings
from src.core.entities.common import utc_now
from src.core.entities.inventory import InventoryItem, SupplyDocType, SupplyDocument, SupplyItem
from src.core.entities.ledger_state import CollectionKey, LedgerState
from src.core.entities.roster import Component, SparePart, Technician
from src.core.entities.tool import (
    LoanStatus,
    MaintenanceDispatch,
    Tool,
    ToolCategory,
    ToolLoan,
    ToolStatus,
    Urgency,
)
from src.core.entities.work_order import (
    Area,
    LaborEntry,
    MaterialUsage,
    Priority,
    WorkOrder,
    WorkOrderStatus,
    WorkOrderTask,
)

DAY = timedelta(days=1)


def _work_orders(now: datetime) -> list[WorkOrder]:
    return [
        WorkOrder(
            id="OT.1001",
            title="Main shaft repair",
            client_id="Mining Corp",
            status=WorkOrderStatus.IN_PROCESS,
            area=Area.CNC,
            priority=Priority.HIGH,
            creation_date=now - 2 * DAY,
            start_date=now - DAY,
            estimated_completion_date=now + DAY,
            description="Regrind main shaft per drawing 404.",
            assigned_operators=["Pedro", "Luis"],
            technician_id="U3",
            materials=[
                MaterialUsage(
                    item_id="MAT-001",
                    name="Stainless steel 304",
                    quantity=2,
                    unit_price_at_usage=5000,
                    total_cost=10000,
                    date_added=now,
                )
            ],
            labor=[
                LaborEntry(
                    id="L1",
                    technician_id="U3",
                    technician_name="Juan (technician)",
                    hours=4,
                    date=now - DAY,
                    description="Disassembly and cleaning",
                )
            ],
            tasks=[
                WorkOrderTask(
                    id="tk1",
                    description="Initial disassembly and cleaning",
                    is_completed=True,
                    completed_by="U3",
                    completed_at=now,
                ),
                WorkOrderTask(id="tk2", description="First grinding pass"),
                WorkOrderTask(id="tk3", description="Final dimensional check"),
            ],
        ),
        WorkOrder(
            id="OT.1002",
            title="Base frame welding",
            client_id="Constructora X",
            area=Area.WELDING,
            priority=Priority.MEDIUM,
            creation_date=now - DAY,
            estimated_completion_date=now - DAY,
            description="MIG welding on support base. Certification required.",
        ),
        WorkOrder(
            id="OT.1003",
            title="Hydraulic sleeve machining",
            client_id="HydraSystems",
            status=WorkOrderStatus.FINISHED,
            area=Area.MECHANICS,
            priority=Priority.LOW,
            creation_date=now - 7 * DAY,
            start_date=now - 6 * DAY,
            finished_date=now - 2 * DAY,
            estimated_completion_date=now - 3 * DAY,
            description="Sleeve built from sample.",
            final_notes="Delivered painted and packed. Client satisfied.",
        ),
    ]


def _inventory() -> list[InventoryItem]:
    return [
        InventoryItem(
            id="MAT-001", sku="ST-304", name="Stainless steel 304", category="Metal",
            stock=5, min_stock=10, unit="kg", location="A1", price=5000,
        ),
        InventoryItem(
            id="MAT-002", sku="BOLT-M10", name="Hex bolt M10", category="Supplies",
            stock=200, min_stock=50, unit="un", location="B2", price=150,
        ),
        InventoryItem(
            id="MAT-003", sku="WELD-7018", name='Electrode 7018 1/8"', category="Welding",
            stock=20, min_stock=5, unit="kg", location="C5", price=3500,
        ),
        InventoryItem(
            id="MAT-004", sku="OIL-ISO68", name="Hydraulic oil ISO 68", category="Lubricants",
            stock=200, min_stock=20, unit="L", location="D1", price=4200,
        ),
    ]


def _supply_documents(now: datetime) -> list[SupplyDocument]:
    return [
        SupplyDocument(
            id="RCP-2024-001",
            type=SupplyDocType.INVOICE,
            provider="AceroMundo S.A.",
            external_reference="FAC-9921",
            date=now - 5 * DAY,
            items=[
                SupplyItem(
                    item_id="MAT-001",
                    sku="ST-304",
                    name="Stainless steel 304",
                    quantity=10,
                    unit_price=4800,
                )
            ],
            net_amount=48000,
            tax=9120,
            total_amount=57120,
            received_by="Administrator",
            timestamp=now - 5 * DAY,
        )
    ]


def _tools(now: datetime) -> list[Tool]:
    return [
        Tool(
            id="T-001", code="TAL-01", name="Hammer drill 18V", brand="Makita", model="DHP482",
            category=ToolCategory.POWER_TOOLS, purchase_date=date(2023, 1, 15),
            status=ToolStatus.AVAILABLE, location="P-1",
        ),
        Tool(
            id="T-002", code="ESM-01", name='Angle grinder 4.5"', brand="Bosch", model="GWS 700",
            category=ToolCategory.POWER_TOOLS, purchase_date=date(2023, 2, 20),
            status=ToolStatus.IN_USE, location="P-2",
        ),
        Tool(
            id="T-003", code="CAL-01", name="Digital caliper", brand="Mitutoyo", model="500-196",
            category=ToolCategory.MEASURING, purchase_date=date(2023, 6, 1),
            status=ToolStatus.AVAILABLE, location="M-1",
        ),
        Tool(
            id="T-004", code="MIC-01", name="Outside micrometer 0-25mm", brand="Mitutoyo",
            model="103-137", category=ToolCategory.MEASURING, purchase_date=date(2022, 11, 10),
            status=ToolStatus.MAINTENANCE, location="M-2",
            active_maintenance=MaintenanceDispatch(
                date=now - 3 * DAY,
                urgency=Urgency.MEDIUM,
                reason="Annual calibration",
                provider="Metrology Lab",
            ),
        ),
    ]


def _tool_loans(now: datetime) -> list[ToolLoan]:
    return [
        ToolLoan(
            id="PRS-2024-001",
            tool_id="T-002",
            tool_name='Angle grinder 4.5"',
            technician_id="U3",
            technician_name="Juan (technician)",
            work_order_id="OT.1001",
            loan_date=now - DAY,
            status=LoanStatus.ACTIVE,
        )
    ]


def _technicians() -> list[Technician]:
    return [
        Technician(id="U3", name="Juan (technician)", specialty="CNC"),
        Technician(id="T2", name="Carlos (mechanic)", specialty="Mechanics"),
    ]


def _components() -> list[Component]:
    return [
        Component(
            id="CMP-001",
            name="Hydraulic pump ZX",
            client="Mining Corp",
            model="ZX-2000",
            spare_parts=[
                SparePart(id="SP-01", name="Viton seal", code="SV-20", quantity=2),
                SparePart(id="SP-02", name="Bearing 6204", code="R-6204", quantity=1),
                SparePart(id="SP-03", name="O-ring kit", code="ORK-99", quantity=1),
            ],
        ),
        Component(
            id="CMP-002",
            name="Telescopic cylinder",
            client="Constructora X",
            model="CT-500",
            spare_parts=[
                SparePart(id="SP-04", name="Chromed rod", code="VC-50", quantity=1),
                SparePart(id="SP-05", name="Packing set", code="JE-500", quantity=1),
            ],
        ),
    ]


def seed_state(now: datetime | None = None) -> LedgerState:
    """Full demo shop."""
    now = now or utc_now()
    return LedgerState(
        work_orders=_work_orders(now),
        inventory=_inventory(),
        supply_documents=_supply_documents(now),
        tools=_tools(now),
        tool_loans=_tool_loans(now),
        technicians=_technicians(),
        components=_components(),
        settings=AppSettings(),
    )


def seed_collection(key: CollectionKey, now: datetime | None = None):
    """Seed value for a single collection."""
    return getattr(seed_state(now), key.value)
