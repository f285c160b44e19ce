"""Tool crib use cases: registry, loans and maintenance."""

import datetime as dt
from dataclasses import dataclass

from src.application.dto.requests import (
    CheckinToolRequest,
    CheckoutToolRequest,
    CreateToolRequest,
    ProcessReturnsRequest,
    ReturnFromMaintenanceRequest,
    SendToMaintenanceRequest,
)
from src.application.dto.responses import (
    CustodyResponse,
    LoanListResponse,
    MaintenanceListResponse,
    MaintenanceRecordResponse,
    ToolListResponse,
)
from src.application.use_cases.base import LedgerUseCase
from src.core.entities import (
    MaintenanceDispatch,
    MaintenanceOutcome,
    Tool,
    ToolLoan,
    ToolMaintenance,
    ToolStatus,
    ToolUpdate,
)
from src.core.entities.common import new_id
from src.core.entities.ledger_state import CollectionKey

TOOLS = CollectionKey.TOOLS
LOANS = CollectionKey.TOOL_LOANS


class AddToolUseCase(LedgerUseCase):
    """Register a tool in the crib."""

    async def execute(self, request: CreateToolRequest, actor: str) -> Tool:
        tool = Tool(**request.model_dump(exclude={"id"}), id=request.id or f"TOOL-{new_id()}")
        ledgers = await self._load()
        created = ledgers.tools.add_tool(tool, actor)
        await self._commit(ledgers, TOOLS)
        return created

    def to_response(self, tool: Tool) -> Tool:
        return tool


class UpdateToolUseCase(LedgerUseCase):
    async def execute(self, tool_id: str, changes: ToolUpdate, actor: str) -> Tool:
        ledgers = await self._load()
        tool = ledgers.tools.update_tool(tool_id, changes, actor)
        await self._commit(ledgers, TOOLS)
        return tool

    def to_response(self, tool: Tool) -> Tool:
        return tool


class RetireToolUseCase(LedgerUseCase):
    async def execute(self, tool_id: str, actor: str) -> Tool:
        ledgers = await self._load()
        tool = ledgers.tools.retire(tool_id, actor)
        await self._commit(ledgers, TOOLS)
        return tool

    def to_response(self, tool: Tool) -> Tool:
        return tool


@dataclass
class CustodyResult:
    loans: list[ToolLoan]
    tools: list[Tool]


def _custody_response(result: CustodyResult) -> CustodyResponse:
    return CustodyResponse(loans=result.loans, tools=result.tools)


class CheckoutToolUseCase(LedgerUseCase):
    """Lend an available tool to a technician."""

    async def execute(self, request: CheckoutToolRequest, actor: str) -> CustodyResult:
        loan = ToolLoan(**request.model_dump())
        ledgers = await self._load()
        opened = ledgers.tools.checkout(loan, actor)
        await self._commit(ledgers, TOOLS, LOANS)
        return CustodyResult(loans=[opened], tools=[ledgers.tools.get_tool(opened.tool_id)])

    def to_response(self, result: CustodyResult) -> CustodyResponse:
        return _custody_response(result)


class CheckinToolUseCase(LedgerUseCase):
    """Close one active loan."""

    async def execute(self, loan_id: str, request: CheckinToolRequest, actor: str) -> CustodyResult:
        ledgers = await self._load()
        loan = ledgers.tools.checkin(loan_id, request.condition_in, request.status, actor)
        await self._commit(ledgers, TOOLS, LOANS)
        return CustodyResult(loans=[loan], tools=[ledgers.tools.get_tool(loan.tool_id)])

    def to_response(self, result: CustodyResult) -> CustodyResponse:
        return _custody_response(result)


class ProcessToolReturnsUseCase(LedgerUseCase):
    """Close several loans in one all-or-nothing batch."""

    async def execute(self, request: ProcessReturnsRequest, actor: str) -> CustodyResult:
        ledgers = await self._load()
        loans = ledgers.tools.process_returns(
            request.returns,
            request.return_date,
            actor,
            technician_id=request.technician_id,
        )
        if loans:
            await self._commit(ledgers, TOOLS, LOANS)
        tool_ids = dict.fromkeys(loan.tool_id for loan in loans)
        tools = [ledgers.tools.get_tool(tool_id) for tool_id in tool_ids]
        return CustodyResult(loans=loans, tools=tools)

    def to_response(self, result: CustodyResult) -> CustodyResponse:
        return _custody_response(result)


class SendToMaintenanceUseCase(LedgerUseCase):
    async def execute(self, tool_id: str, request: SendToMaintenanceRequest, actor: str) -> Tool:
        dispatch = MaintenanceDispatch(
            **request.model_dump(exclude={"date"}),
            date=request.date or self._clock(),
        )
        ledgers = await self._load()
        tool = ledgers.tools.send_to_maintenance(tool_id, dispatch, actor)
        await self._commit(ledgers, TOOLS)
        return tool

    def to_response(self, tool: Tool) -> Tool:
        return tool


@dataclass
class MaintenanceResult:
    record: ToolMaintenance
    tool: Tool


class ReturnFromMaintenanceUseCase(LedgerUseCase):
    """Receive a tool back from its workshop and file the record."""

    async def execute(
        self, tool_id: str, request: ReturnFromMaintenanceRequest, actor: str
    ) -> MaintenanceResult:
        outcome = MaintenanceOutcome(**request.model_dump())
        ledgers = await self._load()
        record = ledgers.tools.return_from_maintenance(tool_id, outcome, actor)
        await self._commit(ledgers, TOOLS, CollectionKey.TOOL_MAINTENANCES)
        return MaintenanceResult(record=record, tool=ledgers.tools.get_tool(tool_id))

    def to_response(self, result: MaintenanceResult) -> MaintenanceRecordResponse:
        return MaintenanceRecordResponse(record=result.record, tool=result.tool)


class ListToolsUseCase(LedgerUseCase):
    async def execute(self, status: ToolStatus | None = None) -> list[Tool]:
        ledgers = await self._load([TOOLS])
        return [t for t in ledgers.state.tools if status is None or t.status == status]

    def to_response(self, tools: list[Tool]) -> ToolListResponse:
        return ToolListResponse(items=tools, total=len(tools))


class MaintenanceDueUseCase(LedgerUseCase):
    """Tools whose next maintenance date falls on or before ``as_of``."""

    async def execute(self, as_of: dt.date | None = None) -> list[Tool]:
        ledgers = await self._load([TOOLS])
        return ledgers.tools.maintenance_due(as_of or self._clock().date())

    def to_response(self, tools: list[Tool]) -> ToolListResponse:
        return ToolListResponse(items=tools, total=len(tools))


class ListToolLoansUseCase(LedgerUseCase):
    async def execute(
        self,
        active_only: bool = False,
        technician_id: str | None = None,
    ) -> list[ToolLoan]:
        ledgers = await self._load([LOANS])
        if active_only:
            return ledgers.tools.active_loans(technician_id)
        return [
            loan
            for loan in ledgers.state.tool_loans
            if technician_id is None or loan.technician_id == technician_id
        ]

    def to_response(self, loans: list[ToolLoan]) -> LoanListResponse:
        return LoanListResponse(items=loans, total=len(loans))


class ListToolMaintenancesUseCase(LedgerUseCase):
    async def execute(self, tool_id: str | None = None) -> list[ToolMaintenance]:
        ledgers = await self._load([CollectionKey.TOOL_MAINTENANCES])
        return [
            m
            for m in ledgers.state.tool_maintenances
            if tool_id is None or m.tool_id == tool_id
        ]

    def to_response(self, records: list[ToolMaintenance]) -> MaintenanceListResponse:
        return MaintenanceListResponse(items=records, total=len(records))


__all__ = [
    "CustodyResult",
    "MaintenanceResult",
    "AddToolUseCase",
    "UpdateToolUseCase",
    "RetireToolUseCase",
    "CheckoutToolUseCase",
    "CheckinToolUseCase",
    "ProcessToolReturnsUseCase",
    "SendToMaintenanceUseCase",
    "ReturnFromMaintenanceUseCase",
    "ListToolsUseCase",
    "MaintenanceDueUseCase",
    "ListToolLoansUseCase",
    "ListToolMaintenancesUseCase",
]
