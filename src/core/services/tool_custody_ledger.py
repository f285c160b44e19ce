"""
Tool crib custody.

A tool is ``in_use`` exactly while one active loan exists for it. Loans are
opened by checkout and closed by checkin (single or batch); maintenance
dispatches move the tool out of circulation until it is received back.
"""

from __future__ import annotations

from datetime import date, datetime

from src.config import get_logger
from src.core.entities.activity import ActivityAction, ActivityEntity
from src.core.entities.common import Clock, ensure_utc, sequence_id, utc_now
from src.core.entities.ledger_state import LedgerState
from src.core.entities.tool import (
    LoanStatus,
    MaintenanceDispatch,
    MaintenanceOutcome,
    Tool,
    ToolLoan,
    ToolMaintenance,
    ToolReturn,
    ToolStatus,
    ToolUpdate,
)
from src.core.exceptions import (
    DuplicateEntityError,
    InvalidStatusTransitionError,
    LoanNotActiveError,
    LoanNotFoundError,
    ToolNotAvailableError,
    ToolNotFoundError,
    ValidationError,
)
from src.core.services.activity_log import ActivityLog
from src.core.services.shop_roster import ShopRoster

logger = get_logger(__name__)

# Statuses a tool may be left in when its loan is closed
RETURN_STATUSES = frozenset({ToolStatus.AVAILABLE, ToolStatus.BROKEN, ToolStatus.MAINTENANCE})

# Statuses a tool may come back from maintenance in
MAINTENANCE_OUTCOMES = frozenset({ToolStatus.AVAILABLE, ToolStatus.BROKEN, ToolStatus.RETIRED})

DEFAULT_PROVIDER = "Internal workshop"


class ToolCustodyLedger:
    """Mutation surface for tools, loans and maintenance history."""

    def __init__(
        self,
        state: LedgerState,
        activity: ActivityLog,
        clock: Clock = utc_now,
        roster: ShopRoster | None = None,
    ) -> None:
        self._state = state
        self._activity = activity
        self._clock = clock
        self._roster = roster or ShopRoster(state, activity)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_tool(self, tool_id: str) -> Tool:
        tool = self._state.find_tool(tool_id)
        if tool is None:
            raise ToolNotFoundError(tool_id)
        return tool

    def get_loan(self, loan_id: str) -> ToolLoan:
        loan = self._state.find_loan(loan_id)
        if loan is None:
            raise LoanNotFoundError(loan_id)
        return loan

    def active_loans(self, technician_id: str | None = None) -> list[ToolLoan]:
        return [
            loan
            for loan in self._state.tool_loans
            if loan.status == LoanStatus.ACTIVE
            and (technician_id is None or loan.technician_id == technician_id)
        ]

    def maintenance_due(self, as_of: date) -> list[Tool]:
        """Tools in circulation whose next maintenance date has come."""
        return [
            t
            for t in self._state.tools
            if t.next_maintenance_date is not None
            and t.next_maintenance_date <= as_of
            and t.status != ToolStatus.RETIRED
        ]

    # ------------------------------------------------------------------
    # Registry
    # ------------------------------------------------------------------

    def add_tool(self, tool: Tool, actor: str) -> Tool:
        if not tool.id.strip():
            raise ValidationError("id", "tool id is required")
        if self._state.find_tool(tool.id) is not None:
            raise DuplicateEntityError("Tool", "id", tool.id)
        code = tool.code.strip()
        if not code:
            raise ValidationError("code", "tool code is required")
        self._check_code_free(code)
        if not tool.name.strip():
            raise ValidationError("name", "tool name is required")
        if tool.status == ToolStatus.IN_USE:
            raise ValidationError("status", "a new tool cannot start checked out", tool.status.value)

        created = tool.model_copy(deep=True, update={"code": code})
        self._state.tools.append(created)
        self._activity.append(
            ActivityAction.CREATE,
            ActivityEntity.TOOL,
            f"Tool registered: {created.code}",
            actor,
        )
        logger.info("tool_registered", tool_id=created.id, code=created.code)
        return created

    def update_tool(self, tool_id: str, changes: ToolUpdate, actor: str) -> Tool:
        tool = self.get_tool(tool_id)
        fields = changes.model_dump(exclude_unset=True)

        if "code" in fields:
            code = (fields["code"] or "").strip()
            if not code:
                raise ValidationError("code", "tool code cannot be empty")
            self._check_code_free(code, exclude_id=tool.id)
            fields["code"] = code
        if "name" in fields and not (fields["name"] or "").strip():
            raise ValidationError("name", "tool name cannot be empty")
        if "category" in fields and fields["category"] is None:
            raise ValidationError("category", "cannot be cleared")

        if not fields:
            return tool
        for name, value in fields.items():
            setattr(tool, name, value)
        self._activity.append(
            ActivityAction.UPDATE,
            ActivityEntity.TOOL,
            f"Tool updated: {tool.id}",
            actor,
        )
        logger.info("tool_updated", tool_id=tool.id, fields=sorted(fields))
        return tool

    def retire(self, tool_id: str, actor: str) -> Tool:
        """Take a tool out of circulation for good."""
        tool = self.get_tool(tool_id)
        if tool.status in (ToolStatus.IN_USE, ToolStatus.RETIRED):
            raise InvalidStatusTransitionError(
                "Tool", tool.id, tool.status.value, ToolStatus.RETIRED.value
            )
        previous = tool.status
        tool.status = ToolStatus.RETIRED
        tool.active_maintenance = None
        self._activity.append(
            ActivityAction.STATUS_CHANGE,
            ActivityEntity.TOOL,
            f"Tool {tool.code} retired",
            actor,
        )
        logger.info("tool_retired", tool_id=tool.id, from_status=previous.value)
        return tool

    # ------------------------------------------------------------------
    # Custody
    # ------------------------------------------------------------------

    def checkout(self, loan: ToolLoan, actor: str) -> ToolLoan:
        tool = self.get_tool(loan.tool_id)
        if tool.status != ToolStatus.AVAILABLE:
            raise ToolNotAvailableError(tool.id, tool.status.value, [ToolStatus.AVAILABLE.value])
        if not loan.technician_id.strip():
            raise ValidationError("technician_id", "technician is required")
        if loan.id and self._state.find_loan(loan.id) is not None:
            raise DuplicateEntityError("Tool loan", "id", loan.id)
        technician_name = self._roster.assign(loan.technician_id, loan.technician_name)

        now = self._clock()
        opened = loan.model_copy(
            update={
                "id": loan.id
                or sequence_id(
                    "PRS",
                    now.year,
                    len(self._state.tool_loans),
                    {existing.id for existing in self._state.tool_loans},
                ),
                "tool_name": loan.tool_name or tool.name,
                "technician_name": technician_name,
                "loan_date": loan.loan_date or now,
                "return_date": None,
                "condition_in": None,
                "status": LoanStatus.ACTIVE,
            }
        )
        self._state.tool_loans.insert(0, opened)
        tool.status = ToolStatus.IN_USE

        self._activity.append(
            ActivityAction.TOOL_LOAN,
            ActivityEntity.TOOL,
            f"Loan: {opened.tool_name} to {opened.technician_name or opened.technician_id}",
            actor,
        )
        logger.info(
            "tool_checked_out",
            loan_id=opened.id,
            tool_id=tool.id,
            technician_id=opened.technician_id,
            work_order_id=opened.work_order_id,
        )
        return opened

    def checkin(
        self,
        loan_id: str,
        condition_in: str,
        resulting_status: ToolStatus,
        actor: str,
    ) -> ToolLoan:
        loan = self.get_loan(loan_id)
        if loan.status != LoanStatus.ACTIVE:
            raise LoanNotActiveError(loan.id or loan_id)
        self._check_return_status(resulting_status)
        tool = self.get_tool(loan.tool_id)

        self._close_loan(loan, tool, condition_in, resulting_status, self._clock())
        self._activity.append(
            ActivityAction.TOOL_RETURN,
            ActivityEntity.TOOL,
            f"Return: {loan.tool_name} (status: {resulting_status.value})",
            actor,
        )
        logger.info(
            "tool_checked_in",
            loan_id=loan.id,
            tool_id=tool.id,
            status=resulting_status.value,
        )
        return loan

    def process_returns(
        self,
        returns: list[ToolReturn],
        return_date: datetime | None,
        actor: str,
        technician_id: str | None = None,
    ) -> list[ToolLoan]:
        """
        Close several loans at once.

        Every line is validated before any loan is touched: all loans must
        be active, listed once, and belong to ``technician_id`` when given.
        """
        if not returns:
            return []

        seen: set[str] = set()
        pairs: list[tuple[ToolLoan, Tool, ToolReturn]] = []
        for line in returns:
            if line.loan_id in seen:
                raise ValidationError("loan_id", "loan listed more than once", line.loan_id)
            seen.add(line.loan_id)

            loan = self.get_loan(line.loan_id)
            if loan.status != LoanStatus.ACTIVE:
                raise LoanNotActiveError(line.loan_id)
            if technician_id is not None and loan.technician_id != technician_id:
                raise ValidationError(
                    "loan_id",
                    f"loan belongs to technician {loan.technician_id}",
                    line.loan_id,
                )
            self._check_return_status(line.status)
            pairs.append((loan, self.get_tool(loan.tool_id), line))

        when = ensure_utc(return_date) if return_date else self._clock()
        for loan, tool, line in pairs:
            self._close_loan(loan, tool, line.condition, line.status, when)

        self._activity.append(
            ActivityAction.TOOL_RETURN,
            ActivityEntity.TOOL,
            f"Batch return: {len(pairs)} tools",
            actor,
        )
        logger.info(
            "tools_batch_returned",
            count=len(pairs),
            technician_id=technician_id,
        )
        return [loan for loan, _, _ in pairs]

    # ------------------------------------------------------------------
    # Maintenance
    # ------------------------------------------------------------------

    def send_to_maintenance(self, tool_id: str, dispatch: MaintenanceDispatch, actor: str) -> Tool:
        tool = self.get_tool(tool_id)
        allowed = (ToolStatus.AVAILABLE, ToolStatus.BROKEN)
        if tool.status not in allowed:
            raise ToolNotAvailableError(tool.id, tool.status.value, [s.value for s in allowed])
        if not dispatch.reason.strip():
            raise ValidationError("reason", "a reason is required to send a tool to maintenance")

        tool.active_maintenance = dispatch.model_copy(
            update={"provider": dispatch.provider.strip() or DEFAULT_PROVIDER}
        )
        tool.status = ToolStatus.MAINTENANCE

        self._activity.append(
            ActivityAction.TOOL_MAINTENANCE,
            ActivityEntity.TOOL,
            f"Sent to maintenance: {tool.code} ({dispatch.reason.strip()})",
            actor,
        )
        logger.info(
            "tool_sent_to_maintenance",
            tool_id=tool.id,
            workshop=dispatch.type.value,
            provider=tool.active_maintenance.provider,
            urgency=dispatch.urgency.value,
        )
        return tool

    def return_from_maintenance(
        self,
        tool_id: str,
        outcome: MaintenanceOutcome,
        actor: str,
    ) -> ToolMaintenance:
        """Receive a tool back and file the completed maintenance."""
        tool = self.get_tool(tool_id)
        if tool.status != ToolStatus.MAINTENANCE:
            raise ToolNotAvailableError(tool.id, tool.status.value, [ToolStatus.MAINTENANCE.value])
        if outcome.status not in MAINTENANCE_OUTCOMES:
            raise ValidationError(
                "status",
                "tool must come back available, broken or retired",
                outcome.status.value,
            )
        if outcome.cost < 0:
            raise ValidationError("cost", "cost cannot be negative", outcome.cost)

        now = self._clock()
        dispatch = tool.active_maintenance
        record = ToolMaintenance(
            id=sequence_id(
                "MT",
                now.year,
                len(self._state.tool_maintenances),
                {m.id for m in self._state.tool_maintenances},
            ),
            tool_id=tool.id,
            type=outcome.type,
            date=outcome.date or now,
            performed_by=(dispatch.provider if dispatch and dispatch.provider else "Unknown"),
            cost=outcome.cost,
            invoice_ref=outcome.invoice_ref,
            purchase_order=(dispatch.reference or None) if dispatch else None,
            description=outcome.description.strip() or "Maintenance completed",
            next_scheduled_date=outcome.next_scheduled_date,
        )

        self._state.tool_maintenances.insert(0, record)
        tool.status = outcome.status
        tool.next_maintenance_date = outcome.next_scheduled_date
        tool.active_maintenance = None

        self._activity.append(
            ActivityAction.TOOL_MAINTENANCE,
            ActivityEntity.TOOL,
            f"Maintenance recorded: {tool.code}",
            actor,
        )
        logger.info(
            "tool_maintenance_recorded",
            maintenance_id=record.id,
            tool_id=tool.id,
            status=tool.status.value,
            cost=record.cost,
        )
        return record

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _check_code_free(self, code: str, exclude_id: str | None = None) -> None:
        key = code.upper()
        for other in self._state.tools:
            if other.id != exclude_id and other.code.strip().upper() == key:
                raise DuplicateEntityError("Tool", "code", code)

    @staticmethod
    def _check_return_status(status: ToolStatus) -> None:
        if status not in RETURN_STATUSES:
            raise ValidationError(
                "status",
                "returned tool must be available, broken or maintenance",
                status.value,
            )

    @staticmethod
    def _close_loan(
        loan: ToolLoan,
        tool: Tool,
        condition_in: str,
        status: ToolStatus,
        when: datetime,
    ) -> None:
        loan.status = LoanStatus.RETURNED
        loan.return_date = when
        loan.condition_in = condition_in
        tool.status = status
