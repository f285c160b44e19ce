"""Tests for tool custody: loans, returns and maintenance."""

from datetime import date, datetime, timedelta

import pytest

from src.core.entities import (
    ActivityAction,
    LoanStatus,
    MaintenanceDispatch,
    MaintenanceOutcome,
    MaintenanceType,
    Tool,
    ToolLoan,
    ToolReturn,
    ToolStatus,
    ToolUpdate,
    WorkshopType,
)
from src.core.exceptions import (
    DuplicateEntityError,
    InvalidStatusTransitionError,
    LoanNotActiveError,
    LoanNotFoundError,
    TechnicianInactiveError,
    ToolNotAvailableError,
    ToolNotFoundError,
    ValidationError,
)


def assert_custody_consistent(state):
    """A tool is in_use exactly while it has one active loan."""
    for tool in state.tools:
        active = [
            loan
            for loan in state.tool_loans
            if loan.tool_id == tool.id and loan.status == LoanStatus.ACTIVE
        ]
        assert len(active) <= 1
        assert (tool.status == ToolStatus.IN_USE) == bool(active), tool.id


class TestRegistry:
    def test_add_tool(self, ledgers):
        tool = ledgers.tools.add_tool(Tool(id="T-010", code=" LLV-01 ", name="Torque wrench"), "U1")
        assert tool.code == "LLV-01"
        assert ledgers.state.activity_log[0].details == "Tool registered: LLV-01"

    def test_duplicate_code_is_case_insensitive(self, ledgers):
        with pytest.raises(DuplicateEntityError):
            ledgers.tools.add_tool(Tool(id="T-010", code="tal-01", name="Drill"), "U1")

    def test_new_tool_cannot_be_in_use(self, ledgers):
        with pytest.raises(ValidationError):
            ledgers.tools.add_tool(
                Tool(id="T-010", code="X-1", name="Drill", status=ToolStatus.IN_USE), "U1"
            )

    def test_update_tool(self, ledgers):
        tool = ledgers.tools.update_tool("T-003", ToolUpdate(location="M-4"), "U1")
        assert tool.location == "M-4"
        assert tool.status == ToolStatus.AVAILABLE

    def test_update_code_taken(self, ledgers):
        with pytest.raises(DuplicateEntityError):
            ledgers.tools.update_tool("T-003", ToolUpdate(code="MIC-01"), "U1")

    def test_update_keeps_own_code(self, ledgers):
        tool = ledgers.tools.update_tool("T-003", ToolUpdate(code="cal-01"), "U1")
        assert tool.code == "cal-01"

    def test_unknown_tool(self, ledgers):
        with pytest.raises(ToolNotFoundError):
            ledgers.tools.get_tool("T-404")


class TestCheckout:
    def test_checkout_available_tool(self, ledgers, now):
        loan = ledgers.tools.checkout(
            ToolLoan(tool_id="T-001", technician_id="U3", work_order_id="OT.1001"), "U1"
        )

        assert loan.id == "PRS-2024-1002"
        assert loan.tool_name == "Hammer drill 18V"
        assert loan.loan_date == now
        assert loan.status == LoanStatus.ACTIVE
        assert ledgers.tools.get_tool("T-001").status == ToolStatus.IN_USE
        assert ledgers.state.tool_loans[0] is loan

        entry = ledgers.state.activity_log[0]
        assert entry.action == ActivityAction.TOOL_LOAN
        assert loan.technician_name == "Juan (technician)"
        assert entry.details == "Loan: Hammer drill 18V to Juan (technician)"
        assert_custody_consistent(ledgers.state)

    def test_double_checkout_fails(self, ledgers):
        ledgers.tools.checkout(ToolLoan(tool_id="T-001", technician_id="U3"), "U1")

        with pytest.raises(ToolNotAvailableError):
            ledgers.tools.checkout(ToolLoan(tool_id="T-001", technician_id="U4"), "U1")

        assert len(ledgers.tools.active_loans()) == 2
        assert_custody_consistent(ledgers.state)

    @pytest.mark.parametrize("tool_id", ["T-002", "T-004"])
    def test_unavailable_tools(self, ledgers, tool_id):
        with pytest.raises(ToolNotAvailableError):
            ledgers.tools.checkout(ToolLoan(tool_id=tool_id, technician_id="U3"), "U1")

    def test_requires_technician(self, ledgers):
        with pytest.raises(ValidationError):
            ledgers.tools.checkout(ToolLoan(tool_id="T-001", technician_id=" "), "U1")
        assert ledgers.tools.get_tool("T-001").status == ToolStatus.AVAILABLE

    def test_generated_id_skips_caller_ids(self, ledgers):
        ledgers.tools.checkout(
            ToolLoan(id="PRS-2024-1003", tool_id="T-001", technician_id="U3"), "U1"
        )
        auto = ledgers.tools.checkout(ToolLoan(tool_id="T-003", technician_id="U4"), "U1")

        assert auto.id == "PRS-2024-1004"

        ledgers.tools.checkin("PRS-2024-1003", "OK", ToolStatus.AVAILABLE, "U1")
        assert ledgers.tools.get_tool("T-001").status == ToolStatus.AVAILABLE
        assert ledgers.tools.get_tool("T-003").status == ToolStatus.IN_USE
        assert [loan.tool_id for loan in ledgers.tools.active_loans()] == ["T-003", "T-002"]
        assert_custody_consistent(ledgers.state)

    def test_duplicate_loan_id(self, ledgers):
        with pytest.raises(DuplicateEntityError):
            ledgers.tools.checkout(
                ToolLoan(id="PRS-2024-001", tool_id="T-001", technician_id="U3"), "U1"
            )
        assert ledgers.tools.get_tool("T-001").status == ToolStatus.AVAILABLE

    def test_unrostered_technician_keeps_given_name(self, ledgers):
        loan = ledgers.tools.checkout(
            ToolLoan(tool_id="T-001", technician_id="EXT-7", technician_name="Visiting welder"),
            "U1",
        )
        assert loan.technician_name == "Visiting welder"

    def test_inactive_technician_cannot_borrow(self, ledgers):
        ledgers.state.find_technician("T2").active = False
        with pytest.raises(TechnicianInactiveError):
            ledgers.tools.checkout(ToolLoan(tool_id="T-001", technician_id="T2"), "U1")
        assert ledgers.tools.get_tool("T-001").status == ToolStatus.AVAILABLE
        assert len(ledgers.state.tool_loans) == 1


class TestCheckin:
    def test_checkin_closes_loan(self, ledgers, now):
        loan = ledgers.tools.checkin("PRS-2024-001", "Worn disc", ToolStatus.AVAILABLE, "U1")

        assert loan.status == LoanStatus.RETURNED
        assert loan.return_date == now
        assert loan.condition_in == "Worn disc"
        assert ledgers.tools.get_tool("T-002").status == ToolStatus.AVAILABLE
        assert ledgers.state.activity_log[0].action == ActivityAction.TOOL_RETURN
        assert_custody_consistent(ledgers.state)

    def test_checkin_as_broken(self, ledgers):
        ledgers.tools.checkin("PRS-2024-001", "Cracked guard", ToolStatus.BROKEN, "U1")
        assert ledgers.tools.get_tool("T-002").status == ToolStatus.BROKEN

    def test_second_checkin_fails(self, ledgers):
        ledgers.tools.checkin("PRS-2024-001", "OK", ToolStatus.AVAILABLE, "U1")
        with pytest.raises(LoanNotActiveError):
            ledgers.tools.checkin("PRS-2024-001", "OK", ToolStatus.AVAILABLE, "U1")

    def test_cannot_return_as_in_use(self, ledgers):
        with pytest.raises(ValidationError):
            ledgers.tools.checkin("PRS-2024-001", "OK", ToolStatus.IN_USE, "U1")
        assert ledgers.tools.get_loan("PRS-2024-001").status == LoanStatus.ACTIVE

    def test_unknown_loan(self, ledgers):
        with pytest.raises(LoanNotFoundError):
            ledgers.tools.checkin("PRS-404", "OK", ToolStatus.AVAILABLE, "U1")


class TestProcessReturns:
    @pytest.fixture
    def two_loans(self, ledgers):
        first = ledgers.tools.checkout(ToolLoan(tool_id="T-001", technician_id="U5"), "U1")
        second = ledgers.tools.checkout(ToolLoan(tool_id="T-003", technician_id="U5"), "U1")
        return first, second

    def test_batch_return(self, ledgers, two_loans):
        first, second = two_loans
        returned = ledgers.tools.process_returns(
            [
                ToolReturn(loan_id=first.id, condition="OK"),
                ToolReturn(loan_id=second.id, condition="Jaw damaged", status=ToolStatus.BROKEN),
            ],
            datetime(2024, 6, 3, 17, 30),
            "U1",
            technician_id="U5",
        )

        assert [loan.status for loan in returned] == [LoanStatus.RETURNED] * 2
        assert returned[0].return_date.tzinfo is not None
        assert ledgers.tools.get_tool("T-001").status == ToolStatus.AVAILABLE
        assert ledgers.tools.get_tool("T-003").status == ToolStatus.BROKEN
        assert ledgers.state.activity_log[0].details == "Batch return: 2 tools"
        assert_custody_consistent(ledgers.state)

    def test_wrong_technician_rejects_batch(self, ledgers, two_loans):
        first, _ = two_loans
        with pytest.raises(ValidationError):
            ledgers.tools.process_returns(
                [
                    ToolReturn(loan_id=first.id, condition="OK"),
                    ToolReturn(loan_id="PRS-2024-001", condition="OK"),
                ],
                None,
                "U1",
                technician_id="U5",
            )
        assert ledgers.tools.get_loan(first.id).status == LoanStatus.ACTIVE
        assert_custody_consistent(ledgers.state)

    def test_returned_loan_rejects_batch(self, ledgers, two_loans):
        first, second = two_loans
        ledgers.tools.checkin(second.id, "OK", ToolStatus.AVAILABLE, "U1")
        with pytest.raises(LoanNotActiveError):
            ledgers.tools.process_returns(
                [
                    ToolReturn(loan_id=first.id, condition="OK"),
                    ToolReturn(loan_id=second.id, condition="OK"),
                ],
                None,
                "U1",
            )
        assert ledgers.tools.get_tool("T-001").status == ToolStatus.IN_USE

    def test_duplicate_lines_rejected(self, ledgers, two_loans):
        first, _ = two_loans
        with pytest.raises(ValidationError):
            ledgers.tools.process_returns(
                [ToolReturn(loan_id=first.id, condition="OK")] * 2, None, "U1"
            )

    def test_empty_batch(self, ledgers):
        assert ledgers.tools.process_returns([], None, "U1") == []
        assert ledgers.state.activity_log == []


class TestMaintenance:
    def test_send_to_maintenance(self, ledgers, now):
        tool = ledgers.tools.send_to_maintenance(
            "T-001",
            MaintenanceDispatch(date=now, reason="Noisy bearing", type=WorkshopType.EXTERNAL),
            "U1",
        )
        assert tool.status == ToolStatus.MAINTENANCE
        assert tool.active_maintenance.provider == "Internal workshop"
        details = ledgers.state.activity_log[0].details
        assert details == "Sent to maintenance: TAL-01 (Noisy bearing)"

    def test_tool_on_loan_cannot_go(self, ledgers, now):
        with pytest.raises(ToolNotAvailableError):
            ledgers.tools.send_to_maintenance(
                "T-002", MaintenanceDispatch(date=now, reason="Check"), "U1"
            )
        assert_custody_consistent(ledgers.state)

    def test_reason_required(self, ledgers, now):
        with pytest.raises(ValidationError):
            ledgers.tools.send_to_maintenance(
                "T-001", MaintenanceDispatch(date=now, reason=" "), "U1"
            )
        assert ledgers.tools.get_tool("T-001").status == ToolStatus.AVAILABLE

    def test_return_from_maintenance(self, ledgers, now):
        next_date = date(2025, 6, 1)
        record = ledgers.tools.return_from_maintenance(
            "T-004",
            MaintenanceOutcome(
                type=MaintenanceType.PREVENTATIVE,
                cost=25000,
                description="Calibrated",
                next_scheduled_date=next_date,
            ),
            "U1",
        )

        assert record.id == "MT-2024-1001"
        assert record.performed_by == "Metrology Lab"
        assert record.date == now
        assert record.cost == 25000
        tool = ledgers.tools.get_tool("T-004")
        assert tool.status == ToolStatus.AVAILABLE
        assert tool.next_maintenance_date == next_date
        assert tool.active_maintenance is None
        assert ledgers.state.tool_maintenances[0] is record

    def test_return_requires_maintenance_status(self, ledgers):
        with pytest.raises(ToolNotAvailableError):
            ledgers.tools.return_from_maintenance("T-001", MaintenanceOutcome(), "U1")

    def test_cannot_come_back_in_use(self, ledgers):
        with pytest.raises(ValidationError):
            ledgers.tools.return_from_maintenance(
                "T-004", MaintenanceOutcome(status=ToolStatus.IN_USE), "U1"
            )
        assert ledgers.state.tool_maintenances == []

    def test_maintenance_due(self, ledgers, now):
        today = now.date()
        overdue = ToolUpdate(next_maintenance_date=today - timedelta(days=1))
        upcoming = ToolUpdate(next_maintenance_date=today + timedelta(days=9))
        ledgers.tools.update_tool("T-001", overdue, "U1")
        ledgers.tools.update_tool("T-003", upcoming, "U1")

        assert [t.id for t in ledgers.tools.maintenance_due(today)] == ["T-001"]
        assert {t.id for t in ledgers.tools.maintenance_due(today + timedelta(days=10))} == {
            "T-001",
            "T-003",
        }

    def test_retired_tools_are_never_due(self, ledgers, now):
        ledgers.tools.update_tool("T-001", ToolUpdate(next_maintenance_date=now.date()), "U1")
        ledgers.tools.retire("T-001", "U1")
        assert ledgers.tools.maintenance_due(now.date()) == []


class TestRetire:
    def test_retire(self, ledgers):
        tool = ledgers.tools.retire("T-004", "U1")
        assert tool.status == ToolStatus.RETIRED
        assert tool.active_maintenance is None

    def test_tool_on_loan_cannot_retire(self, ledgers):
        with pytest.raises(InvalidStatusTransitionError):
            ledgers.tools.retire("T-002", "U1")

    def test_retire_twice(self, ledgers):
        ledgers.tools.retire("T-003", "U1")
        with pytest.raises(InvalidStatusTransitionError):
            ledgers.tools.retire("T-003", "U1")


class TestCustodyRule:
    def test_seed_is_consistent(self, state):
        assert_custody_consistent(state)

    def test_consistent_through_a_shift(self, ledgers, now):
        ledgers.tools.checkout(ToolLoan(tool_id="T-001", technician_id="U3"), "U1")
        ledgers.tools.checkin("PRS-2024-001", "OK", ToolStatus.MAINTENANCE, "U1")
        loan = ledgers.tools.checkout(ToolLoan(tool_id="T-003", technician_id="U4"), "U1")
        ledgers.tools.process_returns([ToolReturn(loan_id=loan.id, condition="OK")], None, "U1")
        assert_custody_consistent(ledgers.state)
