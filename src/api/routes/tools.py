"""Tool crib endpoints: registry, loans and maintenance."""

import datetime as dt

from fastapi import APIRouter, Depends, Query, status

from src.api.dependencies import (
    get_actor,
    get_add_tool_use_case,
    get_checkin_use_case,
    get_checkout_use_case,
    get_list_loans_use_case,
    get_list_maintenances_use_case,
    get_list_tools_use_case,
    get_maintenance_due_use_case,
    get_process_returns_use_case,
    get_retire_tool_use_case,
    get_return_from_maintenance_use_case,
    get_send_to_maintenance_use_case,
    get_update_tool_use_case,
)
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
    ErrorResponse,
    LoanListResponse,
    MaintenanceListResponse,
    MaintenanceRecordResponse,
    ToolListResponse,
)
from src.application.use_cases import (
    AddToolUseCase,
    CheckinToolUseCase,
    CheckoutToolUseCase,
    ListToolLoansUseCase,
    ListToolMaintenancesUseCase,
    ListToolsUseCase,
    MaintenanceDueUseCase,
    ProcessToolReturnsUseCase,
    RetireToolUseCase,
    ReturnFromMaintenanceUseCase,
    SendToMaintenanceUseCase,
    UpdateToolUseCase,
)
from src.core.entities import Tool, ToolStatus, ToolUpdate

router = APIRouter(prefix="/api/tools", tags=["tools"])

CONFLICT = {
    400: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    409: {"model": ErrorResponse},
}


@router.get("", response_model=ToolListResponse)
async def list_tools(
    status_filter: ToolStatus | None = Query(default=None, alias="status"),
    use_case: ListToolsUseCase = Depends(get_list_tools_use_case),
) -> ToolListResponse:
    tools = await use_case.execute(status=status_filter)
    return use_case.to_response(tools)


@router.post(
    "",
    response_model=Tool,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}},
)
async def add_tool(
    request: CreateToolRequest,
    actor: str = Depends(get_actor),
    use_case: AddToolUseCase = Depends(get_add_tool_use_case),
) -> Tool:
    tool = await use_case.execute(request, actor)
    return use_case.to_response(tool)


@router.get("/maintenance-due", response_model=ToolListResponse)
async def maintenance_due(
    as_of: dt.date | None = None,
    use_case: MaintenanceDueUseCase = Depends(get_maintenance_due_use_case),
) -> ToolListResponse:
    """Tools whose next maintenance date has come, as of today by default."""
    tools = await use_case.execute(as_of)
    return use_case.to_response(tools)


@router.get("/maintenances", response_model=MaintenanceListResponse)
async def list_maintenances(
    tool_id: str | None = None,
    use_case: ListToolMaintenancesUseCase = Depends(get_list_maintenances_use_case),
) -> MaintenanceListResponse:
    records = await use_case.execute(tool_id)
    return use_case.to_response(records)


@router.get("/loans", response_model=LoanListResponse)
async def list_loans(
    active: bool = False,
    technician_id: str | None = None,
    use_case: ListToolLoansUseCase = Depends(get_list_loans_use_case),
) -> LoanListResponse:
    loans = await use_case.execute(active_only=active, technician_id=technician_id)
    return use_case.to_response(loans)


@router.post(
    "/loans",
    response_model=CustodyResponse,
    status_code=status.HTTP_201_CREATED,
    responses=CONFLICT,
)
async def checkout_tool(
    request: CheckoutToolRequest,
    actor: str = Depends(get_actor),
    use_case: CheckoutToolUseCase = Depends(get_checkout_use_case),
) -> CustodyResponse:
    """Lend an available tool to a technician."""
    result = await use_case.execute(request, actor)
    return use_case.to_response(result)


@router.post("/loans/returns", response_model=CustodyResponse, responses=CONFLICT)
async def process_returns(
    request: ProcessReturnsRequest,
    actor: str = Depends(get_actor),
    use_case: ProcessToolReturnsUseCase = Depends(get_process_returns_use_case),
) -> CustodyResponse:
    """Return several tools at once. Any invalid line rejects the batch."""
    result = await use_case.execute(request, actor)
    return use_case.to_response(result)


@router.post("/loans/{loan_id}/return", response_model=CustodyResponse, responses=CONFLICT)
async def checkin_tool(
    loan_id: str,
    request: CheckinToolRequest,
    actor: str = Depends(get_actor),
    use_case: CheckinToolUseCase = Depends(get_checkin_use_case),
) -> CustodyResponse:
    result = await use_case.execute(loan_id, request, actor)
    return use_case.to_response(result)


@router.patch("/{tool_id}", response_model=Tool, responses=CONFLICT)
async def update_tool(
    tool_id: str,
    changes: ToolUpdate,
    actor: str = Depends(get_actor),
    use_case: UpdateToolUseCase = Depends(get_update_tool_use_case),
) -> Tool:
    tool = await use_case.execute(tool_id, changes, actor)
    return use_case.to_response(tool)


@router.post("/{tool_id}/retire", response_model=Tool, responses=CONFLICT)
async def retire_tool(
    tool_id: str,
    actor: str = Depends(get_actor),
    use_case: RetireToolUseCase = Depends(get_retire_tool_use_case),
) -> Tool:
    tool = await use_case.execute(tool_id, actor)
    return use_case.to_response(tool)


@router.post("/{tool_id}/maintenance", response_model=Tool, responses=CONFLICT)
async def send_to_maintenance(
    tool_id: str,
    request: SendToMaintenanceRequest,
    actor: str = Depends(get_actor),
    use_case: SendToMaintenanceUseCase = Depends(get_send_to_maintenance_use_case),
) -> Tool:
    """Dispatch an available or broken tool to a workshop."""
    tool = await use_case.execute(tool_id, request, actor)
    return use_case.to_response(tool)


@router.post(
    "/{tool_id}/maintenance/return",
    response_model=MaintenanceRecordResponse,
    responses=CONFLICT,
)
async def return_from_maintenance(
    tool_id: str,
    request: ReturnFromMaintenanceRequest,
    actor: str = Depends(get_actor),
    use_case: ReturnFromMaintenanceUseCase = Depends(get_return_from_maintenance_use_case),
) -> MaintenanceRecordResponse:
    result = await use_case.execute(tool_id, request, actor)
    return use_case.to_response(result)
