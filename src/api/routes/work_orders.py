"""Work order (OT) endpoints."""

from fastapi import APIRouter, Depends, Query, status

from src.api.dependencies import (
    get_actor,
    get_add_comment_use_case,
    get_add_labor_use_case,
    get_add_service_use_case,
    get_add_task_use_case,
    get_approve_budget_use_case,
    get_change_status_use_case,
    get_create_work_order_use_case,
    get_list_work_orders_use_case,
    get_toggle_task_use_case,
    get_update_work_order_use_case,
    get_work_order_use_case,
)
from src.application.dto.requests import (
    AddCommentRequest,
    AddLaborRequest,
    AddServiceRequest,
    AddTaskRequest,
    CreateWorkOrderRequest,
    FinishWorkOrderRequest,
)
from src.application.dto.responses import (
    CommentResponse,
    ErrorResponse,
    TaskResponse,
    WorkOrderListResponse,
    WorkOrderResponse,
    WorkOrderStatusResponse,
)
from src.application.use_cases import (
    AddCommentUseCase,
    AddLaborUseCase,
    AddServiceUseCase,
    AddTaskUseCase,
    ApproveBudgetUseCase,
    ChangeWorkOrderStatusUseCase,
    CreateWorkOrderUseCase,
    GetWorkOrderUseCase,
    ListWorkOrdersUseCase,
    ToggleTaskUseCase,
    UpdateWorkOrderUseCase,
    WorkOrderAction,
)
from src.core.entities import WorkOrderStatus, WorkOrderUpdate

router = APIRouter(prefix="/api/work-orders", tags=["work-orders"])

NOT_FOUND = {404: {"model": ErrorResponse}}
CONFLICT = {404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}}


@router.get("", response_model=WorkOrderListResponse)
async def list_work_orders(
    status_filter: WorkOrderStatus | None = Query(default=None, alias="status"),
    overdue: bool = False,
    use_case: ListWorkOrdersUseCase = Depends(get_list_work_orders_use_case),
) -> WorkOrderListResponse:
    """List work orders, optionally by status or only the overdue ones."""
    orders = await use_case.execute(status=status_filter, overdue_only=overdue)
    return use_case.to_response(orders)


@router.post(
    "",
    response_model=WorkOrderResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}},
)
async def create_work_order(
    request: CreateWorkOrderRequest,
    actor: str = Depends(get_actor),
    use_case: CreateWorkOrderUseCase = Depends(get_create_work_order_use_case),
) -> WorkOrderResponse:
    """Open a work order in ``pending``."""
    result = await use_case.execute(request, actor)
    return use_case.to_response(result)


@router.get("/{order_id}", response_model=WorkOrderResponse, responses=NOT_FOUND)
async def get_work_order(
    order_id: str,
    use_case: GetWorkOrderUseCase = Depends(get_work_order_use_case),
) -> WorkOrderResponse:
    order = await use_case.execute(order_id)
    return use_case.to_response(order)


@router.patch("/{order_id}", response_model=WorkOrderResponse, responses=CONFLICT)
async def update_work_order(
    order_id: str,
    changes: WorkOrderUpdate,
    actor: str = Depends(get_actor),
    use_case: UpdateWorkOrderUseCase = Depends(get_update_work_order_use_case),
) -> WorkOrderResponse:
    """Edit order data. A status change follows the lifecycle rules."""
    result = await use_case.execute(order_id, changes, actor)
    return use_case.to_response(result)


@router.post("/{order_id}/approve-budget", response_model=WorkOrderResponse, responses=CONFLICT)
async def approve_budget(
    order_id: str,
    actor: str = Depends(get_actor),
    use_case: ApproveBudgetUseCase = Depends(get_approve_budget_use_case),
) -> WorkOrderResponse:
    result = await use_case.execute(order_id, actor)
    return use_case.to_response(result)


@router.post("/{order_id}/finish", response_model=WorkOrderStatusResponse, responses=CONFLICT)
async def finish_work_order(
    order_id: str,
    request: FinishWorkOrderRequest | None = None,
    actor: str = Depends(get_actor),
    use_case: ChangeWorkOrderStatusUseCase = Depends(get_change_status_use_case),
) -> WorkOrderStatusResponse:
    """Finish the order. Open checklist items are reported, not blocking."""
    result = await use_case.execute(order_id, WorkOrderAction.FINISH, actor, finish=request)
    return use_case.to_response(result)


@router.post(
    "/{order_id}/labor",
    response_model=WorkOrderResponse,
    status_code=status.HTTP_201_CREATED,
    responses=NOT_FOUND,
)
async def add_labor(
    order_id: str,
    request: AddLaborRequest,
    actor: str = Depends(get_actor),
    use_case: AddLaborUseCase = Depends(get_add_labor_use_case),
) -> WorkOrderResponse:
    result = await use_case.execute(order_id, request, actor)
    return use_case.to_response(result)


@router.post(
    "/{order_id}/services",
    response_model=WorkOrderResponse,
    status_code=status.HTTP_201_CREATED,
    responses=NOT_FOUND,
)
async def add_service(
    order_id: str,
    request: AddServiceRequest,
    actor: str = Depends(get_actor),
    use_case: AddServiceUseCase = Depends(get_add_service_use_case),
) -> WorkOrderResponse:
    result = await use_case.execute(order_id, request, actor)
    return use_case.to_response(result)


@router.post(
    "/{order_id}/tasks",
    response_model=TaskResponse,
    status_code=status.HTTP_201_CREATED,
    responses=NOT_FOUND,
)
async def add_task(
    order_id: str,
    request: AddTaskRequest,
    actor: str = Depends(get_actor),
    use_case: AddTaskUseCase = Depends(get_add_task_use_case),
) -> TaskResponse:
    result = await use_case.execute(order_id, request, actor)
    return use_case.to_response(result)


@router.post("/{order_id}/tasks/{task_id}/toggle", response_model=TaskResponse, responses=NOT_FOUND)
async def toggle_task(
    order_id: str,
    task_id: str,
    actor: str = Depends(get_actor),
    use_case: ToggleTaskUseCase = Depends(get_toggle_task_use_case),
) -> TaskResponse:
    result = await use_case.execute(order_id, task_id, actor)
    return use_case.to_response(result)


@router.post(
    "/{order_id}/comments",
    response_model=CommentResponse,
    status_code=status.HTTP_201_CREATED,
    responses=NOT_FOUND,
)
async def add_comment(
    order_id: str,
    request: AddCommentRequest,
    actor: str = Depends(get_actor),
    use_case: AddCommentUseCase = Depends(get_add_comment_use_case),
) -> CommentResponse:
    result = await use_case.execute(order_id, request, actor)
    return use_case.to_response(result)


# Registered last so the fixed sub-paths above take precedence.
@router.post("/{order_id}/{action}", response_model=WorkOrderStatusResponse, responses=CONFLICT)
async def change_status(
    order_id: str,
    action: WorkOrderAction,
    actor: str = Depends(get_actor),
    use_case: ChangeWorkOrderStatusUseCase = Depends(get_change_status_use_case),
) -> WorkOrderStatusResponse:
    """Run a lifecycle step: start, pause, resume or cancel."""
    result = await use_case.execute(order_id, action, actor)
    return use_case.to_response(result)
