"""Work order use cases: lifecycle, edits and booked resources."""

from dataclasses import dataclass
from enum import Enum

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
    TaskResponse,
    WorkOrderListResponse,
    WorkOrderResponse,
    WorkOrderStatusResponse,
)
from src.application.use_cases.base import LedgerUseCase
from src.config import get_logger
from src.core.entities import (
    Comment,
    LaborEntry,
    ServiceEntry,
    WorkOrder,
    WorkOrderStatus,
    WorkOrderTask,
    WorkOrderUpdate,
)
from src.core.entities.ledger_state import CollectionKey

logger = get_logger(__name__)

WORK_ORDERS = CollectionKey.WORK_ORDERS


class WorkOrderAction(str, Enum):
    """Lifecycle commands exposed over the API."""

    START = "start"
    PAUSE = "pause"
    RESUME = "resume"
    FINISH = "finish"
    CANCEL = "cancel"


@dataclass
class WorkOrderResult:
    order: WorkOrder
    pending_tasks: int = 0


class CreateWorkOrderUseCase(LedgerUseCase):
    """Open a new work order."""

    async def execute(self, request: CreateWorkOrderRequest, actor: str) -> WorkOrderResult:
        now = self._clock()
        order = WorkOrder(
            **request.model_dump(exclude={"tasks", "creation_date"}),
            creation_date=request.creation_date or now,
            tasks=[WorkOrderTask(description=t.strip()) for t in request.tasks if t.strip()],
        )

        ledgers = await self._load()
        created = ledgers.work_orders.create(order, actor)
        await self._commit(ledgers, WORK_ORDERS)
        return WorkOrderResult(order=created)

    def to_response(self, result: WorkOrderResult) -> WorkOrderResponse:
        return WorkOrderResponse.from_entity(result.order, self._clock())


class UpdateWorkOrderUseCase(LedgerUseCase):
    """Supervisor edit, including status changes through the state machine."""

    async def execute(self, order_id: str, changes: WorkOrderUpdate, actor: str) -> WorkOrderResult:
        ledgers = await self._load()
        order = ledgers.work_orders.update(order_id, changes, actor)
        await self._commit(ledgers, WORK_ORDERS)
        return WorkOrderResult(order=order)

    def to_response(self, result: WorkOrderResult) -> WorkOrderResponse:
        return WorkOrderResponse.from_entity(result.order, self._clock())


class ApproveBudgetUseCase(LedgerUseCase):
    """Record the client's approval of the quote."""

    async def execute(self, order_id: str, actor: str) -> WorkOrderResult:
        ledgers = await self._load()
        order = ledgers.work_orders.approve_budget(order_id, actor)
        await self._commit(ledgers, WORK_ORDERS)
        return WorkOrderResult(order=order)

    def to_response(self, result: WorkOrderResult) -> WorkOrderResponse:
        return WorkOrderResponse.from_entity(result.order, self._clock())


class ChangeWorkOrderStatusUseCase(LedgerUseCase):
    """Run one lifecycle command (start, pause, resume, finish, cancel)."""

    async def execute(
        self,
        order_id: str,
        action: WorkOrderAction,
        actor: str,
        finish: FinishWorkOrderRequest | None = None,
    ) -> WorkOrderResult:
        ledgers = await self._load()
        ledger = ledgers.work_orders

        if action == WorkOrderAction.FINISH:
            outcome = ledger.finish(order_id, finish.final_notes if finish else None, actor)
            result = WorkOrderResult(order=outcome.order, pending_tasks=outcome.pending_tasks)
        else:
            command = {
                WorkOrderAction.START: ledger.start,
                WorkOrderAction.PAUSE: ledger.pause,
                WorkOrderAction.RESUME: ledger.resume,
                WorkOrderAction.CANCEL: ledger.cancel,
            }[action]
            result = WorkOrderResult(order=command(order_id, actor))

        await self._commit(ledgers, WORK_ORDERS)
        return result

    def to_response(self, result: WorkOrderResult) -> WorkOrderStatusResponse:
        warning = None
        if result.pending_tasks:
            warning = f"Finished with {result.pending_tasks} pending task(s)"
        return WorkOrderStatusResponse(
            work_order=WorkOrderResponse.from_entity(result.order, self._clock()),
            pending_tasks=result.pending_tasks,
            warning=warning,
        )


class AddLaborUseCase(LedgerUseCase):
    async def execute(self, order_id: str, request: AddLaborRequest, actor: str) -> WorkOrderResult:
        entry = LaborEntry(
            **request.model_dump(exclude={"date"}),
            date=request.date or self._clock(),
        )
        ledgers = await self._load()
        order = ledgers.work_orders.add_labor(order_id, entry, actor)
        await self._commit(ledgers, WORK_ORDERS)
        return WorkOrderResult(order=order)

    def to_response(self, result: WorkOrderResult) -> WorkOrderResponse:
        return WorkOrderResponse.from_entity(result.order, self._clock())


class AddServiceUseCase(LedgerUseCase):
    async def execute(self, order_id: str, request: AddServiceRequest, actor: str) -> WorkOrderResult:
        entry = ServiceEntry(
            **request.model_dump(exclude={"date"}),
            date=request.date or self._clock(),
        )
        ledgers = await self._load()
        order = ledgers.work_orders.add_service(order_id, entry, actor)
        await self._commit(ledgers, WORK_ORDERS)
        return WorkOrderResult(order=order)

    def to_response(self, result: WorkOrderResult) -> WorkOrderResponse:
        return WorkOrderResponse.from_entity(result.order, self._clock())


@dataclass
class TaskResult:
    task: WorkOrderTask
    order: WorkOrder


class AddTaskUseCase(LedgerUseCase):
    async def execute(self, order_id: str, request: AddTaskRequest, actor: str) -> TaskResult:
        ledgers = await self._load()
        task = ledgers.work_orders.add_task(order_id, request.description, actor)
        await self._commit(ledgers, WORK_ORDERS)
        return TaskResult(task=task, order=ledgers.work_orders.get(order_id))

    def to_response(self, result: TaskResult) -> TaskResponse:
        return TaskResponse(
            task=result.task,
            work_order=WorkOrderResponse.from_entity(result.order, self._clock()),
        )


class ToggleTaskUseCase(LedgerUseCase):
    async def execute(self, order_id: str, task_id: str, actor: str) -> TaskResult:
        ledgers = await self._load()
        task = ledgers.work_orders.toggle_task(order_id, task_id, actor)
        await self._commit(ledgers, WORK_ORDERS)
        return TaskResult(task=task, order=ledgers.work_orders.get(order_id))

    def to_response(self, result: TaskResult) -> TaskResponse:
        return TaskResponse(
            task=result.task,
            work_order=WorkOrderResponse.from_entity(result.order, self._clock()),
        )


@dataclass
class CommentResult:
    comment: Comment
    order: WorkOrder


class AddCommentUseCase(LedgerUseCase):
    async def execute(self, order_id: str, request: AddCommentRequest, actor: str) -> CommentResult:
        ledgers = await self._load()
        comment = ledgers.work_orders.add_comment(
            order_id, request.text, actor, actor_name=request.user_name
        )
        await self._commit(ledgers, WORK_ORDERS)
        return CommentResult(comment=comment, order=ledgers.work_orders.get(order_id))

    def to_response(self, result: CommentResult) -> CommentResponse:
        return CommentResponse(
            comment=result.comment,
            work_order=WorkOrderResponse.from_entity(result.order, self._clock()),
        )


class ListWorkOrdersUseCase(LedgerUseCase):
    """Read-only listing with optional status and overdue filters."""

    async def execute(
        self,
        status: WorkOrderStatus | None = None,
        overdue_only: bool = False,
    ) -> list[WorkOrder]:
        ledgers = await self._load()
        if overdue_only:
            orders = ledgers.work_orders.overdue()
            if status is not None:
                orders = [o for o in orders if o.status == status]
            return orders
        return ledgers.work_orders.list_orders(status)

    def to_response(self, orders: list[WorkOrder]) -> WorkOrderListResponse:
        now = self._clock()
        return WorkOrderListResponse(
            items=[WorkOrderResponse.from_entity(o, now) for o in orders],
            total=len(orders),
        )


class GetWorkOrderUseCase(LedgerUseCase):
    async def execute(self, order_id: str) -> WorkOrder:
        ledgers = await self._load()
        return ledgers.work_orders.get(order_id)

    def to_response(self, order: WorkOrder) -> WorkOrderResponse:
        return WorkOrderResponse.from_entity(order, self._clock())


__all__ = [
    "WorkOrderAction",
    "WorkOrderResult",
    "TaskResult",
    "CommentResult",
    "CreateWorkOrderUseCase",
    "UpdateWorkOrderUseCase",
    "ApproveBudgetUseCase",
    "ChangeWorkOrderStatusUseCase",
    "AddLaborUseCase",
    "AddServiceUseCase",
    "AddTaskUseCase",
    "ToggleTaskUseCase",
    "AddCommentUseCase",
    "ListWorkOrdersUseCase",
    "GetWorkOrderUseCase",
]
