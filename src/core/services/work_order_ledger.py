"""
Work order lifecycle.

Owns the work order state machine and the resource collections attached
to each order. Every operation validates its preconditions before touching
the order, so a rejected call leaves the state unchanged.
"""

from __future__ import annotations

from dataclasses import dataclass

from src.config import get_logger
from src.core.entities.activity import ActivityAction, ActivityEntity
from src.core.entities.common import Clock, utc_now
from src.core.entities.ledger_state import LedgerState
from src.core.entities.work_order import (
    Comment,
    LaborEntry,
    MaterialUsage,
    ServiceEntry,
    WorkOrder,
    WorkOrderStatus,
    WorkOrderTask,
    WorkOrderUpdate,
)
from src.core.exceptions import (
    BudgetNotApprovedError,
    DuplicateEntityError,
    InvalidStatusTransitionError,
    TaskNotFoundError,
    ValidationError,
    WorkOrderClosedError,
    WorkOrderNotFoundError,
)
from src.core.services.activity_log import ActivityLog
from src.core.services.shop_roster import ShopRoster

logger = get_logger(__name__)

S = WorkOrderStatus

# Finished and cancelled are terminal.
ALLOWED_TRANSITIONS: dict[WorkOrderStatus, frozenset[WorkOrderStatus]] = {
    S.PENDING: frozenset({S.IN_PROCESS, S.WAITING, S.CANCELLED}),
    S.IN_PROCESS: frozenset({S.WAITING, S.FINISHED, S.CANCELLED}),
    S.WAITING: frozenset({S.IN_PROCESS, S.FINISHED, S.CANCELLED}),
    S.FINISHED: frozenset(),
    S.CANCELLED: frozenset(),
}

_REQUIRED_FIELDS = (
    "title",
    "client_id",
    "area",
    "priority",
    "creation_date",
    "estimated_completion_date",
)


@dataclass
class FinishResult:
    """Outcome of finishing an order.

    ``pending_tasks`` is a warning for the caller, never a blocker.
    """

    order: WorkOrder
    pending_tasks: int = 0


class WorkOrderLedger:
    """Mutation surface for ``LedgerState.work_orders``."""

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

    def get(self, order_id: str) -> WorkOrder:
        order = self._state.find_work_order(order_id)
        if order is None:
            raise WorkOrderNotFoundError(order_id)
        return order

    def list_orders(self, status: WorkOrderStatus | None = None) -> list[WorkOrder]:
        if status is None:
            return list(self._state.work_orders)
        return [o for o in self._state.work_orders if o.status == status]

    def overdue(self) -> list[WorkOrder]:
        now = self._clock()
        return [o for o in self._state.work_orders if o.is_overdue(now)]

    # ------------------------------------------------------------------
    # Creation and edits
    # ------------------------------------------------------------------

    def create(self, order: WorkOrder, actor: str) -> WorkOrder:
        """Register a new order as pending with empty resource collections."""
        order_id = order.id.strip()
        if not order_id:
            raise ValidationError("id", "work order number is required")
        if self._state.find_work_order(order_id) is not None:
            raise DuplicateEntityError("Work order", "id", order_id)
        if not order.title.strip():
            raise ValidationError("title", "title is required")
        if not order.client_id.strip():
            raise ValidationError("client_id", "client is required")
        if order.estimated_completion_date < order.creation_date:
            raise ValidationError(
                "estimated_completion_date",
                "estimated completion cannot precede creation",
                order.estimated_completion_date,
            )

        created = order.model_copy(
            deep=True,
            update={
                "id": order_id,
                "status": S.PENDING,
                "start_date": None,
                "finished_date": None,
                "final_notes": None,
                "materials": [],
                "labor": [],
                "services": [],
                "comments": [],
            },
        )
        self._state.work_orders.insert(0, created)

        label = "active" if created.is_budget_approved else "pending budget"
        self._activity.append(
            ActivityAction.CREATE,
            ActivityEntity.WORK_ORDER,
            f"Created OT {created.id} ({label})",
            actor,
        )
        logger.info(
            "work_order_created",
            order_id=created.id,
            budget_approved=created.is_budget_approved,
        )
        return created

    def update(self, order_id: str, changes: WorkOrderUpdate, actor: str) -> WorkOrder:
        """
        Apply supervisor edits.

        A differing ``status`` goes through the state machine and is logged
        as a status change rather than a plain update.
        """
        order = self.get(order_id)
        fields = changes.model_dump(exclude_unset=True)
        target = fields.pop("status", None)

        for name in _REQUIRED_FIELDS:
            if name in fields and fields[name] is None:
                raise ValidationError(name, "cannot be cleared")
        for name in ("title", "client_id"):
            if name in fields and not fields[name].strip():
                raise ValidationError(name, "cannot be empty")

        creation = fields.get("creation_date", order.creation_date)
        estimated = fields.get("estimated_completion_date", order.estimated_completion_date)
        if estimated < creation:
            raise ValidationError(
                "estimated_completion_date",
                "estimated completion cannot precede creation",
                estimated,
            )

        status_changed = target is not None and target != order.status
        if status_changed:
            self._check_transition(order, target)

        previous = order.status
        for name, value in fields.items():
            setattr(order, name, value)
        if status_changed:
            self._apply_transition(order, target)
            self._log_status_change(order, previous, actor)
        elif fields:
            self._activity.append(
                ActivityAction.UPDATE,
                ActivityEntity.WORK_ORDER,
                f"Updated OT {order.id}",
                actor,
            )
            logger.info("work_order_updated", order_id=order.id, fields=sorted(fields))
        return order

    def approve_budget(self, order_id: str, actor: str) -> WorkOrder:
        """Record client approval of the quote. Status is left as is."""
        order = self.get(order_id)
        order.is_budget_approved = True
        self._activity.append(
            ActivityAction.UPDATE,
            ActivityEntity.WORK_ORDER,
            f"Budget approved for OT {order.id}",
            actor,
        )
        logger.info("work_order_budget_approved", order_id=order.id)
        return order

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def start(self, order_id: str, actor: str) -> WorkOrder:
        order = self.get(order_id)
        if not order.is_budget_approved:
            raise BudgetNotApprovedError(order.id)
        if order.status != S.PENDING:
            raise InvalidStatusTransitionError(
                "Work order", order.id, order.status.value, S.IN_PROCESS.value
            )
        return self._transition(order, S.IN_PROCESS, actor)

    def pause(self, order_id: str, actor: str) -> WorkOrder:
        order = self.get(order_id)
        if order.status not in (S.PENDING, S.IN_PROCESS):
            raise InvalidStatusTransitionError(
                "Work order", order.id, order.status.value, S.WAITING.value
            )
        return self._transition(order, S.WAITING, actor)

    def resume(self, order_id: str, actor: str) -> WorkOrder:
        order = self.get(order_id)
        if order.status != S.WAITING:
            raise InvalidStatusTransitionError(
                "Work order", order.id, order.status.value, S.IN_PROCESS.value
            )
        return self._transition(order, S.IN_PROCESS, actor)

    def finish(self, order_id: str, final_notes: str | None, actor: str) -> FinishResult:
        order = self.get(order_id)
        if order.status not in (S.IN_PROCESS, S.WAITING):
            raise InvalidStatusTransitionError(
                "Work order", order.id, order.status.value, S.FINISHED.value
            )
        self._check_transition(order, S.FINISHED)

        pending = order.pending_tasks
        if pending:
            logger.warning(
                "work_order_finished_with_pending_tasks",
                order_id=order.id,
                pending_tasks=pending,
            )
        order.final_notes = final_notes
        self._transition(order, S.FINISHED, actor)
        return FinishResult(order=order, pending_tasks=pending)

    def cancel(self, order_id: str, actor: str) -> WorkOrder:
        order = self.get(order_id)
        if order.status.is_terminal:
            raise InvalidStatusTransitionError(
                "Work order", order.id, order.status.value, S.CANCELLED.value
            )
        return self._transition(order, S.CANCELLED, actor)

    # ------------------------------------------------------------------
    # Resources
    # ------------------------------------------------------------------

    def attach_materials(self, order_id: str, usages: list[MaterialUsage]) -> WorkOrder:
        """Append dispatched materials. Stock is handled by the inventory ledger."""
        order = self.get(order_id)
        if order.status.is_terminal:
            raise WorkOrderClosedError(order.id, order.status.value)
        order.materials.extend(usages)
        return order

    def add_labor(self, order_id: str, entry: LaborEntry, actor: str) -> WorkOrder:
        order = self.get(order_id)
        name = self._roster.assign(entry.technician_id, entry.technician_name)
        entry = entry.model_copy(update={"technician_name": name})
        order.labor.append(entry)
        who = entry.technician_name or entry.technician_id
        self._log_update(order, f"Labor: {entry.hours}h by {who}", actor)
        return order

    def add_service(self, order_id: str, entry: ServiceEntry, actor: str) -> WorkOrder:
        order = self.get(order_id)
        if not entry.provider.strip():
            raise ValidationError("provider", "provider is required")
        order.services.append(entry)
        self._log_update(order, f"Service by {entry.provider}", actor)
        return order

    def add_task(self, order_id: str, description: str, actor: str) -> WorkOrderTask:
        order = self.get(order_id)
        if not description.strip():
            raise ValidationError("description", "task description is required")
        task = WorkOrderTask(description=description.strip())
        order.tasks.append(task)
        self._log_update(order, f"Task added: {task.description}", actor)
        return task

    def toggle_task(self, order_id: str, task_id: str, actor: str) -> WorkOrderTask:
        order = self.get(order_id)
        task = next((t for t in order.tasks if t.id == task_id), None)
        if task is None:
            raise TaskNotFoundError(order.id, task_id)

        task.is_completed = not task.is_completed
        task.completed_by = actor if task.is_completed else None
        task.completed_at = self._clock() if task.is_completed else None
        state = "completed" if task.is_completed else "reopened"
        self._log_update(order, f"Task {state}: {task.description}", actor)
        return task

    def add_comment(self, order_id: str, text: str, actor: str, actor_name: str = "") -> Comment:
        order = self.get(order_id)
        if not text.strip():
            raise ValidationError("text", "comment cannot be empty")
        comment = Comment(
            user_id=actor,
            user_name=actor_name,
            text=text.strip(),
            timestamp=self._clock(),
        )
        order.comments.append(comment)
        self._log_update(order, "Comment added", actor)
        return comment

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _check_transition(self, order: WorkOrder, target: WorkOrderStatus) -> None:
        if target not in ALLOWED_TRANSITIONS[order.status]:
            raise InvalidStatusTransitionError(
                "Work order", order.id, order.status.value, target.value
            )
        if target == S.IN_PROCESS and not order.is_budget_approved:
            raise BudgetNotApprovedError(order.id)
        # A never-started order cannot be finished straight from waiting
        if target == S.FINISHED and order.start_date is None:
            raise InvalidStatusTransitionError(
                "Work order", order.id, order.status.value, target.value
            )

    def _apply_transition(self, order: WorkOrder, target: WorkOrderStatus) -> None:
        now = self._clock()
        if target == S.IN_PROCESS and order.start_date is None:
            order.start_date = now
        if target == S.FINISHED:
            order.finished_date = now
        order.status = target

    def _transition(self, order: WorkOrder, target: WorkOrderStatus, actor: str) -> WorkOrder:
        self._check_transition(order, target)
        previous = order.status
        self._apply_transition(order, target)
        self._log_status_change(order, previous, actor)
        return order

    def _log_status_change(self, order: WorkOrder, previous: WorkOrderStatus, actor: str) -> None:
        self._activity.append(
            ActivityAction.STATUS_CHANGE,
            ActivityEntity.WORK_ORDER,
            f'OT {order.id}: status changed from "{previous.value}" to "{order.status.value}"',
            actor,
        )
        logger.info(
            "work_order_status_changed",
            order_id=order.id,
            from_status=previous.value,
            to_status=order.status.value,
        )

    def _log_update(self, order: WorkOrder, details: str, actor: str) -> None:
        self._activity.append(
            ActivityAction.UPDATE,
            ActivityEntity.WORK_ORDER,
            f"OT {order.id}: {details}",
            actor,
        )
