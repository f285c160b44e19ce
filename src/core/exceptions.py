"""
Domain exceptions for the shop ledger.

Provides specific exception types for different error scenarios.
"""

from typing import Any


class LedgerError(Exception):
    """Base exception for all ledger errors."""

    def __init__(
        self,
        message: str,
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict:
        """Convert to dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


# Lookup Exceptions
class NotFoundError(LedgerError):
    """Base exception for missing entities."""

    pass


class WorkOrderNotFoundError(NotFoundError):
    """Work order not found."""

    def __init__(self, order_id: str):
        super().__init__(
            f"Work order not found: {order_id}",
            code="WORK_ORDER_NOT_FOUND",
            details={"order_id": order_id},
        )


class InventoryItemNotFoundError(NotFoundError):
    """Inventory item not found."""

    def __init__(self, item_id: str):
        super().__init__(
            f"Inventory item not found: {item_id}",
            code="INVENTORY_ITEM_NOT_FOUND",
            details={"item_id": item_id},
        )


class ToolNotFoundError(NotFoundError):
    """Tool not found in the crib."""

    def __init__(self, tool_id: str):
        super().__init__(
            f"Tool not found: {tool_id}",
            code="TOOL_NOT_FOUND",
            details={"tool_id": tool_id},
        )


class LoanNotFoundError(NotFoundError):
    """Tool loan not found."""

    def __init__(self, loan_id: str):
        super().__init__(
            f"Tool loan not found: {loan_id}",
            code="LOAN_NOT_FOUND",
            details={"loan_id": loan_id},
        )


class TaskNotFoundError(NotFoundError):
    """Checklist task not found on a work order."""

    def __init__(self, order_id: str, task_id: str):
        super().__init__(
            f"Task {task_id} not found on work order {order_id}",
            code="TASK_NOT_FOUND",
            details={"order_id": order_id, "task_id": task_id},
        )


class TechnicianNotFoundError(NotFoundError):
    """Technician not on the shop roster."""

    def __init__(self, technician_id: str):
        super().__init__(
            f"Technician not found: {technician_id}",
            code="TECHNICIAN_NOT_FOUND",
            details={"technician_id": technician_id},
        )


class ComponentNotFoundError(NotFoundError):
    """Component not in the equipment catalog."""

    def __init__(self, component_id: str):
        super().__init__(
            f"Component not found: {component_id}",
            code="COMPONENT_NOT_FOUND",
            details={"component_id": component_id},
        )


# Precondition Exceptions
class PreconditionViolationError(LedgerError):
    """An operation was invoked on an entity in the wrong state.

    Raised before any mutation, so the operation is a no-op.
    """

    pass


class BudgetNotApprovedError(PreconditionViolationError):
    """Work cannot start until the client approves the quote."""

    def __init__(self, order_id: str):
        super().__init__(
            f"Work order {order_id} cannot start: budget not approved",
            code="BUDGET_NOT_APPROVED",
            details={"order_id": order_id},
        )


class InvalidStatusTransitionError(PreconditionViolationError):
    """Requested status transition is not allowed by the state machine."""

    def __init__(self, entity: str, entity_id: str, current: str, target: str):
        super().__init__(
            f"{entity} {entity_id} cannot move from '{current}' to '{target}'",
            code="INVALID_STATUS_TRANSITION",
            details={
                "entity": entity,
                "entity_id": entity_id,
                "current": current,
                "target": target,
            },
        )


class WorkOrderClosedError(PreconditionViolationError):
    """Work order is finished or cancelled and accepts no consumption."""

    def __init__(self, order_id: str, status: str):
        super().__init__(
            f"Work order {order_id} is closed ({status})",
            code="WORK_ORDER_CLOSED",
            details={"order_id": order_id, "status": status},
        )


class TechnicianInactiveError(PreconditionViolationError):
    """Technician is on the roster but no longer active."""

    def __init__(self, technician_id: str):
        super().__init__(
            f"Technician {technician_id} is inactive",
            code="TECHNICIAN_INACTIVE",
            details={"technician_id": technician_id},
        )


class ToolNotAvailableError(PreconditionViolationError):
    """Tool is not in a status that allows the requested operation."""

    def __init__(self, tool_id: str, status: str, required: list[str]):
        super().__init__(
            f"Tool {tool_id} is '{status}', expected one of: {', '.join(required)}",
            code="TOOL_NOT_AVAILABLE",
            details={"tool_id": tool_id, "status": status, "required": required},
        )


class LoanNotActiveError(PreconditionViolationError):
    """Loan was already returned."""

    def __init__(self, loan_id: str):
        super().__init__(
            f"Tool loan {loan_id} is not active",
            code="LOAN_NOT_ACTIVE",
            details={"loan_id": loan_id},
        )


# Validation Exceptions
class ValidationError(LedgerError):
    """Input validation failed."""

    def __init__(self, field: str, message: str, value: Any = None):
        super().__init__(
            f"Validation error for '{field}': {message}",
            code="VALIDATION_ERROR",
            details={
                "field": field,
                "message": message,
                "value": str(value)[:100] if value is not None else None,
            },
        )


class DuplicateEntityError(ValidationError):
    """An entity with the same unique key already exists."""

    def __init__(self, entity: str, field: str, value: str):
        super().__init__(
            field=field,
            message=f"{entity} with {field} '{value}' already exists",
            value=value,
        )
        self.code = "DUPLICATE_ENTITY"
        self.details["entity"] = entity


# Storage Exceptions
class StorageError(LedgerError):
    """Base exception for storage operations."""

    pass


class DatabaseError(StorageError):
    """Database operation failed."""

    def __init__(self, operation: str, error: str):
        super().__init__(
            f"Database error during {operation}: {error}",
            code="DATABASE_ERROR",
            details={"operation": operation, "error": error},
        )
