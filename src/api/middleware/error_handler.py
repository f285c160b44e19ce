"""
Error handling middleware.

Standardizes all API error responses to include:
- error_code: machine-readable identifier
- message: human-readable description
- hint: suggested recovery action
"""

import traceback
from collections.abc import Awaitable, Callable

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from src.application.dto.responses import ErrorResponse
from src.config import get_logger
from src.core.exceptions import (
    LedgerError,
    NotFoundError,
    PreconditionViolationError,
    StorageError,
    ValidationError,
)

logger = get_logger(__name__)


# Map exceptions to HTTP status codes (first match wins)
EXCEPTION_STATUS_MAP: dict[type[Exception], int] = {
    NotFoundError: status.HTTP_404_NOT_FOUND,
    PreconditionViolationError: status.HTTP_409_CONFLICT,
    ValidationError: status.HTTP_400_BAD_REQUEST,
    StorageError: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ValueError: status.HTTP_400_BAD_REQUEST,
    KeyError: status.HTTP_404_NOT_FOUND,
}

# Hint messages per error code / exception type
HINT_MAP: dict[str, str] = {
    "WORK_ORDER_NOT_FOUND": "Check the OT number and try GET /api/work-orders to list orders.",
    "INVENTORY_ITEM_NOT_FOUND": "Check the item ID and try GET /api/inventory to list items.",
    "TOOL_NOT_FOUND": "Check the tool ID and try GET /api/tools to list the crib.",
    "LOAN_NOT_FOUND": "Check the loan ID and try GET /api/tools/loans to list loans.",
    "TASK_NOT_FOUND": "Check the task ID on GET /api/work-orders/{id}.",
    "TECHNICIAN_NOT_FOUND": "Check the technician ID and try GET /api/technicians.",
    "COMPONENT_NOT_FOUND": "Check the component ID and try GET /api/components.",
    "BUDGET_NOT_APPROVED": "Approve the budget with POST /api/work-orders/{id}/approve-budget first.",
    "INVALID_STATUS_TRANSITION": "The current status does not allow this step. Reload and retry.",
    "WORK_ORDER_CLOSED": "Finished and cancelled orders accept no further materials.",
    "TOOL_NOT_AVAILABLE": "Return the tool or receive it back from maintenance first.",
    "LOAN_NOT_ACTIVE": "This loan was already returned.",
    "TECHNICIAN_INACTIVE": "Reactivate the technician or assign someone else.",
    "DUPLICATE_ENTITY": "Use a different identifier or edit the existing record.",
    "VALIDATION_ERROR": "Check the request body against the API schema.",
    "DATABASE_ERROR": "A database operation failed. Check server logs.",
    "ValueError": "A parameter value is invalid. Check the request.",
    "KeyError": "The requested key was not found.",
}

# Default hints by HTTP status code
STATUS_HINTS: dict[int, str] = {
    400: "Check the request parameters and body.",
    404: "The requested resource was not found. Verify the ID.",
    409: "The record is not in a state that allows this operation.",
    422: "The request could not be processed. Check the input format.",
    500: "An internal error occurred. Check server logs.",
    503: "The service is temporarily unavailable. Retry later.",
}


def _get_hint(error_code: str, status_code: int) -> str:
    """Resolve hint from error code, falling back to status-based hint."""
    return HINT_MAP.get(error_code) or STATUS_HINTS.get(status_code, "")


def _status_for(exc: Exception) -> int:
    for exc_type, code in EXCEPTION_STATUS_MAP.items():
        if isinstance(exc, exc_type):
            return code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def build_error_response(request: Request, exc: Exception) -> JSONResponse:
    """Convert exception to standardized JSON response."""
    status_code = _status_for(exc)

    # Get error code: prefer LedgerError.code, fall back to class name
    if isinstance(exc, LedgerError):
        error_code = exc.code
        message = exc.message
    else:
        error_code = exc.__class__.__name__
        message = str(exc)

    request_id = getattr(request.state, "request_id", None)

    if status_code >= 500:
        logger.error(
            "unhandled_exception",
            request_id=request_id,
            path=request.url.path,
            error_type=error_code,
            error=str(exc),
            traceback=traceback.format_exc(),
        )
    else:
        logger.warning(
            "request_rejected",
            request_id=request_id,
            path=request.url.path,
            error_type=error_code,
            error=message,
        )

    error_response = ErrorResponse(
        error_code=error_code,
        message=message,
        hint=_get_hint(error_code, status_code),
        path=request.url.path,
    )

    return JSONResponse(
        status_code=status_code,
        content=error_response.model_dump(mode="json"),
    )


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """
    Global error handling middleware.

    Converts exceptions that escaped the route handlers to standardized
    JSON error responses.
    """

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        """Handle request with error catching."""
        try:
            return await call_next(request)

        except Exception as e:
            return build_error_response(request, e)


def setup_exception_handlers(app: FastAPI) -> None:
    """Set up FastAPI exception handlers."""
    from fastapi.exceptions import RequestValidationError
    from starlette.exceptions import HTTPException

    @app.exception_handler(LedgerError)
    async def ledger_exception_handler(
        request: Request,
        exc: LedgerError,
    ) -> JSONResponse:
        """Handle domain errors raised by the ledgers."""
        return build_error_response(request, exc)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        """Handle Pydantic validation errors."""
        errors = []
        for error in exc.errors():
            loc = " -> ".join(str(part) for part in error["loc"])
            errors.append(f"{loc}: {error['msg']}")

        return JSONResponse(
            status_code=422,
            content=ErrorResponse(
                error_code="VALIDATION_ERROR",
                message="Request validation failed",
                hint="Check the request body fields and types.",
                detail="; ".join(errors),
                path=request.url.path,
            ).model_dump(mode="json"),
        )

    @app.exception_handler(HTTPException)
    async def http_exception_handler(
        request: Request,
        exc: HTTPException,
    ) -> JSONResponse:
        """Handle HTTP exceptions with standardized format."""
        error_code = _infer_error_code(exc.status_code, exc.detail or "")
        hint = _get_hint(error_code, exc.status_code)

        return JSONResponse(
            status_code=exc.status_code,
            content=ErrorResponse(
                error_code=error_code,
                message=exc.detail or "An error occurred",
                hint=hint,
                path=request.url.path,
            ).model_dump(mode="json"),
        )


def _infer_error_code(status_code: int, detail: str) -> str:
    """Infer a machine-readable error code from HTTPException detail."""
    detail_lower = detail.lower()

    if status_code == 404:
        if "work order" in detail_lower:
            return "WORK_ORDER_NOT_FOUND"
        if "item" in detail_lower:
            return "INVENTORY_ITEM_NOT_FOUND"
        if "loan" in detail_lower:
            return "LOAN_NOT_FOUND"
        if "tool" in detail_lower:
            return "TOOL_NOT_FOUND"
        return "NOT_FOUND"

    if status_code == 400:
        return "BAD_REQUEST"

    if status_code == 409:
        return "CONFLICT"

    if status_code == 422:
        return "UNPROCESSABLE_ENTITY"

    return "HTTP_ERROR"
