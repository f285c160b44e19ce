"""Helpers shared by ledger entities."""

from collections.abc import Callable, Collection
from datetime import UTC, datetime
from typing import Annotated
from uuid import uuid4

from pydantic import AfterValidator

Clock = Callable[[], datetime]


def ensure_utc(value: datetime) -> datetime:
    """Treat naive datetimes as UTC so they compare with ledger timestamps."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


Timestamp = Annotated[datetime, AfterValidator(ensure_utc)]


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(UTC)


def new_id() -> str:
    """Short random identifier for nested records (tasks, comments, labor)."""
    return uuid4().hex[:12]


def sequence_id(
    prefix: str,
    year: int,
    existing: int,
    taken: Collection[str] = (),
) -> str:
    """
    Build a human-readable document number such as ``RCP-2024-1002``.

    The counter starts at 1001 and keeps its last four digits. Numbers
    already present in ``taken`` are skipped.
    """
    counter = existing + 1001
    candidate = f"{prefix}-{year}-{str(counter)[-4:]}"
    while candidate in taken:
        counter += 1
        candidate = f"{prefix}-{year}-{str(counter)[-4:]}"
    return candidate
