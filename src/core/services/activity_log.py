"""Append-only audit trail shared by every ledger."""

from src.config import get_logger
from src.core.entities.activity import ActivityAction, ActivityEntity, ActivityLogEntry
from src.core.entities.common import Clock, utc_now

logger = get_logger(__name__)

DEFAULT_LIMIT = 50


class ActivityLog:
    """
    Bounded audit trail over a list owned by ``LedgerState``.

    Entries are kept newest first and trimmed to the most recent ``limit``.
    Appending never fails.
    """

    def __init__(
        self,
        entries: list[ActivityLogEntry],
        limit: int = DEFAULT_LIMIT,
        clock: Clock = utc_now,
    ) -> None:
        self._entries = entries
        self._limit = limit
        self._clock = clock

    def append(
        self,
        action: ActivityAction,
        entity: ActivityEntity,
        details: str,
        actor: str,
    ) -> ActivityLogEntry:
        entry = ActivityLogEntry(
            timestamp=self._clock(),
            action=action,
            entity=entity,
            details=details,
            user_id=actor,
        )
        self._entries.insert(0, entry)
        del self._entries[self._limit :]

        logger.debug(
            "activity_logged",
            action=action.value,
            entity=entity.value,
            details=details,
            user_id=actor,
        )
        return entry

    @property
    def entries(self) -> list[ActivityLogEntry]:
        return list(self._entries)
