"""Application preferences and the activity feed."""

from src.application.dto.responses import ActivityListResponse, SettingsResponse
from src.application.use_cases.base import LedgerUseCase
from src.config import get_logger
from src.core.entities import (
    ActivityAction,
    ActivityEntity,
    ActivityLogEntry,
    AppSettings,
    AppSettingsUpdate,
)
from src.core.entities.ledger_state import CollectionKey

logger = get_logger(__name__)


class GetSettingsUseCase(LedgerUseCase):
    async def execute(self) -> AppSettings:
        ledgers = await self._load([CollectionKey.SETTINGS])
        return ledgers.state.settings

    def to_response(self, settings: AppSettings) -> SettingsResponse:
        return SettingsResponse(**settings.model_dump())


class UpdateSettingsUseCase(LedgerUseCase):
    """
    Apply a partial preferences edit.

    Theme switches are cosmetic and are not written to the activity log.
    """

    async def execute(self, changes: AppSettingsUpdate, actor: str) -> AppSettings:
        fields = {k: v for k, v in changes.model_dump(exclude_unset=True).items() if v is not None}

        ledgers = await self._load([CollectionKey.SETTINGS, CollectionKey.ACTIVITY_LOG])
        current = ledgers.state.settings
        changed = {k: v for k, v in fields.items() if getattr(current, k) != v}
        if not changed:
            return current

        ledgers.state.settings = current.model_copy(update=changed)
        if set(changed) != {"theme"}:
            ledgers.activity.append(
                ActivityAction.UPDATE,
                ActivityEntity.SYSTEM,
                "Settings updated: " + ", ".join(sorted(changed)),
                actor,
            )
        await self._commit(ledgers, CollectionKey.SETTINGS)
        logger.info("settings_updated", fields=sorted(changed))
        return ledgers.state.settings

    def to_response(self, settings: AppSettings) -> SettingsResponse:
        return SettingsResponse(**settings.model_dump())


class ListActivityUseCase(LedgerUseCase):
    """Most recent audit entries, newest first."""

    async def execute(self, limit: int | None = None) -> list[ActivityLogEntry]:
        ledgers = await self._load([CollectionKey.ACTIVITY_LOG])
        entries = ledgers.activity.entries
        return entries[:limit] if limit else list(entries)

    def to_response(self, entries: list[ActivityLogEntry]) -> ActivityListResponse:
        return ActivityListResponse(items=entries, total=len(entries))
