"""Application preferences endpoints."""

from fastapi import APIRouter, Depends

from src.api.dependencies import (
    get_actor,
    get_settings_use_case,
    get_update_settings_use_case,
)
from src.application.dto.responses import SettingsResponse
from src.application.use_cases import GetSettingsUseCase, UpdateSettingsUseCase
from src.core.entities import AppSettingsUpdate

router = APIRouter(prefix="/api/settings", tags=["settings"])


@router.get("", response_model=SettingsResponse)
async def get_app_preferences(
    use_case: GetSettingsUseCase = Depends(get_settings_use_case),
) -> SettingsResponse:
    settings = await use_case.execute()
    return use_case.to_response(settings)


@router.patch("", response_model=SettingsResponse)
async def update_app_preferences(
    changes: AppSettingsUpdate,
    actor: str = Depends(get_actor),
    use_case: UpdateSettingsUseCase = Depends(get_update_settings_use_case),
) -> SettingsResponse:
    settings = await use_case.execute(changes, actor)
    return use_case.to_response(settings)
