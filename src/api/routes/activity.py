"""Activity log endpoints."""

from fastapi import APIRouter, Depends, Query

from src.api.dependencies import get_list_activity_use_case
from src.application.dto.responses import ActivityListResponse
from src.application.use_cases import ListActivityUseCase

router = APIRouter(prefix="/api/activity", tags=["activity"])


@router.get("", response_model=ActivityListResponse)
async def list_activity(
    limit: int | None = Query(default=None, ge=1),
    use_case: ListActivityUseCase = Depends(get_list_activity_use_case),
) -> ActivityListResponse:
    """Most recent audit entries, newest first."""
    entries = await use_case.execute(limit=limit)
    return use_case.to_response(entries)
