"""Activity log endpoints — client-reported events, history, stats and undo."""

from fastapi import APIRouter, Depends, HTTPException, Query, status

from shared_store.config import get_settings
from shared_store.application.schemas import (
    ActivityLogRequest,
    ActivityResponse,
    ActivityRestoreRequest,
    ActivityRestoreResponse,
    ActivityStatsResponse,
    AssetOriginResponse,
)
from shared_store.application.services import ActivityLog, ActivityRestoreService
from shared_store.domain.entities import ActivityEntry
from shared_store.domain.exceptions import NothingToRestoreError
from shared_store.infrastructure.dependencies import get_activity_log, get_activity_restore_service

router = APIRouter(prefix="/activity-log", tags=["Activity Log"])


@router.post("", response_model=ActivityResponse, status_code=status.HTTP_201_CREATED)
async def log_activity(
    body: ActivityLogRequest,
    activity: ActivityLog = Depends(get_activity_log),
) -> ActivityResponse:
    entry = await activity.log(ActivityEntry(**body.model_dump()))
    return ActivityResponse.model_validate(entry)


@router.get("", response_model=list[ActivityResponse])
async def list_activity(
    limit: int | None = Query(None, ge=1),
    cloud_id: str | None = Query(None, alias="cloudId"),
    activity: ActivityLog = Depends(get_activity_log),
) -> list[ActivityResponse]:
    """Newest first, optionally for a single cloud."""
    settings = get_settings()
    effective = min(limit or settings.activity_list_limit, settings.activity_list_max)
    entries = await activity.recent(limit=effective, cloud_id=cloud_id)
    return [ActivityResponse.model_validate(e) for e in entries]


@router.get("/stats", response_model=ActivityStatsResponse)
async def activity_stats(
    cloud_id: str | None = Query(None, alias="cloudId"),
    activity: ActivityLog = Depends(get_activity_log),
) -> ActivityStatsResponse:
    return ActivityStatsResponse.model_validate(await activity.stats(cloud_id))


@router.get("/template-metadata", response_model=dict[str, AssetOriginResponse])
async def template_metadata(
    cloud_id: str | None = Query(None, alias="cloudId"),
    activity: ActivityLog = Depends(get_activity_log),
) -> dict[str, AssetOriginResponse]:
    """Who added each template and when, keyed by template id."""
    origins = await activity.asset_origins(cloud_id)
    return {asset_id: AssetOriginResponse.model_validate(e) for asset_id, e in origins.items()}


@router.post("/restore", response_model=ActivityRestoreResponse)
async def restore_from_activity(
    body: ActivityRestoreRequest,
    service: ActivityRestoreService = Depends(get_activity_restore_service),
) -> ActivityRestoreResponse:
    """Bring back the items removed by the given delete activities."""
    try:
        result = await service.restore(body.activity_ids, body.user_name)
    except NothingToRestoreError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return ActivityRestoreResponse.model_validate(result)
