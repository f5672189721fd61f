"""Backup ledger endpoints — browse, preview, restore and manual snapshots."""

from fastapi import APIRouter, Depends, HTTPException, Query, status

from shared_store.config import get_settings
from shared_store.application.schemas import (
    BackupDetailResponse,
    BackupKeySummaryResponse,
    BackupSummaryResponse,
    ManualBackupRequest,
)
from shared_store.application.services import RestoreService
from shared_store.domain.exceptions import NoDataError, NotFoundError
from shared_store.infrastructure.dependencies import get_restore_service

router = APIRouter(tags=["Backups"])


@router.get("/backups", response_model=list[BackupKeySummaryResponse])
async def list_backup_keys(
    service: RestoreService = Depends(get_restore_service),
) -> list[BackupKeySummaryResponse]:
    """Per-key backup counts, most recently backed-up key first."""
    summaries = await service.list_backup_keys()
    return [BackupKeySummaryResponse.model_validate(s) for s in summaries]


@router.get("/data/{key}/backups", response_model=list[BackupSummaryResponse])
async def list_backups(
    key: str,
    limit: int | None = Query(None, ge=1),
    service: RestoreService = Depends(get_restore_service),
) -> list[BackupSummaryResponse]:
    """Backup metadata for a key, newest first. Payloads are not included."""
    settings = get_settings()
    effective = min(limit or settings.backup_list_limit, settings.backup_list_max)
    entries = await service.list_backups(key, limit=effective)
    return [BackupSummaryResponse.model_validate(e) for e in entries]


@router.get("/data/{key}/backups/{backup_id}", response_model=BackupDetailResponse)
async def get_backup(
    key: str,
    backup_id: int,
    service: RestoreService = Depends(get_restore_service),
) -> BackupDetailResponse:
    """Full entry including the payload, for preview before a restore."""
    try:
        entry = await service.get_backup(backup_id, data_key=key)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return BackupDetailResponse.model_validate(entry)


@router.post("/data/{key}/backups/{backup_id}/restore", response_model=BackupSummaryResponse)
async def restore_backup(
    key: str,
    backup_id: int,
    merge: bool = False,
    service: RestoreService = Depends(get_restore_service),
) -> BackupSummaryResponse:
    """Replace the live value with a backup, or merge it in with ``?merge=true``."""
    try:
        entry = await service.restore(backup_id, data_key=key, merge=merge)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return BackupSummaryResponse.model_validate(entry)


@router.post(
    "/data/{key}/backups",
    response_model=BackupSummaryResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_manual_backup(
    key: str,
    body: ManualBackupRequest | None = None,
    service: RestoreService = Depends(get_restore_service),
) -> BackupSummaryResponse:
    """Snapshot the current value on demand."""
    actor = body.actor if body else None
    try:
        entry = await service.create_manual(key, actor=actor)
    except NoDataError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return BackupSummaryResponse.model_validate(entry)
