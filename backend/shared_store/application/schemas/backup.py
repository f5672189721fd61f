"""Pydantic DTOs for backup listing, preview, restore and manual snapshots."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from shared_store.domain.entities import TriggerAction

_CAMEL = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class BackupSummaryResponse(BaseModel):
    """Backup metadata without the payload."""

    model_config = _CAMEL

    id: int
    data_key: str
    item_count: int
    trigger_action: TriggerAction
    actor: str | None = None
    created_at: datetime


class BackupDetailResponse(BackupSummaryResponse):
    """Full entry including the payload, for preview before restore."""

    payload: Any = None


class ManualBackupRequest(BaseModel):
    actor: str | None = Field(None, max_length=100)


class BackupKeySummaryResponse(BaseModel):
    model_config = _CAMEL

    data_key: str
    backup_count: int
    latest_backup: datetime | None = None
