"""Backup ledger of append-only snapshots taken before every change."""

import logging
from typing import Any

from shared_store.application.interfaces import BackupRepository
from shared_store.domain.entities import (
    BackupEntry,
    BackupKeySummary,
    BackupOutcome,
    TriggerAction,
)

logger = logging.getLogger(__name__)


class BackupLedger:
    """Records, lists and prunes snapshots. Depends on the repository port (DI).

    ``snapshot`` and ``prune`` never raise: losing a backup must not block
    the primary write it is protecting, so failures are logged and reported
    through the return value instead.
    """

    def __init__(self, repository: BackupRepository, default_retention: int = 50):
        self._repository = repository
        self._default_retention = default_retention

    async def snapshot(
        self,
        data_key: str,
        payload: Any,
        trigger_action: TriggerAction,
        actor: str | None = None,
    ) -> BackupOutcome:
        entry = BackupEntry.capture(data_key, payload, trigger_action, actor)
        try:
            saved = await self._repository.add(entry)
        except Exception as exc:
            logger.exception("Failed to create backup for %s (%s)", data_key, trigger_action.value)
            return BackupOutcome.failure(f"{type(exc).__name__}: {exc}")

        logger.info(
            "Backup #%s created: %s (%d items) - %s",
            saved.id, data_key, saved.item_count, trigger_action.value,
        )
        return BackupOutcome.success(saved)

    async def list_entries(self, data_key: str, limit: int = 20) -> list[BackupEntry]:
        return await self._repository.list_for_key(data_key, limit=limit)

    async def get(self, backup_id: int) -> BackupEntry | None:
        return await self._repository.get_by_id(backup_id)

    async def prune(self, data_key: str, keep_count: int | None = None) -> int:
        keep = self._default_retention if keep_count is None else keep_count
        try:
            deleted = await self._repository.prune(data_key, keep)
        except Exception:
            logger.exception("Failed to prune backups for %s", data_key)
            return 0
        if deleted:
            logger.info("Pruned %d old backups for %s (keeping %d)", deleted, data_key, keep)
        return deleted

    async def summarize(self) -> list[BackupKeySummary]:
        return await self._repository.summarize_keys()
