"""Restore engine and backup browsing for shared documents and saved items."""

import logging
from typing import Any

from shared_store.application.interfaces import CollectionPolicyProvider, DocumentRepository
from shared_store.application.services.backup_ledger import BackupLedger
from shared_store.application.services.backup_merge import merge_backup_data
from shared_store.application.services.saved_items_service import SavedItemsService
from shared_store.domain.entities import (
    BackupEntry,
    BackupKeySummary,
    TriggerAction,
    is_empty,
    policy_key,
    saved_items_owner,
)
from shared_store.domain.exceptions import NoDataError, NotFoundError, StorageUnavailableError

logger = logging.getLogger(__name__)


class RestoreService:
    """Lists, previews, restores and manually creates backups.

    A restore bypasses the loss-prevention guard: it is an explicit request
    to move to a historical state, possibly a smaller one. The live value is
    snapshotted first as ``pre-restore`` so the restore can itself be undone.

    Keys of the form ``saved_items:<userId>`` read and write that user's
    saved items instead of a shared document.
    """

    def __init__(
        self,
        documents: DocumentRepository,
        ledger: BackupLedger,
        policies: CollectionPolicyProvider,
        saved_items: SavedItemsService,
    ):
        self._documents = documents
        self._ledger = ledger
        self._policies = policies
        self._saved_items = saved_items

    async def list_backups(self, data_key: str, limit: int = 20) -> list[BackupEntry]:
        return await self._ledger.list_entries(data_key, limit=limit)

    async def list_backup_keys(self) -> list[BackupKeySummary]:
        return await self._ledger.summarize()

    async def get_backup(self, backup_id: int, data_key: str | None = None) -> BackupEntry:
        """Fetch an entry with its payload.

        When ``data_key`` is given, an entry belonging to another key is
        reported as not found.
        """
        entry = await self._ledger.get(backup_id)
        if entry is None or (data_key is not None and entry.data_key != data_key):
            raise NotFoundError("Backup", backup_id)
        return entry

    async def restore(
        self,
        backup_id: int,
        data_key: str | None = None,
        merge: bool = False,
    ) -> BackupEntry:
        entry = await self.get_backup(backup_id, data_key)

        current = await self._read(entry.data_key)
        if not is_empty(current):
            await self._ledger.snapshot(
                entry.data_key, current, TriggerAction.PRE_RESTORE, None
            )

        payload = entry.payload
        if merge and not is_empty(current):
            policy = self._policies.policy_for(policy_key(entry.data_key))
            payload = merge_backup_data(current, entry.payload, policy.merge_identity)

        await self._write(entry.data_key, payload)
        logger.info(
            "Restored %s from backup #%s (merge=%s)", entry.data_key, backup_id, merge
        )
        return entry

    async def create_manual(self, data_key: str, actor: str | None = None) -> BackupEntry:
        current = await self._read(data_key)
        if is_empty(current):
            raise NoDataError(data_key)

        outcome = await self._ledger.snapshot(
            data_key, current, TriggerAction.MANUAL, actor
        )
        if not outcome.ok:
            raise StorageUnavailableError(f"Manual backup of '{data_key}' failed: {outcome.error}")

        await self._ledger.prune(data_key, self._policies.policy_for(policy_key(data_key)).retention)
        return outcome.entry

    async def _read(self, data_key: str) -> Any | None:
        owner = saved_items_owner(data_key)
        if owner is not None:
            return await self._saved_items.get(owner)
        document = await self._documents.get(data_key)
        return document.data if document else None

    async def _write(self, data_key: str, payload: Any) -> None:
        owner = saved_items_owner(data_key)
        if owner is not None:
            await self._saved_items.store(owner, payload if isinstance(payload, list) else [])
        else:
            await self._documents.upsert(data_key, payload)
