"""Undo deletions recorded in the activity log."""

import logging
from collections import defaultdict
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from shared_store.application.interfaces import DocumentRepository
from shared_store.application.services.activity_log import ActivityLog
from shared_store.application.services.backup_ledger import BackupLedger
from shared_store.domain.entities import ActivityAction, ActivityEntry, TriggerAction
from shared_store.domain.exceptions import NothingToRestoreError

logger = logging.getLogger(__name__)


@dataclass
class ActivityRestoreResult:
    restored_count: int
    message: str


class ActivityRestoreService:
    """Brings deleted items back into the collection they were deleted from.

    An item that is gone is appended again from the logged copy; an item
    still present but soft-deleted has its ``deleted`` flag cleared. Like a
    backup restore, this bypasses the loss-prevention guard and snapshots
    the live value as ``pre-restore`` first.
    """

    def __init__(self, activity: ActivityLog, documents: DocumentRepository, ledger: BackupLedger):
        self._activity = activity
        self._documents = documents
        self._ledger = ledger

    async def restore(
        self, activity_ids: Sequence[int], user_name: str | None = None
    ) -> ActivityRestoreResult:
        entries = [e for e in await self._activity.get_many(activity_ids) if e.is_restorable]
        if not entries:
            raise NothingToRestoreError(list(activity_ids))

        by_key: dict[str, list[ActivityEntry]] = defaultdict(list)
        for entry in entries:
            by_key[entry.data_key].append(entry)

        revived: list[ActivityEntry] = []
        for data_key, group in by_key.items():
            revived.extend(await self._restore_into(data_key, group, user_name))

        await self._activity.record(revived)
        await self._activity.mark_restored([e.id for e in entries])

        logger.info("Restored %d item(s) from activity log (user=%s)", len(revived), user_name)
        return ActivityRestoreResult(
            restored_count=len(revived),
            message=f"Restored {len(revived)} item(s)",
        )

    async def _restore_into(
        self, data_key: str, entries: list[ActivityEntry], user_name: str | None
    ) -> list[ActivityEntry]:
        document = await self._documents.get(data_key)
        live: list[Any] = document.data if document and isinstance(document.data, list) else []
        items = list(live)

        positions = {
            str(item.get("id")): index
            for index, item in enumerate(items)
            if isinstance(item, dict) and item.get("id")
        }
        revived: list[ActivityEntry] = []
        for entry in entries:
            index = positions.get(entry.asset_id)
            if index is None:
                item = _undeleted(entry.asset_data)
                positions[entry.asset_id] = len(items)
                items.append(item)
            elif items[index].get("deleted"):
                item = _undeleted(items[index])
                items[index] = item
            else:
                continue
            revived.append(ActivityEntry.for_item(ActivityAction.RESTORE, item, user_name, data_key))

        if not revived:
            return revived
        if live:
            await self._ledger.snapshot(data_key, live, TriggerAction.PRE_RESTORE, user_name)
        await self._documents.upsert(data_key, items)
        return revived


def _undeleted(item: dict[str, Any]) -> dict[str, Any]:
    restored = {k: v for k, v in item.items() if k != "deletedAt"}
    restored["deleted"] = False
    return restored
