"""Activity log: who added, changed, deleted or restored which item."""

import logging
from collections.abc import Sequence
from typing import Any

from shared_store.application.interfaces import ActivityRepository
from shared_store.domain.entities import (
    ADDED_ACTIONS,
    REUSED_ACTION,
    ActivityAction,
    ActivityEntry,
    ActivityStats,
)

logger = logging.getLogger(__name__)


def diff_items(current: Any, incoming: Any) -> list[tuple[ActivityAction, dict[str, Any]]]:
    """Per-item changes between two versions of an item collection.

    Items are matched by ``id``; items without one are ignored. A flip of
    the ``deleted`` flag is a soft delete or a restore, an item that
    disappears is deleted for good.
    """
    before = _by_id(current)
    after = _by_id(incoming)

    changes: list[tuple[ActivityAction, dict[str, Any]]] = []
    for item_id, item in after.items():
        old = before.get(item_id)
        if old is None:
            changes.append((ActivityAction.ADD, item))
            continue
        if old == item:
            continue
        was_deleted, is_deleted = bool(old.get("deleted")), bool(item.get("deleted"))
        if is_deleted and not was_deleted:
            changes.append((ActivityAction.DELETE, item))
        elif was_deleted and not is_deleted:
            changes.append((ActivityAction.RESTORE, item))
        elif not is_deleted:
            changes.append((ActivityAction.UPDATE, item))

    for item_id, old in before.items():
        if item_id not in after:
            changes.append((ActivityAction.DELETE_FOREVER, old))
    return changes


def _by_id(value: Any) -> dict[str, dict[str, Any]]:
    if not isinstance(value, list):
        return {}
    return {
        str(item["id"]): item
        for item in value
        if isinstance(item, dict) and item.get("id")
    }


class ActivityLog:
    """Records and reads activity entries. Depends on the repository port (DI).

    ``record`` and ``record_changes`` never raise: the log describes writes,
    it must not be able to fail them.
    """

    def __init__(self, repository: ActivityRepository):
        self._repository = repository

    async def record(self, entries: Sequence[ActivityEntry]) -> int:
        if not entries:
            return 0
        try:
            saved = await self._repository.add_many(entries)
        except Exception:
            logger.exception("Failed to record %d activity entries", len(entries))
            return 0
        return len(saved)

    async def record_changes(
        self,
        data_key: str,
        current: Any,
        incoming: Any,
        user_name: str | None = None,
    ) -> int:
        entries = [
            ActivityEntry.for_item(action, item, user_name, data_key)
            for action, item in diff_items(current, incoming)
        ]
        recorded = await self.record(entries)
        if recorded:
            logger.debug("Recorded %d activity entries for %s", recorded, data_key)
        return recorded

    async def log(self, entry: ActivityEntry) -> ActivityEntry:
        """Store an entry reported by a client. Failures propagate."""
        [saved] = await self._repository.add_many([entry])
        return saved

    async def recent(self, limit: int = 100, cloud_id: str | None = None) -> list[ActivityEntry]:
        return await self._repository.list_recent(limit=limit, cloud_id=cloud_id)

    async def get_many(self, activity_ids: Sequence[int]) -> list[ActivityEntry]:
        return await self._repository.get_many(activity_ids)

    async def mark_restored(self, activity_ids: Sequence[int]) -> int:
        return await self._repository.mark_restored(activity_ids)

    async def stats(self, cloud_id: str | None = None) -> ActivityStats:
        counts = await self._repository.count_by_action(cloud_id)
        return ActivityStats(
            components_added=sum(counts.get(action, 0) for action in ADDED_ACTIONS),
            components_reused=counts.get(REUSED_ACTION, 0),
            designers_engaged=await self._repository.count_users(cloud_id),
        )

    async def asset_origins(self, cloud_id: str | None = None) -> dict[str, ActivityEntry]:
        """The latest ``add`` entry per asset id: who created it and when."""
        entries = await self._repository.latest_per_asset(ActivityAction.ADD.value, cloud_id)
        return {e.asset_id: e for e in entries}
