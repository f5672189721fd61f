"""Application service for a user's saved items.

Saved items live on the user's preference record, but every write goes
through the same validate → guard → snapshot → write → prune path as a
shared document, with backups filed under ``saved_items:<userId>``.
"""

import logging
from typing import Any

from shared_store.application.interfaces import CollectionPolicyProvider, PreferenceRepository
from shared_store.application.services.backup_ledger import BackupLedger
from shared_store.application.services.document_validator import DocumentValidator
from shared_store.application.services.loss_prevention_guard import LossPreventionGuard
from shared_store.application.services.shared_data_service import WriteResult
from shared_store.domain.entities import SAVED_ITEMS, PreferenceRecord, saved_items_key
from shared_store.domain.exceptions import RejectedByGuardError

logger = logging.getLogger(__name__)


class SavedItemsService:
    def __init__(
        self,
        repository: PreferenceRepository,
        ledger: BackupLedger,
        policies: CollectionPolicyProvider,
        guard: LossPreventionGuard | None = None,
        validator: DocumentValidator | None = None,
    ):
        self._repository = repository
        self._ledger = ledger
        self._policies = policies
        self._guard = guard or LossPreventionGuard()
        self._validator = validator or DocumentValidator()

    async def get(self, user_id: str) -> list[dict[str, Any]]:
        """The user's items; an unseen user has none."""
        record = await self._repository.get(user_id)
        return list(record.saved_items) if record else []

    async def put(self, user_id: str, items: Any, actor: str | None = None) -> WriteResult:
        policy = self._policies.policy_for(SAVED_ITEMS)
        self._validator.validate(policy, items)

        key = saved_items_key(user_id)
        record = await self._record(user_id)
        current = record.saved_items

        decision = self._guard.evaluate(policy, current, items)
        if not decision.allowed:
            raise RejectedByGuardError(key, decision)

        backup_id = None
        if current:
            outcome = await self._ledger.snapshot(key, current, decision.trigger_action, actor or user_id)
            if outcome.ok:
                backup_id = outcome.entry.id

        await self._save(record, items)
        logger.info(
            "Saved items for %s: %d -> %d",
            user_id, decision.current_count, decision.attempted_count,
        )

        if backup_id is not None:
            await self._ledger.prune(key, policy.retention)

        return WriteResult(
            count=decision.attempted_count,
            trigger_action=decision.trigger_action,
            backup_id=backup_id,
        )

    async def store(self, user_id: str, items: list[Any]) -> None:
        """Write items unguarded. Used by restore, which snapshots on its own."""
        record = await self._record(user_id)
        await self._save(record, items)

    async def _record(self, user_id: str) -> PreferenceRecord:
        record = await self._repository.get(user_id)
        if record is not None:
            return record
        await self._repository.insert_default(user_id)
        return await self._repository.get(user_id) or PreferenceRecord(user_id=user_id)

    async def _save(self, record: PreferenceRecord, items: list[Any]) -> None:
        record.apply(saved_items=list(items))
        await self._repository.update(record)
