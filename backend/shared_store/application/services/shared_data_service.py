"""Application service for the guarded shared-data write path."""

import logging
from dataclasses import dataclass
from typing import Any

from shared_store.application.interfaces import CollectionPolicyProvider, DocumentRepository
from shared_store.application.services.activity_log import ActivityLog
from shared_store.application.services.backup_ledger import BackupLedger
from shared_store.application.services.document_validator import DocumentValidator
from shared_store.application.services.loss_prevention_guard import LossPreventionGuard
from shared_store.domain.entities import DocumentSummary, TriggerAction
from shared_store.domain.exceptions import RejectedByGuardError

logger = logging.getLogger(__name__)


@dataclass
class WriteResult:
    """What an accepted write did."""

    count: int
    trigger_action: TriggerAction | None = None
    backup_id: int | None = None


class SharedDataService:
    """Reads and writes team-wide documents.

    Every write goes validate → guard → snapshot → upsert → prune, then
    item-level changes are logged for keys that track activity. The guard
    reads current state and then the write happens; concurrent writers to the
    same key can lose an update, but every prior state stays in the ledger.
    """

    def __init__(
        self,
        documents: DocumentRepository,
        ledger: BackupLedger,
        policies: CollectionPolicyProvider,
        guard: LossPreventionGuard | None = None,
        validator: DocumentValidator | None = None,
        activity: ActivityLog | None = None,
    ):
        self._documents = documents
        self._ledger = ledger
        self._policies = policies
        self._guard = guard or LossPreventionGuard()
        self._validator = validator or DocumentValidator()
        self._activity = activity

    async def get(self, key: str) -> Any | None:
        document = await self._documents.get(key)
        return document.data if document else None

    async def list_documents(self) -> list[DocumentSummary]:
        return await self._documents.list_summaries()

    async def put(self, key: str, data: Any, actor: str | None = None) -> WriteResult:
        policy = self._policies.policy_for(key)
        self._validator.validate(policy, data)

        current = await self._documents.get(key)
        current_data = current.data if current else None

        decision = self._guard.evaluate(policy, current_data, data)
        if not decision.allowed:
            raise RejectedByGuardError(key, decision)

        backup_id = None
        if current is not None and not current.is_empty:
            outcome = await self._ledger.snapshot(
                key, current_data, decision.trigger_action, actor
            )
            if outcome.ok:
                backup_id = outcome.entry.id

        await self._documents.upsert(key, data)
        logger.info(
            "Saved %s: %d -> %d items (actor=%s)",
            key, decision.current_count, decision.attempted_count, actor or "unknown",
        )

        if backup_id is not None:
            await self._ledger.prune(key, policy.retention)

        if self._activity is not None and policy.track_activity:
            await self._activity.record_changes(key, current_data, data, actor)

        return WriteResult(
            count=decision.attempted_count,
            trigger_action=decision.trigger_action,
            backup_id=backup_id,
        )
