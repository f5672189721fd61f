"""Loss-prevention guard — decides whether a write to a collection may proceed.

The guard exists because an upstream fetch that returned nothing, or a stale
empty cache pushed back as truth, would otherwise wipe a team's shared data.
It only reads state; the caller is responsible for snapshotting and writing.

Rules, evaluated in order:
    1. An empty payload never replaces a non-empty document, unless the
       policy sets ``allow_clear``.
    2. With ``max_removals`` set, a non-empty payload may drop at most that
       many items. Otherwise, when the current document holds more than
       ``min_base`` items, a payload smaller than
       ``current × max_reduction_ratio`` is refused.
    3. Anything else passes, tagged add / delete / update by size change.

Keys whose policy is ``guarded: false`` always pass with the ``save`` trigger.
"""

import logging
from typing import Any

from shared_store.domain.entities import (
    CollectionPolicy,
    GuardDecision,
    TriggerAction,
    cardinality,
    is_empty,
)

logger = logging.getLogger(__name__)


class LossPreventionGuard:
    """Stateless policy check applied before any guarded write."""

    def evaluate(
        self,
        policy: CollectionPolicy,
        current: Any,
        incoming: Any,
    ) -> GuardDecision:
        current_count = 0 if is_empty(current) else cardinality(current)
        incoming_count = 0 if is_empty(incoming) else cardinality(incoming)

        if not policy.guarded:
            return GuardDecision(
                allowed=True,
                current_count=current_count,
                attempted_count=incoming_count,
                trigger_action=TriggerAction.SAVE,
            )

        if incoming_count == 0 and current_count > 0 and not policy.allow_clear:
            reason = (
                f"Cannot delete all {policy.key} at once "
                f"({current_count} stored). Delete them one at a time."
            )
            logger.warning("Guard blocked empty write to %s (current=%d)", policy.key, current_count)
            return GuardDecision(
                allowed=False,
                current_count=current_count,
                attempted_count=incoming_count,
                reason=reason,
            )

        if incoming_count > 0 and self._too_many_removed(policy, current_count, incoming_count):
            reason = (
                f"Cannot reduce {policy.key} from {current_count} to {incoming_count}. "
                "This looks like accidental data loss."
            )
            logger.warning(
                "Guard blocked bulk reduction of %s (%d -> %d)",
                policy.key, current_count, incoming_count,
            )
            return GuardDecision(
                allowed=False,
                current_count=current_count,
                attempted_count=incoming_count,
                reason=reason,
            )

        return GuardDecision(
            allowed=True,
            current_count=current_count,
            attempted_count=incoming_count,
            trigger_action=TriggerAction.from_size_change(current_count, incoming_count),
        )

    @staticmethod
    def _too_many_removed(policy: CollectionPolicy, current_count: int, incoming_count: int) -> bool:
        if policy.max_removals is not None:
            return current_count - incoming_count > policy.max_removals
        return (
            current_count > policy.min_base
            and incoming_count < current_count * policy.max_reduction_ratio
        )
