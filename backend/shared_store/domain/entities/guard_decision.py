"""Outcome of a loss-prevention guard evaluation."""

from dataclasses import dataclass

from .backup_entry import TriggerAction


@dataclass(frozen=True)
class GuardDecision:
    """Whether a write may proceed, with the counts it was judged on."""

    allowed: bool
    current_count: int
    attempted_count: int
    reason: str = ""
    trigger_action: TriggerAction | None = None
