"""Domain entities for the backup ledger."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from .document import cardinality


class TriggerAction(str, Enum):
    """Why a snapshot was taken."""

    SAVE = "save"
    ADD = "add"
    DELETE = "delete"
    UPDATE = "update"
    MANUAL = "manual"
    PRE_RESTORE = "pre-restore"

    @classmethod
    def from_size_change(cls, current_count: int, incoming_count: int) -> "TriggerAction":
        """Pick add / delete / update from the change in cardinality."""
        if incoming_count > current_count:
            return cls.ADD
        if incoming_count < current_count:
            return cls.DELETE
        return cls.UPDATE


@dataclass
class BackupEntry:
    """An immutable point-in-time copy of a document.

    ``payload`` is ``None`` on listing results; it is loaded only when a
    single entry is fetched by id.
    """

    data_key: str
    trigger_action: TriggerAction
    payload: Any = None
    item_count: int = 0
    actor: str | None = None
    id: int | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def capture(
        cls,
        data_key: str,
        payload: Any,
        trigger_action: TriggerAction,
        actor: str | None = None,
    ) -> "BackupEntry":
        """Build a new entry for ``payload`` with its item count computed."""
        return cls(
            data_key=data_key,
            payload=payload,
            item_count=cardinality(payload),
            trigger_action=trigger_action,
            actor=actor,
        )


@dataclass
class BackupOutcome:
    """Result of a snapshot attempt. Snapshots never raise to the caller."""

    ok: bool
    entry: BackupEntry | None = None
    error: str | None = None

    @classmethod
    def success(cls, entry: BackupEntry) -> "BackupOutcome":
        return cls(ok=True, entry=entry)

    @classmethod
    def failure(cls, error: str) -> "BackupOutcome":
        return cls(ok=False, error=error)


@dataclass
class BackupKeySummary:
    """Per-key overview of the ledger."""

    data_key: str
    backup_count: int
    latest_backup: datetime | None
