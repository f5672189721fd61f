"""Domain entity for a shared document, the live value stored under a key."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any


def cardinality(value: Any) -> int:
    """Number of items in a JSON value.

    Array length for sequences, key count for mappings, 1 for anything else.
    """
    if isinstance(value, (list, tuple)):
        return len(value)
    if isinstance(value, dict):
        return len(value)
    return 1


def is_empty(value: Any) -> bool:
    """True for None and for empty arrays or objects."""
    if value is None:
        return True
    if isinstance(value, (list, tuple, dict)):
        return len(value) == 0
    return False


@dataclass
class Document:
    """The current value stored under a unique key.

    Writes are full-value replacements; there is exactly one live document
    per key and it is never hard-deleted.
    """

    key: str
    data: Any
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def item_count(self) -> int:
        return cardinality(self.data)

    @property
    def is_empty(self) -> bool:
        return is_empty(self.data)


@dataclass
class DocumentSummary:
    """Lightweight listing row for the stored documents."""

    key: str
    item_count: int
    updated_at: datetime
