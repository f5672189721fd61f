"""Per-key write policy for shared documents."""

from dataclasses import dataclass, field
from enum import Enum


class DocumentShape(str, Enum):
    """JSON shape a document key must hold."""

    ARRAY = "array"
    OBJECT = "object"
    ANY = "any"


@dataclass(frozen=True)
class CollectionPolicy:
    """How writes to one document key are validated, guarded and retained."""

    key: str
    shape: DocumentShape = DocumentShape.ANY
    required_fields: tuple[str, ...] = ()
    guarded: bool = True
    retention: int = 50
    min_base: int = 5
    max_reduction_ratio: float = 0.5
    merge_identity: tuple[str, ...] = field(default=())
    allow_clear: bool = False
    max_removals: int | None = None
    track_activity: bool = False
