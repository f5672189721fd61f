"""Domain entities for the activity log of per-item changes."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any


class ActivityAction(str, Enum):
    """Actions the store records itself when an item collection changes.

    Clients may log other action names (``component_insert``, ``poc_add`` and
    so on), so entries keep the action as a plain string.
    """

    ADD = "add"
    UPDATE = "update"
    DELETE = "delete"
    DELETE_FOREVER = "delete_forever"
    RESTORE = "restore"


RESTORABLE_ACTIONS = frozenset({ActivityAction.DELETE.value, ActivityAction.DELETE_FOREVER.value})

# Actions counted as "components added" in activity stats.
ADDED_ACTIONS = ("add", "component_insert", "poc_add", "section_create")
REUSED_ACTION = "component_insert"


@dataclass
class ActivityEntry:
    """One change to one item, with enough of the item to bring it back."""

    action: str
    asset_id: str
    asset_name: str
    asset_data: Any = None
    cloud_id: str | None = None
    cloud_name: str | None = None
    category: str | None = None
    user_name: str | None = None
    data_key: str | None = None
    is_restored: bool = False
    id: int | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def for_item(
        cls,
        action: ActivityAction,
        item: dict[str, Any],
        user_name: str | None = None,
        data_key: str | None = None,
    ) -> "ActivityEntry":
        return cls(
            action=action.value,
            asset_id=str(item["id"]),
            asset_name=str(item.get("name") or "Unknown"),
            asset_data=item,
            cloud_id=item.get("cloudId"),
            cloud_name=item.get("cloudName"),
            category=item.get("category"),
            user_name=user_name,
            data_key=data_key,
        )

    @property
    def is_restorable(self) -> bool:
        """A deletion recorded by the store that has not been undone yet."""
        return (
            self.action in RESTORABLE_ACTIONS
            and not self.is_restored
            and self.data_key is not None
            and isinstance(self.asset_data, dict)
        )


@dataclass
class ActivityStats:
    components_added: int = 0
    components_reused: int = 0
    designers_engaged: int = 0
