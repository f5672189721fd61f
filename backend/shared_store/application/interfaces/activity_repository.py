"""Abstract repository interface (port) for the activity log."""

from abc import ABC, abstractmethod
from collections.abc import Sequence

from shared_store.domain.entities import ActivityEntry


class ActivityRepository(ABC):
    """Port for activity log persistence — implemented in the infrastructure layer."""

    @abstractmethod
    async def add_many(self, entries: Sequence[ActivityEntry]) -> list[ActivityEntry]:
        """Append entries and return them with generated ids."""
        ...

    @abstractmethod
    async def list_recent(self, limit: int = 100, cloud_id: str | None = None) -> list[ActivityEntry]:
        """Newest first, optionally for one cloud."""
        ...

    @abstractmethod
    async def get_many(self, activity_ids: Sequence[int]) -> list[ActivityEntry]:
        ...

    @abstractmethod
    async def mark_restored(self, activity_ids: Sequence[int]) -> int:
        """Flag entries as restored. Returns the number of rows changed."""
        ...

    @abstractmethod
    async def count_by_action(self, cloud_id: str | None = None) -> dict[str, int]:
        ...

    @abstractmethod
    async def count_users(self, cloud_id: str | None = None) -> int:
        """Distinct non-empty user names."""
        ...

    @abstractmethod
    async def latest_per_asset(self, action: str, cloud_id: str | None = None) -> list[ActivityEntry]:
        """The most recent entry with ``action`` for each asset id."""
        ...
