"""Abstract repository interface (port) for per-user preferences."""

from abc import ABC, abstractmethod

from shared_store.domain.entities import PreferenceRecord


class PreferenceRepository(ABC):
    """Port for preference persistence — implemented in the infrastructure layer."""

    @abstractmethod
    async def get(self, user_id: str) -> PreferenceRecord | None:
        """Retrieve the record for ``user_id`` if it exists."""
        ...

    @abstractmethod
    async def insert_default(self, user_id: str) -> None:
        """Insert a default record; a no-op when one already exists."""
        ...

    @abstractmethod
    async def update(self, record: PreferenceRecord) -> PreferenceRecord:
        """Persist every field of an existing record."""
        ...
