"""Abstract repository interface (port) for the append-only backup ledger."""

from abc import ABC, abstractmethod

from shared_store.domain.entities import BackupEntry, BackupKeySummary


class BackupRepository(ABC):
    """Port for backup ledger persistence — implemented in the infrastructure layer."""

    @abstractmethod
    async def add(self, entry: BackupEntry) -> BackupEntry:
        """Append an entry and return it with its generated id."""
        ...

    @abstractmethod
    async def list_for_key(self, data_key: str, limit: int = 20) -> list[BackupEntry]:
        """Entries for ``data_key`` newest first, without payloads."""
        ...

    @abstractmethod
    async def get_by_id(self, backup_id: int) -> BackupEntry | None:
        """A single entry including its payload."""
        ...

    @abstractmethod
    async def prune(self, data_key: str, keep_count: int) -> int:
        """Delete all but the ``keep_count`` newest entries for ``data_key``.

        Returns the number of deleted entries.
        """
        ...

    @abstractmethod
    async def summarize_keys(self) -> list[BackupKeySummary]:
        """One summary row per key that has backups, latest first."""
        ...
