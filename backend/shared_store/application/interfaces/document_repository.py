"""Abstract repository interface (port) for shared document persistence."""

from abc import ABC, abstractmethod
from typing import Any

from shared_store.domain.entities import Document, DocumentSummary


class DocumentRepository(ABC):
    """Port for the key → JSON document store — implemented in the infrastructure layer."""

    @abstractmethod
    async def get(self, key: str) -> Document | None:
        """Return the live document for ``key``, or None if never written."""
        ...

    @abstractmethod
    async def upsert(self, key: str, data: Any) -> Document:
        """Insert or fully replace the document for ``key`` in one statement."""
        ...

    @abstractmethod
    async def list_summaries(self) -> list[DocumentSummary]:
        """List every stored key with its item count, most recently updated first."""
        ...
