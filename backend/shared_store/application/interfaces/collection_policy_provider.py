"""Abstract interface (port) for looking up per-key collection policies."""

from abc import ABC, abstractmethod

from shared_store.domain.entities import CollectionPolicy


class CollectionPolicyProvider(ABC):
    """Resolves the write policy for a document key."""

    @abstractmethod
    def policy_for(self, key: str) -> CollectionPolicy:
        """Return the declared policy for ``key``, or the default policy."""
        ...

    @abstractmethod
    def known_keys(self) -> list[str]:
        """Keys with an explicitly declared policy."""
        ...
