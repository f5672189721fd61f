"""Domain-specific exceptions — framework-independent."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from shared_store.domain.entities import GuardDecision


class SharedStoreError(Exception):
    """Base class for every error the store raises on purpose."""


class ValidationError(SharedStoreError):
    """Raised when a payload does not have the shape its key requires."""

    def __init__(self, key: str, message: str):
        self.key = key
        self.message = message
        super().__init__(f"Invalid data for '{key}': {message}")


class RejectedByGuardError(SharedStoreError):
    """Raised when the loss-prevention guard refuses a write.

    Carries the guard's decision so callers can show the counts and decide
    whether to retry, confirm, or abort.
    """

    def __init__(self, key: str, decision: GuardDecision):
        self.key = key
        self.decision = decision
        self.current_count = decision.current_count
        self.attempted_count = decision.attempted_count
        self.reason = decision.reason
        super().__init__(decision.reason)


class NotFoundError(SharedStoreError):
    """Raised when a requested entity does not exist."""

    def __init__(self, entity_type: str, entity_id: int | str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type} with id '{entity_id}' not found")


class InvalidFieldError(SharedStoreError):
    """Raised when a preference field name is not one of the recognised fields."""

    def __init__(self, field_name: str, allowed: tuple[str, ...]):
        self.field_name = field_name
        self.allowed = allowed
        super().__init__(
            f"Invalid field: '{field_name}'. Expected one of: {', '.join(allowed)}"
        )


class NoDataError(SharedStoreError):
    """Raised when a manual backup is requested for an absent or empty document."""

    def __init__(self, key: str):
        self.key = key
        super().__init__(f"No data to back up for '{key}'")


class StorageUnavailableError(SharedStoreError):
    """Raised when the underlying database cannot be reached."""

    def __init__(self, message: str = "Storage is unavailable"):
        self.message = message
        super().__init__(message)


class NothingToRestoreError(SharedStoreError):
    """Raised when none of the requested activities can be undone."""

    def __init__(self, activity_ids: list[int]):
        self.activity_ids = activity_ids
        super().__init__("No restorable activities found")
