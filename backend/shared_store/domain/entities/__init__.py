from .document import Document, DocumentSummary, cardinality, is_empty
from .backup_entry import BackupEntry, BackupKeySummary, BackupOutcome, TriggerAction
from .preference_record import PREFERENCE_FIELDS, PreferenceRecord
from .user_keys import SAVED_ITEMS, policy_key, saved_items_key, saved_items_owner
from .collection_policy import CollectionPolicy, DocumentShape
from .guard_decision import GuardDecision
from .activity_entry import (
    ADDED_ACTIONS,
    REUSED_ACTION,
    ActivityAction,
    ActivityEntry,
    ActivityStats,
)

__all__ = [
    "Document",
    "DocumentSummary",
    "cardinality",
    "is_empty",
    "BackupEntry",
    "BackupKeySummary",
    "BackupOutcome",
    "TriggerAction",
    "PREFERENCE_FIELDS",
    "PreferenceRecord",
    "SAVED_ITEMS",
    "policy_key",
    "saved_items_key",
    "saved_items_owner",
    "CollectionPolicy",
    "DocumentShape",
    "GuardDecision",
    "ADDED_ACTIONS",
    "REUSED_ACTION",
    "ActivityAction",
    "ActivityEntry",
    "ActivityStats",
]
