from .document_repository import DocumentRepository
from .backup_repository import BackupRepository
from .preference_repository import PreferenceRepository
from .collection_policy_provider import CollectionPolicyProvider
from .activity_repository import ActivityRepository

__all__ = [
    "DocumentRepository",
    "BackupRepository",
    "PreferenceRepository",
    "CollectionPolicyProvider",
    "ActivityRepository",
]
