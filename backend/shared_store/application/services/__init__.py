from .loss_prevention_guard import LossPreventionGuard
from .backup_ledger import BackupLedger
from .document_validator import DocumentValidator
from .backup_merge import merge_backup_data
from .activity_log import ActivityLog, diff_items
from .shared_data_service import SharedDataService, WriteResult
from .saved_items_service import SavedItemsService
from .restore_service import RestoreService
from .activity_restore_service import ActivityRestoreResult, ActivityRestoreService
from .preference_service import PreferenceService

__all__ = [
    "LossPreventionGuard",
    "BackupLedger",
    "DocumentValidator",
    "merge_backup_data",
    "ActivityLog",
    "diff_items",
    "SharedDataService",
    "WriteResult",
    "SavedItemsService",
    "RestoreService",
    "ActivityRestoreResult",
    "ActivityRestoreService",
    "PreferenceService",
]
