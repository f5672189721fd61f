from .shared_data import (
    DocumentResponse,
    DocumentWrite,
    WriteAcceptedResponse,
    WriteRejectedResponse,
    DocumentSummaryResponse,
)
from .backup import (
    BackupSummaryResponse,
    BackupDetailResponse,
    ManualBackupRequest,
    BackupKeySummaryResponse,
)
from .preferences import (
    PreferencesResponse,
    PreferencesUpdate,
    DefaultCloudState,
    OnboardingState,
    HiddenCloudsState,
    FieldValueUpdate,
)
from .saved_items import SavedItemsResponse, SavedItemsWrite
from .activity import (
    ActivityLogRequest,
    ActivityResponse,
    ActivityStatsResponse,
    AssetOriginResponse,
    ActivityRestoreRequest,
    ActivityRestoreResponse,
)

__all__ = [
    "DocumentResponse",
    "DocumentWrite",
    "WriteAcceptedResponse",
    "WriteRejectedResponse",
    "DocumentSummaryResponse",
    "BackupSummaryResponse",
    "BackupDetailResponse",
    "ManualBackupRequest",
    "BackupKeySummaryResponse",
    "PreferencesResponse",
    "PreferencesUpdate",
    "DefaultCloudState",
    "OnboardingState",
    "HiddenCloudsState",
    "FieldValueUpdate",
    "SavedItemsResponse",
    "SavedItemsWrite",
    "ActivityLogRequest",
    "ActivityResponse",
    "ActivityStatsResponse",
    "AssetOriginResponse",
    "ActivityRestoreRequest",
    "ActivityRestoreResponse",
]
