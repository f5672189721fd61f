from .shared_document import SharedDocumentModel
from .data_backup import DataBackupModel
from .user_preference import UserPreferenceModel
from .activity_log import ActivityLogModel

__all__ = [
    "SharedDocumentModel",
    "DataBackupModel",
    "UserPreferenceModel",
    "ActivityLogModel",
]
