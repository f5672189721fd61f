from .base import Base
from .session import engine, async_session_factory, get_db_session
from .models import SharedDocumentModel, DataBackupModel, UserPreferenceModel, ActivityLogModel

__all__ = [
    "Base",
    "engine",
    "async_session_factory",
    "get_db_session",
    "SharedDocumentModel",
    "DataBackupModel",
    "UserPreferenceModel",
    "ActivityLogModel",
]
