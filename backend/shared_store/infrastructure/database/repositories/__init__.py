from .document_repository import SQLAlchemyDocumentRepository
from .backup_repository import SQLAlchemyBackupRepository
from .preference_repository import SQLAlchemyPreferenceRepository
from .activity_repository import SQLAlchemyActivityRepository

__all__ = [
    "SQLAlchemyDocumentRepository",
    "SQLAlchemyBackupRepository",
    "SQLAlchemyPreferenceRepository",
    "SQLAlchemyActivityRepository",
]
