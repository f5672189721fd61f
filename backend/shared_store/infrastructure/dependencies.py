"""FastAPI dependency injection — wires infrastructure to application layer."""

from collections.abc import AsyncGenerator
from functools import lru_cache

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from shared_store.config import get_settings
from shared_store.application.interfaces import CollectionPolicyProvider
from shared_store.application.services import (
    ActivityLog,
    ActivityRestoreService,
    BackupLedger,
    PreferenceService,
    RestoreService,
    SavedItemsService,
    SharedDataService,
)
from shared_store.infrastructure.database.session import get_db_session
from shared_store.infrastructure.database.repositories import (
    SQLAlchemyActivityRepository,
    SQLAlchemyBackupRepository,
    SQLAlchemyDocumentRepository,
    SQLAlchemyPreferenceRepository,
)
from shared_store.infrastructure.policies import YamlCollectionPolicyProvider


@lru_cache
def get_policy_provider() -> CollectionPolicyProvider:
    """Collection policies, parsed from YAML once per process."""
    settings = get_settings()
    return YamlCollectionPolicyProvider(
        settings.collections_file,
        default_retention=settings.backup_retention,
        min_base=settings.guard_min_base,
        max_reduction_ratio=settings.guard_max_reduction_ratio,
    )


def _build_ledger(session: AsyncSession) -> BackupLedger:
    return BackupLedger(
        SQLAlchemyBackupRepository(session),
        default_retention=get_settings().backup_retention,
    )


def _build_saved_items(session: AsyncSession, policies: CollectionPolicyProvider) -> SavedItemsService:
    return SavedItemsService(
        SQLAlchemyPreferenceRepository(session),
        ledger=_build_ledger(session),
        policies=policies,
    )


async def get_shared_data_service(
    session: AsyncSession = Depends(get_db_session),
    policies: CollectionPolicyProvider = Depends(get_policy_provider),
) -> AsyncGenerator[SharedDataService, None]:
    """Provides a SharedDataService with the guarded write path wired up."""
    yield SharedDataService(
        documents=SQLAlchemyDocumentRepository(session),
        ledger=_build_ledger(session),
        policies=policies,
        activity=ActivityLog(SQLAlchemyActivityRepository(session)),
    )


async def get_restore_service(
    session: AsyncSession = Depends(get_db_session),
    policies: CollectionPolicyProvider = Depends(get_policy_provider),
) -> AsyncGenerator[RestoreService, None]:
    """Provides a RestoreService sharing the request's session with the ledger."""
    yield RestoreService(
        documents=SQLAlchemyDocumentRepository(session),
        ledger=_build_ledger(session),
        policies=policies,
        saved_items=_build_saved_items(session, policies),
    )


async def get_saved_items_service(
    session: AsyncSession = Depends(get_db_session),
    policies: CollectionPolicyProvider = Depends(get_policy_provider),
) -> AsyncGenerator[SavedItemsService, None]:
    yield _build_saved_items(session, policies)


async def get_activity_log(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[ActivityLog, None]:
    yield ActivityLog(SQLAlchemyActivityRepository(session))


async def get_activity_restore_service(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[ActivityRestoreService, None]:
    """Provides an ActivityRestoreService writing through the request's session."""
    yield ActivityRestoreService(
        activity=ActivityLog(SQLAlchemyActivityRepository(session)),
        documents=SQLAlchemyDocumentRepository(session),
        ledger=_build_ledger(session),
    )


async def get_preference_service(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[PreferenceService, None]:
    """Provides a PreferenceService instance with its repository wired up."""
    yield PreferenceService(SQLAlchemyPreferenceRepository(session))
