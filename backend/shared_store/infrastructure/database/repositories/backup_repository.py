"""Concrete repository implementation for the backup ledger backed by SQLAlchemy."""

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from shared_store.application.interfaces import BackupRepository
from shared_store.domain.entities import BackupEntry, BackupKeySummary, TriggerAction
from shared_store.infrastructure.database.errors import storage_errors
from shared_store.infrastructure.database.models import DataBackupModel
from shared_store.infrastructure.database.timestamps import as_utc

# Newest first; id breaks ties between entries created in the same instant.
_NEWEST_FIRST = (DataBackupModel.created_at.desc(), DataBackupModel.id.desc())


class SQLAlchemyBackupRepository(BackupRepository):
    """Implements the BackupRepository port using SQLAlchemy async sessions.

    Inserts and prunes run inside a SAVEPOINT: if either fails, only the
    savepoint is rolled back and the enclosing write can still commit.
    """

    def __init__(self, session: AsyncSession):
        self._session = session

    def _to_entity(self, model: DataBackupModel) -> BackupEntry:
        """Map ORM model → domain entity."""
        return BackupEntry(
            id=model.id,
            data_key=model.data_key,
            payload=model.data,
            item_count=model.item_count,
            trigger_action=TriggerAction(model.trigger_action),
            actor=model.created_by,
            created_at=as_utc(model.created_at),
        )

    def _to_model(self, entity: BackupEntry) -> DataBackupModel:
        """Map domain entity → ORM model (for creation)."""
        return DataBackupModel(
            data_key=entity.data_key,
            data=entity.payload,
            item_count=entity.item_count,
            trigger_action=entity.trigger_action.value,
            created_by=entity.actor,
            created_at=entity.created_at,
        )

    async def add(self, entry: BackupEntry) -> BackupEntry:
        model = self._to_model(entry)
        async with storage_errors():
            async with self._session.begin_nested():
                self._session.add(model)
        return self._to_entity(model)

    async def list_for_key(self, data_key: str, limit: int = 20) -> list[BackupEntry]:
        stmt = (
            select(
                DataBackupModel.id,
                DataBackupModel.data_key,
                DataBackupModel.item_count,
                DataBackupModel.trigger_action,
                DataBackupModel.created_by,
                DataBackupModel.created_at,
            )
            .where(DataBackupModel.data_key == data_key)
            .order_by(*_NEWEST_FIRST)
            .limit(limit)
        )
        async with storage_errors():
            rows = (await self._session.execute(stmt)).all()
        return [
            BackupEntry(
                id=row.id,
                data_key=row.data_key,
                item_count=row.item_count,
                trigger_action=TriggerAction(row.trigger_action),
                actor=row.created_by,
                created_at=as_utc(row.created_at),
            )
            for row in rows
        ]

    async def get_by_id(self, backup_id: int) -> BackupEntry | None:
        stmt = select(DataBackupModel).where(DataBackupModel.id == backup_id)
        async with storage_errors():
            model = (await self._session.execute(stmt)).scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def prune(self, data_key: str, keep_count: int) -> int:
        ranked = (
            select(
                DataBackupModel.id,
                func.row_number().over(order_by=_NEWEST_FIRST).label("recency"),
            )
            .where(DataBackupModel.data_key == data_key)
            .subquery()
        )
        stmt = (
            delete(DataBackupModel)
            .where(DataBackupModel.id.in_(select(ranked.c.id).where(ranked.c.recency > keep_count)))
            .execution_options(synchronize_session=False)
        )
        async with storage_errors():
            async with self._session.begin_nested():
                result = await self._session.execute(stmt)
        return result.rowcount or 0

    async def summarize_keys(self) -> list[BackupKeySummary]:
        latest = func.max(DataBackupModel.created_at).label("latest_backup")
        stmt = (
            select(
                DataBackupModel.data_key,
                func.count(DataBackupModel.id).label("backup_count"),
                latest,
            )
            .group_by(DataBackupModel.data_key)
            .order_by(latest.desc())
        )
        async with storage_errors():
            rows = (await self._session.execute(stmt)).all()
        return [
            BackupKeySummary(
                data_key=row.data_key,
                backup_count=row.backup_count,
                latest_backup=as_utc(row.latest_backup),
            )
            for row in rows
        ]
