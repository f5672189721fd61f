"""Concrete repository implementation for the activity log backed by SQLAlchemy."""

from collections.abc import Sequence

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from shared_store.application.interfaces import ActivityRepository
from shared_store.domain.entities import ActivityEntry
from shared_store.infrastructure.database.errors import storage_errors
from shared_store.infrastructure.database.models import ActivityLogModel
from shared_store.infrastructure.database.timestamps import as_utc

_NEWEST_FIRST = (ActivityLogModel.created_at.desc(), ActivityLogModel.id.desc())


class SQLAlchemyActivityRepository(ActivityRepository):
    """Implements the ActivityRepository port using SQLAlchemy async sessions.

    Inserts run inside a SAVEPOINT so a failed log write leaves the
    enclosing transaction usable.
    """

    def __init__(self, session: AsyncSession):
        self._session = session

    def _to_entity(self, model: ActivityLogModel) -> ActivityEntry:
        """Map ORM model → domain entity."""
        return ActivityEntry(
            id=model.id,
            action=model.action,
            asset_id=model.asset_id,
            asset_name=model.asset_name,
            asset_data=model.asset_data,
            cloud_id=model.cloud_id,
            cloud_name=model.cloud_name,
            category=model.category,
            user_name=model.user_name,
            data_key=model.data_key,
            is_restored=model.is_restored,
            created_at=as_utc(model.created_at),
        )

    def _to_model(self, entity: ActivityEntry) -> ActivityLogModel:
        """Map domain entity → ORM model (for creation)."""
        return ActivityLogModel(
            action=entity.action,
            asset_id=entity.asset_id,
            asset_name=entity.asset_name,
            asset_data=entity.asset_data,
            cloud_id=entity.cloud_id,
            cloud_name=entity.cloud_name,
            category=entity.category,
            user_name=entity.user_name,
            data_key=entity.data_key,
            is_restored=entity.is_restored,
            created_at=entity.created_at,
        )

    def _scoped(self, stmt, cloud_id: str | None):
        if cloud_id is not None:
            stmt = stmt.where(ActivityLogModel.cloud_id == cloud_id)
        return stmt

    async def add_many(self, entries: Sequence[ActivityEntry]) -> list[ActivityEntry]:
        models = [self._to_model(e) for e in entries]
        async with storage_errors():
            async with self._session.begin_nested():
                self._session.add_all(models)
        return [self._to_entity(m) for m in models]

    async def list_recent(self, limit: int = 100, cloud_id: str | None = None) -> list[ActivityEntry]:
        stmt = (
            self._scoped(select(ActivityLogModel), cloud_id)
            .order_by(*_NEWEST_FIRST)
            .limit(limit)
            .execution_options(populate_existing=True)
        )
        async with storage_errors():
            models = (await self._session.execute(stmt)).scalars().all()
        return [self._to_entity(m) for m in models]

    async def get_many(self, activity_ids: Sequence[int]) -> list[ActivityEntry]:
        if not activity_ids:
            return []
        stmt = (
            select(ActivityLogModel)
            .where(ActivityLogModel.id.in_(activity_ids))
            .order_by(ActivityLogModel.id)
            .execution_options(populate_existing=True)
        )
        async with storage_errors():
            models = (await self._session.execute(stmt)).scalars().all()
        return [self._to_entity(m) for m in models]

    async def mark_restored(self, activity_ids: Sequence[int]) -> int:
        if not activity_ids:
            return 0
        stmt = (
            update(ActivityLogModel)
            .where(ActivityLogModel.id.in_(activity_ids))
            .values(is_restored=True)
            .execution_options(synchronize_session=False)
        )
        async with storage_errors():
            result = await self._session.execute(stmt)
        return result.rowcount or 0

    async def count_by_action(self, cloud_id: str | None = None) -> dict[str, int]:
        stmt = self._scoped(
            select(ActivityLogModel.action, func.count(ActivityLogModel.id).label("total")),
            cloud_id,
        ).group_by(ActivityLogModel.action)
        async with storage_errors():
            rows = (await self._session.execute(stmt)).all()
        return {row.action: row.total for row in rows}

    async def count_users(self, cloud_id: str | None = None) -> int:
        stmt = self._scoped(
            select(func.count(func.distinct(ActivityLogModel.user_name))).where(
                ActivityLogModel.user_name.is_not(None),
                ActivityLogModel.user_name != "",
            ),
            cloud_id,
        )
        async with storage_errors():
            return (await self._session.execute(stmt)).scalar_one()

    async def latest_per_asset(self, action: str, cloud_id: str | None = None) -> list[ActivityEntry]:
        stmt = self._scoped(
            select(ActivityLogModel).where(ActivityLogModel.action == action),
            cloud_id,
        ).order_by(*_NEWEST_FIRST)
        async with storage_errors():
            models = (await self._session.execute(stmt)).scalars().all()
        latest: dict[str, ActivityEntry] = {}
        for model in models:
            if model.asset_id not in latest:
                latest[model.asset_id] = self._to_entity(model)
        return list(latest.values())
