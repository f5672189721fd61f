"""Concrete repository implementation for PreferenceRecord backed by SQLAlchemy."""

from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from shared_store.application.interfaces import PreferenceRepository
from shared_store.domain.entities import PreferenceRecord
from shared_store.domain.exceptions import NotFoundError
from shared_store.infrastructure.database.errors import storage_errors
from shared_store.infrastructure.database.models import UserPreferenceModel
from shared_store.infrastructure.database.timestamps import as_utc
from shared_store.infrastructure.database.upsert import dialect_insert


class SQLAlchemyPreferenceRepository(PreferenceRepository):
    """Implements the PreferenceRepository port using SQLAlchemy async sessions."""

    def __init__(self, session: AsyncSession):
        self._session = session

    def _to_entity(self, model: UserPreferenceModel) -> PreferenceRecord:
        """Map ORM model → domain entity."""
        return PreferenceRecord(
            user_id=model.user_id,
            default_cloud=model.default_cloud,
            onboarding_completed=model.onboarding_completed,
            skip_splash=model.skip_splash,
            hidden_clouds=list(model.hidden_clouds or []),
            saved_items=list(model.saved_items or []),
            created_at=as_utc(model.created_at),
            updated_at=as_utc(model.updated_at),
        )

    async def _load(self, user_id: str) -> UserPreferenceModel | None:
        stmt = (
            select(UserPreferenceModel)
            .where(UserPreferenceModel.user_id == user_id)
            .execution_options(populate_existing=True)
        )
        async with storage_errors():
            return (await self._session.execute(stmt)).scalar_one_or_none()

    async def get(self, user_id: str) -> PreferenceRecord | None:
        model = await self._load(user_id)
        return self._to_entity(model) if model else None

    async def insert_default(self, user_id: str) -> None:
        now = datetime.now(timezone.utc)
        stmt = (
            dialect_insert(self._session, UserPreferenceModel)
            .values(
                user_id=user_id,
                default_cloud=None,
                onboarding_completed=False,
                skip_splash=False,
                hidden_clouds=[],
                saved_items=[],
                created_at=now,
                updated_at=now,
            )
            .on_conflict_do_nothing(index_elements=[UserPreferenceModel.user_id])
        )
        async with storage_errors():
            await self._session.execute(stmt)

    async def update(self, record: PreferenceRecord) -> PreferenceRecord:
        model = await self._load(record.user_id)
        if model is None:
            raise NotFoundError("PreferenceRecord", record.user_id)
        model.default_cloud = record.default_cloud
        model.onboarding_completed = record.onboarding_completed
        model.skip_splash = record.skip_splash
        model.hidden_clouds = list(record.hidden_clouds)
        model.saved_items = list(record.saved_items)
        model.updated_at = record.updated_at
        async with storage_errors():
            await self._session.flush()
        return self._to_entity(model)
