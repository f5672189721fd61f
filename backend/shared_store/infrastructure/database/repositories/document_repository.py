"""Concrete repository implementation for shared documents backed by SQLAlchemy."""

from datetime import datetime, timezone
from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from shared_store.application.interfaces import DocumentRepository
from shared_store.domain.entities import Document, DocumentSummary, cardinality
from shared_store.infrastructure.database.errors import storage_errors
from shared_store.infrastructure.database.models import SharedDocumentModel
from shared_store.infrastructure.database.timestamps import as_utc
from shared_store.infrastructure.database.upsert import dialect_insert


class SQLAlchemyDocumentRepository(DocumentRepository):
    """Implements the DocumentRepository port using SQLAlchemy async sessions.

    Reads select columns rather than ORM instances so a value written by an
    upsert earlier in the same session is never served from the identity map.
    """

    def __init__(self, session: AsyncSession):
        self._session = session

    async def get(self, key: str) -> Document | None:
        stmt = select(
            SharedDocumentModel.key,
            SharedDocumentModel.data,
            SharedDocumentModel.updated_at,
        ).where(SharedDocumentModel.key == key)
        async with storage_errors():
            row = (await self._session.execute(stmt)).one_or_none()
        if row is None:
            return None
        return Document(key=row.key, data=row.data, updated_at=as_utc(row.updated_at))

    async def upsert(self, key: str, data: Any) -> Document:
        now = datetime.now(timezone.utc)
        stmt = dialect_insert(self._session, SharedDocumentModel).values(
            key=key, data=data, updated_at=now
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=[SharedDocumentModel.key],
            set_={"data": stmt.excluded.data, "updated_at": stmt.excluded.updated_at},
        )
        async with storage_errors():
            await self._session.execute(stmt)
        return Document(key=key, data=data, updated_at=now)

    async def list_summaries(self) -> list[DocumentSummary]:
        stmt = select(
            SharedDocumentModel.key,
            SharedDocumentModel.data,
            SharedDocumentModel.updated_at,
        ).order_by(SharedDocumentModel.updated_at.desc())
        async with storage_errors():
            rows = (await self._session.execute(stmt)).all()
        return [
            DocumentSummary(
                key=row.key,
                item_count=cardinality(row.data),
                updated_at=as_utc(row.updated_at),
            )
            for row in rows
        ]
