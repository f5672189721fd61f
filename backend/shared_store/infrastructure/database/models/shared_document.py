"""SQLAlchemy ORM model for shared documents."""

from datetime import datetime, timezone
from typing import Any

from sqlalchemy import DateTime, String
from sqlalchemy.orm import Mapped, mapped_column

from shared_store.infrastructure.database.base import Base
from shared_store.infrastructure.database.models.json_type import JSONDocument


class SharedDocumentModel(Base):
    """ORM model — maps to the 'shared_data' table (one row per key)."""

    __tablename__ = "shared_data"

    key: Mapped[str] = mapped_column(String(100), primary_key=True)
    data: Mapped[Any] = mapped_column(JSONDocument, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<SharedDocumentModel(key='{self.key}')>"
