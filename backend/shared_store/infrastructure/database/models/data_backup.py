"""SQLAlchemy ORM model for the backup ledger."""

from datetime import datetime, timezone
from typing import Any

from sqlalchemy import DateTime, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from shared_store.infrastructure.database.base import Base
from shared_store.infrastructure.database.models.json_type import JSONDocument


class DataBackupModel(Base):
    """ORM model — maps to the append-only 'data_backups' table.

    ``data_key`` is not a foreign key; entries outlive renamed or abandoned
    document keys.
    """

    __tablename__ = "data_backups"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    data_key: Mapped[str] = mapped_column(String(100), nullable=False)
    data: Mapped[Any] = mapped_column(JSONDocument, nullable=False)
    item_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    trigger_action: Mapped[str] = mapped_column(String(20), nullable=False)
    created_by: Mapped[str | None] = mapped_column(String(100), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    __table_args__ = (
        Index("ix_data_backups_key_created", "data_key", "created_at"),
    )

    def __repr__(self) -> str:
        return (
            f"<DataBackupModel(id={self.id}, key='{self.data_key}', "
            f"action='{self.trigger_action}', items={self.item_count})>"
        )
