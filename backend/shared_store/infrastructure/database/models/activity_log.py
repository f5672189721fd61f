"""SQLAlchemy ORM model for the activity log."""

from datetime import datetime, timezone
from typing import Any

from sqlalchemy import Boolean, DateTime, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from shared_store.infrastructure.database.base import Base
from shared_store.infrastructure.database.models.json_type import JSONDocument


class ActivityLogModel(Base):
    """ORM model — maps to the append-only 'activity_log' table."""

    __tablename__ = "activity_log"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    action: Mapped[str] = mapped_column(String(30), nullable=False)
    asset_id: Mapped[str] = mapped_column(String(255), nullable=False)
    asset_name: Mapped[str] = mapped_column(String(500), nullable=False)
    asset_data: Mapped[Any | None] = mapped_column(JSONDocument, nullable=True)
    cloud_id: Mapped[str | None] = mapped_column(String(100), nullable=True)
    cloud_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    category: Mapped[str | None] = mapped_column(String(255), nullable=True)
    user_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    data_key: Mapped[str | None] = mapped_column(String(100), nullable=True)
    is_restored: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    __table_args__ = (
        Index("ix_activity_log_created", "created_at"),
        Index("ix_activity_log_action_restored", "action", "is_restored"),
    )

    def __repr__(self) -> str:
        return f"<ActivityLogModel(id={self.id}, action='{self.action}', asset='{self.asset_id}')>"
