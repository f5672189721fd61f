"""SQLAlchemy ORM model for per-user preferences."""

from datetime import datetime, timezone

from sqlalchemy import Boolean, DateTime, String
from sqlalchemy.orm import Mapped, mapped_column

from shared_store.infrastructure.database.base import Base
from shared_store.infrastructure.database.models.json_type import JSONDocument


class UserPreferenceModel(Base):
    """ORM model — maps to the 'user_preferences' table."""

    __tablename__ = "user_preferences"

    user_id: Mapped[str] = mapped_column(String(100), primary_key=True)
    default_cloud: Mapped[str | None] = mapped_column(String(100), nullable=True)
    onboarding_completed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    skip_splash: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    hidden_clouds: Mapped[list] = mapped_column(JSONDocument, nullable=False, default=list)
    saved_items: Mapped[list] = mapped_column(JSONDocument, nullable=False, default=list)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<UserPreferenceModel(user_id='{self.user_id}')>"
