"""Dialect-specific ``INSERT … ON CONFLICT`` constructors."""

from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession


def dialect_insert(session: AsyncSession, model: type):
    """Return an insert construct that supports ``on_conflict_do_*`` for the session's backend."""
    dialect = session.bind.dialect.name
    if dialect == "postgresql":
        return postgresql.insert(model)
    if dialect == "sqlite":
        return sqlite.insert(model)
    raise NotImplementedError(f"Upsert is not supported for the '{dialect}' dialect")
