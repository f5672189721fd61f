"""SQLAlchemy database session and engine configuration."""

from collections.abc import AsyncGenerator

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from shared_store.config import get_settings
from shared_store.infrastructure.database.errors import storage_errors


def _get_async_url(url: str) -> str:
    """Convert a sync SQLAlchemy URL to an async one."""
    if url.startswith("sqlite:///"):
        return url.replace("sqlite:///", "sqlite+aiosqlite:///", 1)
    if url.startswith("postgresql://"):
        return url.replace("postgresql://", "postgresql+asyncpg://", 1)
    return url


def enable_sqlite_savepoints(async_engine: AsyncEngine) -> None:
    """Let SQLAlchemy emit BEGIN itself on SQLite connections.

    The sqlite3 driver otherwise begins transactions lazily and a RELEASE
    of the first SAVEPOINT commits everything before it.
    """

    @event.listens_for(async_engine.sync_engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(async_engine.sync_engine, "begin")
    def _on_begin(conn):
        conn.exec_driver_sql("BEGIN")


settings = get_settings()
_async_url = _get_async_url(settings.database_url)

engine = create_async_engine(
    _async_url,
    echo=(settings.app_env == "development" and settings.log_level_sql.upper() == "DEBUG"),
    pool_pre_ping=_async_url.startswith("postgresql"),
    future=True,
)
if _async_url.startswith("sqlite"):
    enable_sqlite_savepoints(engine)

async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency — yields an async DB session per request.

    One request is one transaction: the session commits after the handler
    returns and rolls back on any error.
    """
    async with async_session_factory() as session:
        try:
            yield session
            async with storage_errors():
                await session.commit()
        except Exception:
            await session.rollback()
            raise
