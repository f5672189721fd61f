"""Shared fixtures: in-memory fakes for unit tests, in-memory SQLite for integration tests."""

from collections import Counter
from datetime import datetime, timedelta, timezone
from typing import Any

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from shared_store.application.interfaces import (
    ActivityRepository,
    BackupRepository,
    DocumentRepository,
    PreferenceRepository,
)
from shared_store.application.services import ActivityLog, BackupLedger, SavedItemsService
from shared_store.domain.entities import (
    ActivityEntry,
    BackupEntry,
    BackupKeySummary,
    CollectionPolicy,
    Document,
    DocumentShape,
    DocumentSummary,
    PreferenceRecord,
)
from shared_store.domain.exceptions import NotFoundError
from shared_store.infrastructure.database import Base
from shared_store.infrastructure.database.session import enable_sqlite_savepoints, get_db_session
from shared_store.infrastructure.dependencies import get_policy_provider
from shared_store.infrastructure.policies import StaticCollectionPolicyProvider
from shared_store.main import app


class FakeDocumentRepository(DocumentRepository):
    """In-memory fake repository for unit testing."""

    def __init__(self):
        self._documents: dict[str, Document] = {}

    async def get(self, key: str) -> Document | None:
        return self._documents.get(key)

    async def upsert(self, key: str, data: Any) -> Document:
        document = Document(key=key, data=data)
        self._documents[key] = document
        return document

    async def list_summaries(self) -> list[DocumentSummary]:
        return [
            DocumentSummary(key=d.key, item_count=d.item_count, updated_at=d.updated_at)
            for d in sorted(self._documents.values(), key=lambda d: d.updated_at, reverse=True)
        ]


class FakeBackupRepository(BackupRepository):
    """In-memory ledger. Each entry is one second newer than the previous one."""

    def __init__(self):
        self.entries: list[BackupEntry] = []
        self._next_id = 1
        self._clock = datetime(2024, 1, 1, tzinfo=timezone.utc)

    async def add(self, entry: BackupEntry) -> BackupEntry:
        entry.id = self._next_id
        entry.created_at = self._clock + timedelta(seconds=self._next_id)
        self._next_id += 1
        self.entries.append(entry)
        return entry

    def _newest_first(self, data_key: str) -> list[BackupEntry]:
        return sorted(
            (e for e in self.entries if e.data_key == data_key),
            key=lambda e: (e.created_at, e.id),
            reverse=True,
        )

    async def list_for_key(self, data_key: str, limit: int = 20) -> list[BackupEntry]:
        return self._newest_first(data_key)[:limit]

    async def get_by_id(self, backup_id: int) -> BackupEntry | None:
        return next((e for e in self.entries if e.id == backup_id), None)

    async def prune(self, data_key: str, keep_count: int) -> int:
        stale = {e.id for e in self._newest_first(data_key)[keep_count:]}
        self.entries = [e for e in self.entries if e.id not in stale]
        return len(stale)

    async def summarize_keys(self) -> list[BackupKeySummary]:
        counts = Counter(e.data_key for e in self.entries)
        return [
            BackupKeySummary(
                data_key=key,
                backup_count=count,
                latest_backup=self._newest_first(key)[0].created_at,
            )
            for key, count in counts.items()
        ]

    def for_key(self, data_key: str) -> list[BackupEntry]:
        return [e for e in self.entries if e.data_key == data_key]


class FailingBackupRepository(FakeBackupRepository):
    """Ledger whose writes always fail, as when the backup table is unavailable."""

    async def add(self, entry: BackupEntry) -> BackupEntry:
        raise RuntimeError("disk I/O error")

    async def prune(self, data_key: str, keep_count: int) -> int:
        raise RuntimeError("disk I/O error")


class FakePreferenceRepository(PreferenceRepository):
    """In-memory fake repository for unit testing."""

    def __init__(self):
        self._records: dict[str, PreferenceRecord] = {}

    async def get(self, user_id: str) -> PreferenceRecord | None:
        return self._records.get(user_id)

    async def insert_default(self, user_id: str) -> None:
        self._records.setdefault(user_id, PreferenceRecord(user_id=user_id))

    async def update(self, record: PreferenceRecord) -> PreferenceRecord:
        if record.user_id not in self._records:
            raise NotFoundError("PreferenceRecord", record.user_id)
        self._records[record.user_id] = record
        return record


class FakeActivityRepository(ActivityRepository):
    """In-memory activity log. Each entry is one second newer than the previous one."""

    def __init__(self):
        self.entries: list[ActivityEntry] = []
        self._next_id = 1
        self._clock = datetime(2024, 1, 1, tzinfo=timezone.utc)

    async def add_many(self, entries) -> list[ActivityEntry]:
        for entry in entries:
            entry.id = self._next_id
            entry.created_at = self._clock + timedelta(seconds=self._next_id)
            self._next_id += 1
            self.entries.append(entry)
        return list(entries)

    def _scoped(self, cloud_id: str | None) -> list[ActivityEntry]:
        return [e for e in self.entries if cloud_id is None or e.cloud_id == cloud_id]

    async def list_recent(self, limit: int = 100, cloud_id: str | None = None) -> list[ActivityEntry]:
        return sorted(self._scoped(cloud_id), key=lambda e: e.id, reverse=True)[:limit]

    async def get_many(self, activity_ids) -> list[ActivityEntry]:
        return [e for e in self.entries if e.id in set(activity_ids)]

    async def mark_restored(self, activity_ids) -> int:
        marked = [e for e in self.entries if e.id in set(activity_ids)]
        for entry in marked:
            entry.is_restored = True
        return len(marked)

    async def count_by_action(self, cloud_id: str | None = None) -> dict[str, int]:
        return dict(Counter(e.action for e in self._scoped(cloud_id)))

    async def count_users(self, cloud_id: str | None = None) -> int:
        return len({e.user_name for e in self._scoped(cloud_id) if e.user_name})

    async def latest_per_asset(self, action: str, cloud_id: str | None = None) -> list[ActivityEntry]:
        latest: dict[str, ActivityEntry] = {}
        for entry in sorted(self._scoped(cloud_id), key=lambda e: e.id, reverse=True):
            if entry.action == action:
                latest.setdefault(entry.asset_id, entry)
        return list(latest.values())

    def actions(self) -> list[tuple[str, str]]:
        return [(e.action, e.asset_id) for e in self.entries]


class FailingActivityRepository(FakeActivityRepository):
    """Activity log whose writes always fail."""

    async def add_many(self, entries) -> list[ActivityEntry]:
        raise RuntimeError("activity_log is locked")


TEST_POLICIES = [
    CollectionPolicy(
        key="templates",
        shape=DocumentShape.ARRAY,
        required_fields=("id", "name"),
        track_activity=True,
    ),
    CollectionPolicy(key="cloud_pocs", shape=DocumentShape.OBJECT),
    CollectionPolicy(key="templates_last_refreshed", guarded=False, retention=3),
    CollectionPolicy(
        key="saved_items",
        shape=DocumentShape.ARRAY,
        required_fields=("templateId",),
        merge_identity=("templateId", "variantKey"),
        allow_clear=True,
        max_removals=2,
    ),
]


@pytest.fixture
def documents() -> FakeDocumentRepository:
    return FakeDocumentRepository()


@pytest.fixture
def backups() -> FakeBackupRepository:
    return FakeBackupRepository()


@pytest.fixture
def ledger(backups: FakeBackupRepository) -> BackupLedger:
    return BackupLedger(backups, default_retention=50)


@pytest.fixture
def policies() -> StaticCollectionPolicyProvider:
    return StaticCollectionPolicyProvider(TEST_POLICIES, default_retention=50)


@pytest.fixture
def failing_ledger() -> BackupLedger:
    return BackupLedger(FailingBackupRepository())


@pytest.fixture
def preferences() -> FakePreferenceRepository:
    return FakePreferenceRepository()


@pytest.fixture
def saved_items(preferences, ledger, policies) -> SavedItemsService:
    return SavedItemsService(preferences, ledger, policies)


@pytest.fixture
def activities() -> FakeActivityRepository:
    return FakeActivityRepository()


@pytest.fixture
def activity_log(activities: FakeActivityRepository) -> ActivityLog:
    return ActivityLog(activities)


@pytest.fixture
def failing_activity_log() -> ActivityLog:
    return ActivityLog(FailingActivityRepository())


# ── In-memory SQLite for repository and API tests ──────────────────


@pytest_asyncio.fixture
async def session_factory():
    """Fresh in-memory database per test; StaticPool keeps it on one connection."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    enable_sqlite_savepoints(engine)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def client(session_factory, policies):
    """HTTP client against the app, with the DB session and policies overridden."""

    async def _override_session():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db_session] = _override_session
    app.dependency_overrides[get_policy_provider] = lambda: policies

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
