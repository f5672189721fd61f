"""Unit tests for the guarded write path of SharedDataService."""

import pytest

from shared_store.application.services import SharedDataService
from shared_store.domain.entities import TriggerAction
from shared_store.domain.exceptions import RejectedByGuardError, ValidationError


def _templates(count: int, prefix: str = "t") -> list[dict]:
    return [{"id": f"{prefix}-{i}", "name": f"Template {i}"} for i in range(count)]


@pytest.fixture
def service(documents, ledger, policies) -> SharedDataService:
    return SharedDataService(documents, ledger, policies)


@pytest.mark.asyncio
async def test_get_unknown_key_returns_none(service: SharedDataService):
    assert await service.get("templates") is None


@pytest.mark.asyncio
async def test_put_then_get_round_trips(service: SharedDataService):
    payload = [{"id": "t-1", "name": "Hero", "meta": {"tags": ["a", "b"], "w": 1.5}}]
    await service.put("templates", payload)
    assert await service.get("templates") == payload


@pytest.mark.asyncio
async def test_first_write_takes_no_backup(service: SharedDataService, backups):
    result = await service.put("templates", _templates(3), actor="jane")

    assert result.count == 3
    assert result.backup_id is None
    assert backups.entries == []


@pytest.mark.asyncio
async def test_empty_write_is_rejected_and_data_kept(service: SharedDataService, backups):
    existing = _templates(3)
    await service.put("templates", existing)

    with pytest.raises(RejectedByGuardError) as exc_info:
        await service.put("templates", [])

    assert exc_info.value.current_count == 3
    assert exc_info.value.attempted_count == 0
    assert await service.get("templates") == existing
    assert backups.entries == []


@pytest.mark.asyncio
async def test_bulk_reduction_is_rejected(service: SharedDataService):
    await service.put("templates", _templates(100))

    with pytest.raises(RejectedByGuardError) as exc_info:
        await service.put("templates", _templates(40))

    assert exc_info.value.current_count == 100
    assert exc_info.value.attempted_count == 40
    assert len(await service.get("templates")) == 100


@pytest.mark.asyncio
async def test_moderate_reduction_snapshots_previous_value(service: SharedDataService, backups):
    await service.put("templates", _templates(100))

    result = await service.put("templates", _templates(60), actor="jane")

    assert result.trigger_action is TriggerAction.DELETE
    [entry] = backups.for_key("templates")
    assert entry.trigger_action is TriggerAction.DELETE
    assert entry.item_count == 100
    assert entry.actor == "jane"
    assert result.backup_id == entry.id
    assert len(await service.get("templates")) == 60


@pytest.mark.asyncio
async def test_invalid_shape_is_refused_before_guard(service: SharedDataService):
    await service.put("templates", _templates(3))

    with pytest.raises(ValidationError):
        await service.put("templates", {"id": "t-1"})

    assert len(await service.get("templates")) == 3


@pytest.mark.asyncio
async def test_write_succeeds_when_backup_fails(documents, failing_ledger, policies):
    service = SharedDataService(documents, failing_ledger, policies)
    await service.put("templates", _templates(3))

    result = await service.put("templates", _templates(4))

    assert result.backup_id is None
    assert len(await service.get("templates")) == 4


@pytest.mark.asyncio
async def test_unguarded_key_uses_save_and_own_retention(service: SharedDataService, backups):
    for i in range(6):
        await service.put("templates_last_refreshed", f"2024-05-0{i + 1}T00:00:00Z")

    entries = backups.for_key("templates_last_refreshed")
    assert len(entries) == 3
    assert {e.trigger_action for e in entries} == {TriggerAction.SAVE}
    assert await service.get("templates_last_refreshed") == "2024-05-06T00:00:00Z"


@pytest.mark.asyncio
async def test_list_documents_reports_counts(service: SharedDataService):
    await service.put("templates", _templates(2))
    await service.put("cloud_pocs", {"c1": [], "c2": [], "c3": []})

    summaries = {s.key: s.item_count for s in await service.list_documents()}

    assert summaries == {"templates": 2, "cloud_pocs": 3}
