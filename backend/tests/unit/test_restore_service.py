"""Unit tests for the RestoreService (restore engine and manual backups)."""

import pytest

from shared_store.application.services import RestoreService, SharedDataService
from shared_store.domain.entities import TriggerAction
from shared_store.domain.exceptions import NoDataError, NotFoundError, StorageUnavailableError


def _templates(count: int, prefix: str = "t") -> list[dict]:
    return [{"id": f"{prefix}-{i}", "name": f"Template {i}"} for i in range(count)]


@pytest.fixture
def service(documents, ledger, policies, saved_items) -> RestoreService:
    return RestoreService(documents, ledger, policies, saved_items)


@pytest.fixture
def writer(documents, ledger, policies) -> SharedDataService:
    return SharedDataService(documents, ledger, policies)


@pytest.mark.asyncio
async def test_restore_replaces_live_value_and_takes_pre_restore_snapshot(
    service: RestoreService, ledger, backups, documents
):
    backup = await ledger.snapshot("templates", _templates(10), TriggerAction.MANUAL)
    await documents.upsert("templates", _templates(3, prefix="live"))
    before = len(backups.entries)

    restored = await service.restore(backup.entry.id)

    assert restored.id == backup.entry.id
    assert (await documents.get("templates")).data == _templates(10)
    assert len(backups.entries) == before + 1
    newest = backups.entries[-1]
    assert newest.trigger_action is TriggerAction.PRE_RESTORE
    assert newest.item_count == 3


@pytest.mark.asyncio
async def test_restore_bypasses_the_guard(service: RestoreService, ledger, documents):
    backup = await ledger.snapshot("templates", _templates(1), TriggerAction.MANUAL)
    await documents.upsert("templates", _templates(100))

    await service.restore(backup.entry.id)

    assert len((await documents.get("templates")).data) == 1


@pytest.mark.asyncio
async def test_restore_onto_empty_key_takes_no_snapshot(service: RestoreService, ledger, backups, documents):
    backup = await ledger.snapshot("templates", _templates(2), TriggerAction.MANUAL)

    await service.restore(backup.entry.id)

    assert len(backups.entries) == 1
    assert (await documents.get("templates")).data == _templates(2)


@pytest.mark.asyncio
async def test_restore_unknown_id_raises_not_found(service: RestoreService):
    with pytest.raises(NotFoundError):
        await service.restore(999)


@pytest.mark.asyncio
async def test_restore_with_mismatched_key_raises_not_found(service: RestoreService, ledger):
    backup = await ledger.snapshot("templates", _templates(2), TriggerAction.MANUAL)

    with pytest.raises(NotFoundError):
        await service.restore(backup.entry.id, data_key="cloud_pocs")


@pytest.mark.asyncio
async def test_merge_restore_keeps_live_items(service: RestoreService, ledger, documents):
    backup = await ledger.snapshot("templates", _templates(3, prefix="old"), TriggerAction.MANUAL)
    await documents.upsert("templates", _templates(2, prefix="new"))

    await service.restore(backup.entry.id, merge=True)

    ids = [item["id"] for item in (await documents.get("templates")).data]
    assert ids == ["new-0", "new-1", "old-0", "old-1", "old-2"]


@pytest.mark.asyncio
async def test_merge_restore_uses_policy_identity(service: RestoreService, ledger, documents):
    backup = await ledger.snapshot(
        "saved_items",
        [{"templateId": "t1", "variantKey": "dark", "note": "old"}],
        TriggerAction.MANUAL,
    )
    await documents.upsert("saved_items", [{"templateId": "t1", "variantKey": "dark", "note": "new"}])

    await service.restore(backup.entry.id, merge=True)

    assert (await documents.get("saved_items")).data == [
        {"templateId": "t1", "variantKey": "dark", "note": "new"}
    ]


@pytest.mark.asyncio
async def test_get_backup_includes_payload(service: RestoreService, ledger):
    backup = await ledger.snapshot("templates", _templates(2), TriggerAction.ADD)

    entry = await service.get_backup(backup.entry.id, data_key="templates")

    assert entry.payload == _templates(2)


@pytest.mark.asyncio
async def test_create_manual_snapshots_current_value(service: RestoreService, writer, backups):
    await writer.put("templates", _templates(4))

    entry = await service.create_manual("templates", actor="jane")

    assert entry.trigger_action is TriggerAction.MANUAL
    assert entry.item_count == 4
    assert entry.actor == "jane"
    assert backups.for_key("templates") == [entry]


@pytest.mark.asyncio
async def test_create_manual_without_data_raises(service: RestoreService, documents, backups):
    with pytest.raises(NoDataError):
        await service.create_manual("templates")

    await documents.upsert("templates", [])
    with pytest.raises(NoDataError):
        await service.create_manual("templates")

    assert backups.entries == []


@pytest.mark.asyncio
async def test_create_manual_reports_ledger_failure(documents, failing_ledger, policies, saved_items):
    service = RestoreService(documents, failing_ledger, policies, saved_items)
    await documents.upsert("templates", _templates(2))

    with pytest.raises(StorageUnavailableError):
        await service.create_manual("templates")


@pytest.mark.asyncio
async def test_list_backup_keys(service: RestoreService, ledger):
    await ledger.snapshot("templates", [1], TriggerAction.ADD)
    await ledger.snapshot("templates", [1, 2], TriggerAction.ADD)
    await ledger.snapshot("cloud_pocs", {"a": 1}, TriggerAction.ADD)

    summaries = {s.data_key: s.backup_count for s in await service.list_backup_keys()}

    assert summaries == {"templates": 2, "cloud_pocs": 1}


@pytest.mark.asyncio
async def test_user_key_restore_writes_saved_items_not_shared_data(
    service: RestoreService, saved_items, backups, documents
):
    await saved_items.put("u1", [{"templateId": "a"}, {"templateId": "b"}])
    await saved_items.put("u1", [{"templateId": "a"}, {"templateId": "b"}, {"templateId": "c"}])
    [backup] = backups.for_key("saved_items:u1")

    await service.restore(backup.id, data_key="saved_items:u1")

    assert await saved_items.get("u1") == [{"templateId": "a"}, {"templateId": "b"}]
    assert await documents.get("saved_items:u1") is None
    pre_restore = backups.for_key("saved_items:u1")[-1]
    assert pre_restore.trigger_action is TriggerAction.PRE_RESTORE
    assert pre_restore.item_count == 3


@pytest.mark.asyncio
async def test_user_key_merge_restore_uses_saved_items_identity(service: RestoreService, saved_items, backups):
    await saved_items.put("u1", [{"templateId": "a", "variantKey": "dark"}])
    await saved_items.put("u1", [{"templateId": "b"}])
    [backup] = backups.for_key("saved_items:u1")

    await service.restore(backup.id, merge=True)

    assert await saved_items.get("u1") == [
        {"templateId": "b"},
        {"templateId": "a", "variantKey": "dark"},
    ]


@pytest.mark.asyncio
async def test_manual_backup_of_user_key(service: RestoreService, saved_items):
    with pytest.raises(NoDataError):
        await service.create_manual("saved_items:u1")

    await saved_items.put("u1", [{"templateId": "a"}])
    entry = await service.create_manual("saved_items:u1", actor="u1")

    assert entry.item_count == 1
    assert entry.payload == [{"templateId": "a"}]
