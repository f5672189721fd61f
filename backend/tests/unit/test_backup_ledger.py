"""Unit tests for the BackupLedger."""

import logging

import pytest

from shared_store.application.services import BackupLedger
from shared_store.domain.entities import TriggerAction


@pytest.mark.asyncio
async def test_snapshot_records_item_count_and_actor(ledger: BackupLedger, backups):
    outcome = await ledger.snapshot("templates", [1, 2, 3], TriggerAction.ADD, "jane")

    assert outcome.ok is True
    assert outcome.entry.id == 1
    assert outcome.entry.item_count == 3
    assert outcome.entry.actor == "jane"
    assert backups.for_key("templates")[0].payload == [1, 2, 3]


@pytest.mark.asyncio
async def test_snapshot_failure_is_reported_not_raised(failing_ledger: BackupLedger, caplog):
    with caplog.at_level(logging.ERROR):
        outcome = await failing_ledger.snapshot("templates", [1], TriggerAction.UPDATE)

    assert outcome.ok is False
    assert outcome.entry is None
    assert "disk I/O error" in outcome.error
    assert "Failed to create backup for templates" in caplog.text


@pytest.mark.asyncio
async def test_prune_keeps_newest_entries_for_key_only(ledger: BackupLedger, backups):
    for i in range(5):
        await ledger.snapshot("templates", [i], TriggerAction.UPDATE)
    await ledger.snapshot("cloud_pocs", {"a": 1}, TriggerAction.UPDATE)

    deleted = await ledger.prune("templates", keep_count=2)

    assert deleted == 3
    assert [e.id for e in await ledger.list_entries("templates")] == [5, 4]
    assert len(backups.for_key("cloud_pocs")) == 1


@pytest.mark.asyncio
async def test_prune_uses_default_retention(backups):
    ledger = BackupLedger(backups, default_retention=1)
    await ledger.snapshot("templates", [1], TriggerAction.ADD)
    await ledger.snapshot("templates", [1, 2], TriggerAction.ADD)

    assert await ledger.prune("templates") == 1
    assert len(backups.for_key("templates")) == 1


@pytest.mark.asyncio
async def test_prune_failure_returns_zero(failing_ledger: BackupLedger):
    assert await failing_ledger.prune("templates", keep_count=1) == 0


@pytest.mark.asyncio
async def test_list_is_limited(ledger: BackupLedger):
    for i in range(4):
        await ledger.snapshot("templates", [i], TriggerAction.UPDATE)

    entries = await ledger.list_entries("templates", limit=2)

    assert len(entries) == 2
    assert entries[0].created_at > entries[1].created_at
