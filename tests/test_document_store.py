"""Record store tests: SQLite document store, unconfigured store and snapshot channels."""

import asyncio

import pytest

from clergy_roster.config import StoreSettings
from clergy_roster.store import create_store
from clergy_roster.store.document_store import SQLiteDocumentStore, deep_merge
from clergy_roster.store.errors import (
    MissingIdentifierError,
    PermissionDeniedError,
    StoreError,
    StoreNotConfiguredError,
)
from clergy_roster.store.gateway import RosterSnapshot, SnapshotChannel, SubscriptionFailed
from clergy_roster.store.models import ClergyRecord, ClergyStatus, OrganizationInfo
from clergy_roster.store.unconfigured import UnconfiguredStore


async def next_message(channel):
    return await asyncio.wait_for(anext(channel), timeout=1)


class TestSQLiteDocumentStore:

    def test_create_assigns_id_and_broadcasts(self, sqlite_store):
        """Should push a new snapshot containing the created record."""
        async def run():
            channel = sqlite_store.subscribe()
            initial = await next_message(channel)
            record_id = await sqlite_store.create(ClergyRecord(id="ignored", full_name="A"))
            after = await next_message(channel)
            channel.close()
            return initial, record_id, after

        initial, record_id, after = asyncio.run(run())
        assert initial == RosterSnapshot(())
        assert record_id and record_id != "ignored"
        assert [(r.id, r.full_name) for r in after.records] == [(record_id, "A")]

    def test_subscribe_delivers_current_roster_in_insertion_order(self, sqlite_store):
        async def run():
            for name in ("A", "B", "C"):
                await sqlite_store.create(ClergyRecord(full_name=name))
            channel = sqlite_store.subscribe()
            snapshot = await next_message(channel)
            channel.close()
            return snapshot

        snapshot = asyncio.run(run())
        assert [r.full_name for r in snapshot.records] == ["A", "B", "C"]

    def test_update_replaces_whole_record(self, sqlite_store):
        async def run():
            record_id = await sqlite_store.create(ClergyRecord(full_name="A", tenure="2010 - Nay"))
            await sqlite_store.update(record_id, ClergyRecord(full_name="A2", status=ClergyStatus.WARNING_1))
            channel = sqlite_store.subscribe()
            snapshot = await next_message(channel)
            channel.close()
            return snapshot.records[0]

        record = asyncio.run(run())
        assert record.full_name == "A2"
        assert record.status is ClergyStatus.WARNING_1
        assert record.tenure == ""

    def test_update_without_id_is_rejected(self, sqlite_store):
        with pytest.raises(MissingIdentifierError) as exc:
            asyncio.run(sqlite_store.update(None, ClergyRecord(full_name="A")))
        assert exc.value.code == "missing-id"

    def test_update_unknown_id_is_not_found(self, sqlite_store):
        with pytest.raises(StoreError) as exc:
            asyncio.run(sqlite_store.update("nope", ClergyRecord(full_name="A")))
        assert exc.value.code == "not-found"

    def test_delete(self, sqlite_store):
        async def run():
            keep = await sqlite_store.create(ClergyRecord(full_name="Keep"))
            drop = await sqlite_store.create(ClergyRecord(full_name="Drop"))
            await sqlite_store.delete(drop)
            channel = sqlite_store.subscribe()
            snapshot = await next_message(channel)
            channel.close()
            return keep, snapshot

        keep, snapshot = asyncio.run(run())
        assert [r.id for r in snapshot.records] == [keep]

    def test_delete_without_id_is_rejected(self, sqlite_store):
        with pytest.raises(MissingIdentifierError):
            asyncio.run(sqlite_store.delete(""))

    def test_read_only_store_denies_writes(self, tmp_path):
        store = SQLiteDocumentStore(db_path=str(tmp_path / "ro.db"), read_only=True)
        with pytest.raises(PermissionDeniedError) as exc:
            asyncio.run(store.create(ClergyRecord(full_name="A")))
        assert exc.value.code == "permission-denied"
        with pytest.raises(PermissionDeniedError):
            asyncio.run(store.delete("some-id"))

    def test_closed_channel_receives_nothing(self, sqlite_store):
        async def run():
            channel = sqlite_store.subscribe()
            await next_message(channel)
            channel.close()
            await sqlite_store.create(ClergyRecord(full_name="A"))
            return [message async for message in channel]

        assert asyncio.run(run()) == []

    def test_listen_calls_back_until_unsubscribed(self, sqlite_store):
        seen = []

        async def run():
            unsubscribe = sqlite_store.listen(seen.append, lambda e: seen.append(e))
            await asyncio.sleep(0.01)
            await sqlite_store.create(ClergyRecord(full_name="A"))
            await asyncio.sleep(0.01)
            unsubscribe()
            await sqlite_store.create(ClergyRecord(full_name="B"))
            await asyncio.sleep(0.01)

        asyncio.run(run())
        assert [len(records) for records in seen] == [0, 1]


class TestSettingsDocument:

    def test_absent_until_written(self, sqlite_store):
        assert asyncio.run(sqlite_store.get_settings()) is None

    def test_upsert_round_trip(self, sqlite_store):
        info = OrganizationInfo(introduction="Giới thiệu")
        info.social_links.website = "https://aos.example"

        async def run():
            await sqlite_store.set_settings(info)
            await sqlite_store.set_settings(info)
            return await sqlite_store.get_settings()

        stored = asyncio.run(run())
        assert stored.introduction == "Giới thiệu"
        assert stored.social_links.website == "https://aos.example"

    def test_settings_do_not_appear_in_roster(self, sqlite_store):
        async def run():
            await sqlite_store.set_settings(OrganizationInfo(introduction="x"))
            channel = sqlite_store.subscribe()
            snapshot = await next_message(channel)
            channel.close()
            return snapshot

        assert asyncio.run(run()).records == ()

    def test_deep_merge(self):
        merged = deep_merge(
            {"introduction": "old", "socialLinks": {"facebook": "f", "extra": "kept"}},
            {"introduction": "new", "socialLinks": {"facebook": "g"}},
        )
        assert merged == {"introduction": "new", "socialLinks": {"facebook": "g", "extra": "kept"}}


class TestUnconfiguredStore:

    def test_subscription_fails_immediately(self):
        async def run():
            return await next_message(UnconfiguredStore().subscribe())

        message = asyncio.run(run())
        assert isinstance(message, SubscriptionFailed)
        assert isinstance(message.error, StoreNotConfiguredError)
        assert message.error.code == "not-configured"

    def test_writes_fail(self):
        store = UnconfiguredStore()
        assert not store.configured
        with pytest.raises(StoreNotConfiguredError):
            asyncio.run(store.create(ClergyRecord(full_name="A")))
        with pytest.raises(StoreNotConfiguredError):
            asyncio.run(store.set_settings(OrganizationInfo()))
        assert asyncio.run(store.get_settings()) is None


class TestCreateStore:

    def test_none_backend(self):
        assert isinstance(create_store(StoreSettings(backend="none")), UnconfiguredStore)

    def test_sqlite_backend_creates_directory(self, tmp_path):
        db_path = tmp_path / "nested" / "roster.db"
        store = create_store(StoreSettings(db_path=str(db_path), collection="priests"))
        assert isinstance(store, SQLiteDocumentStore)
        assert store.collection == "priests"
        assert db_path.parent.is_dir()


class TestSnapshotChannel:

    def test_publish_after_close_is_ignored(self):
        async def run():
            closed = []
            channel = SnapshotChannel(on_close=closed.append)
            channel.publish(RosterSnapshot(()))
            channel.close()
            channel.close()
            channel.publish(RosterSnapshot(()))
            return closed, [message async for message in channel]

        closed, delivered = asyncio.run(run())
        assert len(closed) == 1
        assert delivered == []
