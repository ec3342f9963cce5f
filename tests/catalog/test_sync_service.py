"""
Sync pipeline tests.
"""

import asyncio
import json

import pytest

from channel_video_system.core.errors import ExternalServiceError, StorageError
from channel_video_system.catalog.application.sync_service import SyncService, merge_records
from channel_video_system.catalog.infrastructure.event_codec import encode
from channel_video_system.catalog.infrastructure.repositories import JsonFileCatalogRepository

from tests.conftest import make_record, write_catalog


def event(record_id, title="Remote", file_id="remote-file", uploaded_at=1_800_000_000):
    return encode({"id": record_id, "title": title, "primary_handle": file_id, "duration_seconds": 5}, now=lambda: uploaded_at)


@pytest.fixture
def service(stub_remote, repository):
    return SyncService(stub_remote, repository, fetch_limit=100)


class TestMergeRecords:
    def test_later_observation_replaces_whole_record(self):
        existing = make_record("42", title="R1", thumbnail_handle="old-thumb")
        observed = make_record("42", title="R2", primary_handle="new-file")

        merged = merge_records([existing], [observed])
        assert merged == [observed]

    def test_drops_demo_and_incomplete(self):
        merged = merge_records([make_record("demo"), make_record("1", primary_handle="")], [make_record("2")])
        assert [r.id for r in merged] == ["2"]


class TestSyncService:
    def test_merges_events_and_skips_noise(self, service, stub_remote, catalog_store, catalog_path):
        write_catalog(catalog_path, [make_record("42", title="R1", created_at=1)])
        stub_remote.add_event("good morning channel")
        stub_remote.add_event(json.dumps({"type": "poll", "question": "?"}))
        stub_remote.add_event(event("42", title="R2"))
        stub_remote.add_event(event("43", uploaded_at=1_900_000_000))

        result = asyncio.run(service.sync())

        assert result.fetched_events == 4
        assert result.decoded_events == 2
        records = asyncio.run(catalog_store.load())
        assert [(r.id, r.title) for r in records] == [("43", "Remote"), ("42", "R2")]

    def test_second_run_is_idempotent(self, service, stub_remote, catalog_path):
        stub_remote.add_event(event("42"))
        asyncio.run(service.sync())
        before = catalog_path.read_bytes()

        result = asyncio.run(service.sync())

        assert not result.changed
        assert catalog_path.read_bytes() == before

    def test_refetching_same_events_changes_nothing(self, stub_remote, repository, catalog_path):
        class NoCursorRemote(type(stub_remote)):
            async def fetch_recent_events(self, limit, after=None):
                return await super().fetch_recent_events(limit, after=None)

        remote = NoCursorRemote()
        remote.add_event(event("42"))
        service = SyncService(remote, repository)
        asyncio.run(service.sync())
        before = catalog_path.read_bytes()

        assert not asyncio.run(service.sync()).changed
        assert catalog_path.read_bytes() == before

    def test_cursor_is_persisted_and_used(self, service, stub_remote, catalog_store):
        stub_remote.add_event(event("42"))
        first = asyncio.run(service.sync())
        asyncio.run(service.sync())

        assert stub_remote.fetch_calls == [None, first.sync_cursor]
        assert asyncio.run(catalog_store.snapshot()).sync_cursor == first.sync_cursor

    def test_demo_entry_removed(self, service, stub_remote, catalog_store, catalog_path):
        write_catalog(catalog_path, [make_record("demo"), make_record("1")])
        stub_remote.add_event(event("2"))

        asyncio.run(service.sync())
        assert "demo" not in [r.id for r in asyncio.run(catalog_store.load())]

    def test_fetch_failure_propagates(self, service, stub_remote, catalog_path):
        async def failing_fetch(limit, after=None):
            raise ExternalServiceError(401, "Unauthorized")

        stub_remote.fetch_recent_events = failing_fetch
        with pytest.raises(ExternalServiceError):
            asyncio.run(service.sync())
        assert not catalog_path.exists()

    def test_retries_then_gives_up_on_concurrent_writes(self, stub_remote, catalog_path):
        class AlwaysStaleRepository(JsonFileCatalogRepository):
            async def compare_and_swap(self, expected_version, snapshot):
                return False

        stub_remote.add_event(event("42"))
        service = SyncService(stub_remote, AlwaysStaleRepository(catalog_path), max_write_attempts=2)
        with pytest.raises(StorageError):
            asyncio.run(service.sync())
