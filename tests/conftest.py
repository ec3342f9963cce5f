"""
Shared fixtures for the Channel Video System tests.
"""

import json
from typing import List, Optional

import pytest

from channel_video_system.core.config import Config
from channel_video_system.catalog.domain.interfaces import RemoteLogClient
from channel_video_system.catalog.domain.models import ContentSlot, RawEvent, UploadedBlob, VideoRecord
from channel_video_system.catalog.infrastructure.repositories import JsonFileCatalogRepository
from channel_video_system.catalog.application.catalog_store import CatalogStore


class StubRemoteLogClient(RemoteLogClient):
    """In-memory stand-in for the channel. Records every call."""

    def __init__(self, content_url: str = "https://cdn.example/x"):
        self.content_url = content_url
        self.next_position = 100
        self.uploads: List[ContentSlot] = []
        self.published: List[str] = []
        self.events: List[RawEvent] = []
        self.fetch_calls: List[Optional[int]] = []
        self.derived_thumbnail_handle = ""
        self.upload_error: Optional[Exception] = None
        self.publish_error: Optional[Exception] = None
        self.resolve_error: Optional[Exception] = None
        self.resolved_handles: List[str] = []

    def _position(self) -> int:
        self.next_position += 1
        return self.next_position

    def add_event(self, payload: str) -> None:
        self.events.append(RawEvent(position=self._position(), payload=payload))

    async def upload_blob(self, data: bytes, slot: ContentSlot, filename: str) -> UploadedBlob:
        if self.upload_error:
            raise self.upload_error
        self.uploads.append(slot)
        position = self._position()
        derived = self.derived_thumbnail_handle if slot is ContentSlot.PRIMARY else ""
        return UploadedBlob(handle=f"{slot.value}-handle-{position}", log_position=position, derived_thumbnail_handle=derived)

    async def publish_event(self, payload: str) -> int:
        if self.publish_error:
            raise self.publish_error
        self.published.append(payload)
        self.add_event(payload)
        return self.events[-1].position

    async def fetch_recent_events(self, limit: int, after: Optional[int] = None) -> List[RawEvent]:
        self.fetch_calls.append(after)
        events = [event for event in self.events if after is None or event.position > after]
        return events[-limit:]

    async def resolve_content_url(self, handle: str) -> str:
        self.resolved_handles.append(handle)
        if self.resolve_error:
            raise self.resolve_error
        return self.content_url


def make_record(record_id: str = "42", title: str = "Title", primary_handle: str = "file-42", thumbnail_handle: str = "", created_at: int = 1_700_000_000, duration_seconds: float = 10) -> VideoRecord:
    return VideoRecord(
        id=record_id,
        title=title,
        description="",
        primary_handle=primary_handle,
        thumbnail_handle=thumbnail_handle,
        duration_seconds=duration_seconds,
        created_at=created_at,
    )


@pytest.fixture
def stub_remote():
    return StubRemoteLogClient()


@pytest.fixture
def catalog_path(tmp_path):
    return tmp_path / "data" / "videos.json"


@pytest.fixture
def repository(catalog_path):
    return JsonFileCatalogRepository(catalog_path)


@pytest.fixture
def catalog_store(repository):
    return CatalogStore(repository)


@pytest.fixture
def config(tmp_path):
    """Config backed by a file in tmp_path, no log file"""
    config_file = tmp_path / "config.json"
    config_file.write_text(
        json.dumps(
            {
                "telegram": {"bot_token": "123:TEST", "channel_id": "@test_channel"},
                "storage": {"base_path": str(tmp_path / "data"), "catalog_file": "videos.json"},
                "system": {"log_file": None, "log_level": "DEBUG"},
            }
        )
    )
    return Config(str(config_file))


def write_catalog(path, records, version=1, sync_cursor=None):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps({"version": version, "sync_cursor": sync_cursor, "records": [r.to_dict() for r in records]}, indent=2))
