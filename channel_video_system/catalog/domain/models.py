"""
Catalog Domain Models.

Pure business entities and value objects for the video catalog.
These models contain no external dependencies.
"""

from dataclasses import dataclass, field, asdict
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional

SCHEMA_VERSION = 1

# Reserved id that is never listed or resolved
DEMO_RECORD_ID = "demo"


class ContentSlot(Enum):
    """Which content handle of a record an operation targets"""
    PRIMARY = "primary"
    THUMBNAIL = "thumbnail"


@dataclass(frozen=True)
class VideoRecord:
    """Catalog entry describing one published video"""
    id: str
    title: str
    description: str = ""
    primary_handle: str = ""
    thumbnail_handle: str = ""
    duration_seconds: float = 0
    created_at: int = 0
    schema_version: int = SCHEMA_VERSION

    @property
    def is_demo(self) -> bool:
        return self.id == DEMO_RECORD_ID

    @property
    def is_visible(self) -> bool:
        """Listed and resolvable: has a primary handle and is not the demo sentinel"""
        return bool(self.primary_handle) and not self.is_demo

    @property
    def has_thumbnail(self) -> bool:
        return bool(self.thumbnail_handle)

    def handle_for(self, slot: ContentSlot) -> str:
        if slot is ContentSlot.THUMBNAIL:
            return self.thumbnail_handle
        return self.primary_handle

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "VideoRecord":
        """Build a record from its persisted form, ignoring unknown keys"""
        return cls(
            id=str(data["id"]),
            title=data.get("title", ""),
            description=data.get("description", ""),
            primary_handle=data.get("primary_handle", ""),
            thumbnail_handle=data.get("thumbnail_handle", ""),
            duration_seconds=data.get("duration_seconds", 0),
            created_at=data.get("created_at", 0),
            schema_version=data.get("schema_version", SCHEMA_VERSION),
        )


@dataclass(frozen=True)
class ValidationResult:
    valid: bool
    errors: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class CatalogSnapshot:
    """Versioned catalog document as stored on disk"""
    version: int = 0
    records: List[VideoRecord] = field(default_factory=list)
    sync_cursor: Optional[int] = None

    def get(self, record_id: str) -> Optional[VideoRecord]:
        for record in self.records:
            if record.id == record_id:
                return record
        return None


@dataclass(frozen=True)
class UploadedBlob:
    """Result of uploading one binary asset to the remote service"""
    handle: str
    log_position: int
    derived_thumbnail_handle: str = ""


@dataclass(frozen=True)
class RawEvent:
    """One entry of the remote log, catalog event or not"""
    position: int
    payload: str


@dataclass(frozen=True)
class DecodeResult:
    """Outcome of decoding a raw payload; skip_reason is set when record is None"""
    record: Optional[VideoRecord] = None
    skip_reason: Optional[str] = None

    @property
    def is_event(self) -> bool:
        return self.record is not None


@dataclass(frozen=True)
class ResolvedContent:
    """Where to redirect for a slot. degraded means the placeholder was used."""
    url: str
    degraded: bool = False
    reason: Optional[str] = None


@dataclass
class PublishRequest:
    """Input to the publish pipeline"""
    video: bytes
    title: str
    description: str = ""
    duration_seconds: float = 0
    thumbnail: Optional[bytes] = None
    video_filename: str = "video.mp4"
    thumbnail_filename: str = "thumbnail.jpg"


@dataclass(frozen=True)
class PublishResult:
    record: VideoRecord
    catalog_updated: bool = True
    catalog_error: Optional[str] = None


@dataclass(frozen=True)
class SyncResult:
    fetched_events: int
    decoded_events: int
    total_records: int
    changed: bool
    sync_cursor: Optional[int] = None
