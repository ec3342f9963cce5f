"""
Catalog Domain Interfaces.

Abstract contracts for snapshot storage, the remote log/blob service and
local media probing. Application services depend only on these.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Optional

from .models import CatalogSnapshot, ContentSlot, RawEvent, UploadedBlob


class CatalogRepository(ABC):
    """Versioned storage for the catalog snapshot"""

    @abstractmethod
    async def read(self) -> CatalogSnapshot:
        """Read the current snapshot. An absent store reads as an empty version 0."""
        pass

    @abstractmethod
    async def compare_and_swap(self, expected_version: int, snapshot: CatalogSnapshot) -> bool:
        """Write snapshot as version expected_version + 1 if the stored version still matches"""
        pass

    @abstractmethod
    async def write(self, snapshot: CatalogSnapshot) -> CatalogSnapshot:
        """Unconditional atomic write. Returns the snapshot with its new version."""
        pass


class RemoteLogClient(ABC):
    """Stateless adapter over the external blob and log service"""

    @abstractmethod
    async def upload_blob(self, data: bytes, slot: ContentSlot, filename: str) -> UploadedBlob:
        """Upload a binary asset and return its content handle"""
        pass

    @abstractmethod
    async def publish_event(self, payload: str) -> int:
        """Append a serialized event to the log and return its position"""
        pass

    @abstractmethod
    async def fetch_recent_events(self, limit: int, after: Optional[int] = None) -> List[RawEvent]:
        """Most recent log entries in log order, optionally only those after a position"""
        pass

    @abstractmethod
    async def resolve_content_url(self, handle: str) -> str:
        """Translate a content handle into a short-lived direct URL"""
        pass


class MetadataExtractor(ABC):
    """Probes local media files before upload"""

    @abstractmethod
    async def probe_duration(self, file_path: Path) -> float:
        """Duration in seconds, 0 when it cannot be determined"""
        pass
