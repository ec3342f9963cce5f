"""
Sync Service.

Merges catalog events from the remote log into the local snapshot. Entries
that are not catalog events are expected and skipped without error.
"""

import logging
from typing import Dict, List, Optional

from ..domain.interfaces import CatalogRepository, RemoteLogClient
from ..domain.models import CatalogSnapshot, DEMO_RECORD_ID, SyncResult, VideoRecord
from ..infrastructure.event_codec import decode_event
from .catalog_store import newest_first
from ...core.errors import StorageError


def merge_records(existing: List[VideoRecord], observed: List[VideoRecord]) -> List[VideoRecord]:
    """Last observation per id wins, whole record. Demo and incomplete records are dropped."""
    by_id: Dict[str, VideoRecord] = {}
    for record in existing:
        by_id[record.id] = record
    for record in observed:
        by_id[record.id] = record

    by_id.pop(DEMO_RECORD_ID, None)
    return newest_first(record for record in by_id.values() if record.primary_handle)


class SyncService:
    """Reconciler pipeline between the remote log and the local catalog"""

    def __init__(self, remote_client: RemoteLogClient, repository: CatalogRepository, fetch_limit: int = 100, max_write_attempts: int = 3):
        self.remote_client = remote_client
        self.repository = repository
        self.fetch_limit = fetch_limit
        self.max_write_attempts = max_write_attempts
        self.logger = logging.getLogger(__name__)

    async def sync(self, limit: Optional[int] = None) -> SyncResult:
        current = await self.repository.read()

        raw_events = await self.remote_client.fetch_recent_events(limit or self.fetch_limit, after=current.sync_cursor)
        self.logger.info(f"Fetched {len(raw_events)} log entries after position {current.sync_cursor}")

        observed = []
        for raw in raw_events:
            result = decode_event(raw.payload)
            if result.is_event:
                observed.append(result.record)
            else:
                self.logger.debug(f"Skipped log entry {raw.position}: {result.skip_reason}")

        cursor = max([raw.position for raw in raw_events], default=None)

        for attempt in range(1, self.max_write_attempts + 1):
            if attempt > 1:
                current = await self.repository.read()

            positions = [p for p in (current.sync_cursor, cursor) if p is not None]
            new_cursor = max(positions) if positions else None
            merged = merge_records(current.records, observed)

            if merged == current.records and new_cursor == current.sync_cursor:
                self.logger.info(f"Catalog already up to date ({len(merged)} records)")
                return SyncResult(len(raw_events), len(observed), len(merged), changed=False, sync_cursor=new_cursor)

            snapshot = CatalogSnapshot(version=current.version, records=merged, sync_cursor=new_cursor)
            if await self.repository.compare_and_swap(current.version, snapshot):
                self.logger.info(f"Catalog synced: {len(observed)} events merged, {len(merged)} records")
                return SyncResult(len(raw_events), len(observed), len(merged), changed=True, sync_cursor=new_cursor)

            self.logger.warning(f"Catalog changed during sync, merging again ({attempt}/{self.max_write_attempts})")

        raise StorageError("Could not save synced catalog: catalog kept changing")
