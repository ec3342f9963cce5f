"""
Catalog Store.

Read and write operations over the local catalog snapshot.
"""

import logging
from typing import Iterable, List, Optional

from ..domain.interfaces import CatalogRepository
from ..domain.models import CatalogSnapshot, VideoRecord
from ...core.errors import StorageError


def newest_first(records: Iterable[VideoRecord]) -> List[VideoRecord]:
    return sorted(records, key=lambda record: record.created_at, reverse=True)


class CatalogStore:
    """Application service owning the catalog snapshot"""

    def __init__(self, repository: CatalogRepository, max_write_attempts: int = 3):
        self.repository = repository
        self.max_write_attempts = max_write_attempts
        self.logger = logging.getLogger(__name__)

    async def snapshot(self) -> CatalogSnapshot:
        return await self.repository.read()

    async def load(self) -> List[VideoRecord]:
        """All stored records in stored order, invisible ones included"""
        return list((await self.repository.read()).records)

    async def save(self, records: Iterable[VideoRecord]) -> None:
        """Replace the stored records. Last save wins against concurrent writers."""
        current = await self.repository.read()
        await self.repository.write(CatalogSnapshot(records=list(records), sync_cursor=current.sync_cursor))

    async def upsert(self, record: VideoRecord) -> None:
        """Replace the record with the same id, or append it"""
        for attempt in range(1, self.max_write_attempts + 1):
            current = await self.repository.read()
            records = list(current.records)

            for index, existing in enumerate(records):
                if existing.id == record.id:
                    records[index] = record
                    break
            else:
                records.append(record)

            updated = CatalogSnapshot(version=current.version, records=records, sync_cursor=current.sync_cursor)
            if await self.repository.compare_and_swap(current.version, updated):
                self.logger.info(f"Catalog record {record.id} saved ({len(records)} records)")
                return

            self.logger.warning(f"Catalog changed during upsert of {record.id}, retrying ({attempt}/{self.max_write_attempts})")

        raise StorageError(f"Could not save record {record.id}: catalog kept changing")

    async def list_visible(self) -> List[VideoRecord]:
        """Records that can be shown, newest first"""
        records = await self.load()
        return newest_first(record for record in records if record.is_visible)

    async def get(self, record_id: str) -> Optional[VideoRecord]:
        """Raw lookup by id; records without a primary handle are returned too"""
        return (await self.repository.read()).get(record_id)
