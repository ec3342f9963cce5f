"""
Catalog Repository Implementations.

JSON file implementation of the versioned catalog repository.
"""

import asyncio
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, List, Optional

import aiofiles
import aiofiles.os

from ..domain.interfaces import CatalogRepository
from ..domain.models import CatalogSnapshot, VideoRecord
from ...core.errors import StorageError


class JsonFileCatalogRepository(CatalogRepository):
    """Catalog snapshot kept in a single JSON document.

    Writes go to a temporary file in the same directory followed by an atomic
    rename, so a reader sees either the old or the new document. The version
    check in compare_and_swap is serialized within this process only; two
    processes writing at once still resolve as last save wins.
    """

    def __init__(self, catalog_path: Path):
        self.catalog_path = Path(catalog_path)
        self.logger = logging.getLogger(__name__)
        self._lock: Optional[asyncio.Lock] = None
        self._lock_loop: Optional[asyncio.AbstractEventLoop] = None

    async def read(self) -> CatalogSnapshot:
        if not self.catalog_path.exists():
            return CatalogSnapshot()

        try:
            async with aiofiles.open(self.catalog_path, "r", encoding="utf-8") as f:
                content = await f.read()
        except OSError as e:
            raise StorageError(f"Could not read catalog {self.catalog_path}: {e}") from e

        try:
            return self._parse(json.loads(content))
        except (ValueError, KeyError, TypeError, AttributeError) as e:
            raise StorageError(f"Catalog {self.catalog_path} is corrupt: {e}") from e

    def _write_lock(self) -> asyncio.Lock:
        # A lock belongs to the loop it was created in
        loop = asyncio.get_running_loop()
        if self._lock is None or self._lock_loop is not loop:
            self._lock = asyncio.Lock()
            self._lock_loop = loop
        return self._lock

    async def compare_and_swap(self, expected_version: int, snapshot: CatalogSnapshot) -> bool:
        async with self._write_lock():
            current = await self.read()
            if current.version != expected_version:
                self.logger.debug(f"Catalog version moved from {expected_version} to {current.version}, not writing")
                return False

            await self._write_atomic(self._versioned(snapshot, expected_version + 1))
            return True

    async def write(self, snapshot: CatalogSnapshot) -> CatalogSnapshot:
        async with self._write_lock():
            current = await self.read()
            written = self._versioned(snapshot, current.version + 1)
            await self._write_atomic(written)
            return written

    async def _write_atomic(self, snapshot: CatalogSnapshot) -> None:
        document = json.dumps(self._serialize(snapshot), indent=2, ensure_ascii=False)

        try:
            self.catalog_path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(prefix=f".{self.catalog_path.name}.", suffix=".tmp", dir=str(self.catalog_path.parent))
            os.close(fd)
        except OSError as e:
            raise StorageError(f"Could not prepare catalog write in {self.catalog_path.parent}: {e}") from e

        try:
            async with aiofiles.open(tmp_name, "w", encoding="utf-8") as f:
                await f.write(document)
                await f.flush()
                await asyncio.get_running_loop().run_in_executor(None, os.fsync, f.fileno())
            await aiofiles.os.replace(tmp_name, self.catalog_path)
        except OSError as e:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise StorageError(f"Could not write catalog {self.catalog_path}: {e}") from e

        self.logger.debug(f"Catalog version {snapshot.version} written with {len(snapshot.records)} records")

    @staticmethod
    def _versioned(snapshot: CatalogSnapshot, version: int) -> CatalogSnapshot:
        return CatalogSnapshot(version=version, records=list(snapshot.records), sync_cursor=snapshot.sync_cursor)

    @staticmethod
    def _serialize(snapshot: CatalogSnapshot) -> Dict[str, Any]:
        return {
            "version": snapshot.version,
            "sync_cursor": snapshot.sync_cursor,
            "records": [record.to_dict() for record in snapshot.records],
        }

    @staticmethod
    def _parse(data: Any) -> CatalogSnapshot:
        # A bare list is the unversioned layout
        if isinstance(data, list):
            return CatalogSnapshot(version=0, records=JsonFileCatalogRepository._parse_records(data))

        return CatalogSnapshot(
            version=int(data.get("version", 0)),
            records=JsonFileCatalogRepository._parse_records(data.get("records", [])),
            sync_cursor=data.get("sync_cursor"),
        )

    @staticmethod
    def _parse_records(items: List[Dict[str, Any]]) -> List[VideoRecord]:
        return [VideoRecord.from_dict(item) for item in items]
