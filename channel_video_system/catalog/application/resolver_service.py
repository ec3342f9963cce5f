"""
Resolver Service.

Turns a record id and slot into a short-lived content URL. Primary content
failures reach the caller; thumbnail failures fall back to a placeholder so
that a page never breaks on a missing image.
"""

import logging
from typing import Optional

from ..domain.interfaces import RemoteLogClient
from ..domain.models import ContentSlot, ResolvedContent, VideoRecord
from .catalog_store import CatalogStore
from ...core.errors import ExternalServiceError, NotFoundError


class ResolverService:
    """Resolves catalog records to ephemeral content URLs"""

    def __init__(self, catalog_store: CatalogStore, remote_client: RemoteLogClient, placeholder_url: str):
        self.catalog_store = catalog_store
        self.remote_client = remote_client
        self.placeholder_url = placeholder_url
        self.logger = logging.getLogger(__name__)

    async def resolve(self, record_id: str, slot: ContentSlot) -> ResolvedContent:
        if slot is ContentSlot.THUMBNAIL:
            return await self._resolve_thumbnail(record_id)
        return await self._resolve_primary(record_id)

    async def _find(self, record_id: str) -> Optional[VideoRecord]:
        record = await self.catalog_store.get(record_id)
        if record is None or record.is_demo:
            return None
        return record

    async def _resolve_primary(self, record_id: str) -> ResolvedContent:
        record = await self._find(record_id)
        if record is None:
            raise NotFoundError("record")
        if not record.primary_handle:
            raise NotFoundError("content handle")

        url = await self.remote_client.resolve_content_url(record.primary_handle)
        self.logger.debug(f"Resolved primary content of {record_id}")
        return ResolvedContent(url=url)

    async def _resolve_thumbnail(self, record_id: str) -> ResolvedContent:
        record = await self._find(record_id)
        if record is None or not record.is_visible:
            return self._placeholder("record not found")
        if not record.thumbnail_handle:
            return self._placeholder("no thumbnail")

        try:
            url = await self.remote_client.resolve_content_url(record.thumbnail_handle)
        except (NotFoundError, ExternalServiceError) as e:
            self.logger.info(f"Thumbnail of {record_id} unavailable, using placeholder: {e}")
            return self._placeholder(str(e))

        return ResolvedContent(url=url)

    def _placeholder(self, reason: str) -> ResolvedContent:
        return ResolvedContent(url=self.placeholder_url, degraded=True, reason=reason)
