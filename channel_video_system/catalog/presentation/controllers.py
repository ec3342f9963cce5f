"""
Catalog HTTP Controllers.

Handle HTTP requests and responses for catalog reads and content resolution.
"""

import logging
from typing import Optional

from fastapi import HTTPException
from fastapi.responses import JSONResponse, RedirectResponse, Response

from ..application.catalog_store import CatalogStore
from ..application.resolver_service import ResolverService
from ..application.sync_service import SyncService
from ..domain.models import ContentSlot, VideoRecord
from ...core.errors import ExternalServiceError, NotFoundError, RateLimitedError, StorageError
from ...core.timezone_utils import TimezoneManager
from .schemas import ErrorResponse, SyncResponse, VideoDetailResponse, VideoListResponse, VideoSummaryResponse

PLACEHOLDER_SVG = (
    '<svg xmlns="http://www.w3.org/2000/svg" width="320" height="180" viewBox="0 0 320 180">'
    '<rect width="320" height="180" fill="#1f1f1f"/>'
    '<polygon points="140,65 140,115 185,90" fill="#6b6b6b"/>'
    "</svg>"
)


class CatalogController:
    """Controller for list and detail reads"""

    def __init__(self, catalog_store: CatalogStore, placeholder_url: str, timezone_manager: Optional[TimezoneManager] = None):
        self.catalog_store = catalog_store
        self.placeholder_url = placeholder_url
        self.timezone_manager = timezone_manager or TimezoneManager()
        self.logger = logging.getLogger(__name__)

    async def list_videos(self) -> VideoListResponse:
        videos = [self._convert_to_summary(record) for record in await self._read(self.catalog_store.list_visible())]
        self.logger.debug(f"Listing {len(videos)} videos")
        return VideoListResponse(videos=videos, total=len(videos))

    async def get_video(self, record_id: str) -> VideoDetailResponse:
        record = await self._read(self.catalog_store.get(record_id))
        if record is None or not record.is_visible:
            raise HTTPException(status_code=404, detail=f"Video {record_id} not found")

        summary = self._convert_to_summary(record)
        return VideoDetailResponse(**summary.model_dump(), video_url=f"/api/resolve/{record.id}", download_url=f"/api/resolve/{record.id}")

    async def _read(self, awaitable):
        try:
            return await awaitable
        except StorageError as e:
            self.logger.error(f"Catalog read failed: {e}")
            raise HTTPException(status_code=500, detail="Catalog unavailable")

    def _convert_to_summary(self, record: VideoRecord) -> VideoSummaryResponse:
        """Convert domain model to response model"""
        return VideoSummaryResponse(
            id=record.id,
            title=record.title,
            description=record.description,
            duration_seconds=record.duration_seconds,
            thumbnail_url=f"/api/thumb/{record.id}" if record.has_thumbnail else self.placeholder_url,
            created_at=record.created_at,
            created_at_display=self.timezone_manager.format_unix(record.created_at) if record.created_at else None,
        )


class ResolveController:
    """Controller for redirecting to ephemeral content URLs"""

    def __init__(self, resolver_service: ResolverService):
        self.resolver_service = resolver_service
        self.logger = logging.getLogger(__name__)

    async def resolve_video(self, record_id: str) -> Response:
        try:
            resolved = await self.resolver_service.resolve(record_id, ContentSlot.PRIMARY)
        except NotFoundError as e:
            return self._error(404, "not_found", f"{e.subject} not found for video {record_id}")
        except RateLimitedError as e:
            return self._error(429, "rate_limited", "Rate limited, please try again later", retry_after=e.retry_after_seconds)
        except ExternalServiceError as e:
            self.logger.error(f"Remote service failed resolving {record_id}: {e}")
            return self._error(502, "upstream_error", e.description)
        except StorageError as e:
            self.logger.error(f"Catalog read failed resolving {record_id}: {e}")
            return self._error(500, "storage_error", "Catalog unavailable")

        return RedirectResponse(resolved.url, status_code=302)

    async def resolve_thumbnail(self, record_id: str) -> Response:
        try:
            resolved = await self.resolver_service.resolve(record_id, ContentSlot.THUMBNAIL)
        except StorageError as e:
            self.logger.error(f"Catalog read failed resolving thumbnail {record_id}: {e}")
            return RedirectResponse(self.resolver_service.placeholder_url, status_code=302)

        if resolved.degraded:
            self.logger.debug(f"Thumbnail placeholder for {record_id}: {resolved.reason}")
        return RedirectResponse(resolved.url, status_code=302)

    def placeholder_image(self) -> Response:
        return Response(content=PLACEHOLDER_SVG, media_type="image/svg+xml", headers={"Cache-Control": "public, max-age=86400"})

    @staticmethod
    def _error(status_code: int, error: str, detail: str, retry_after: Optional[int] = None) -> JSONResponse:
        body = ErrorResponse(error=error, detail=detail, retry_after_seconds=retry_after)
        headers = {"Retry-After": str(retry_after)} if retry_after is not None else None
        return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True), headers=headers)


class SyncController:
    """Controller for on-demand catalog sync"""

    def __init__(self, sync_service: SyncService):
        self.sync_service = sync_service
        self.logger = logging.getLogger(__name__)

    async def sync(self, limit: Optional[int] = None) -> SyncResponse:
        try:
            result = await self.sync_service.sync(limit=limit)
        except RateLimitedError as e:
            raise HTTPException(status_code=429, detail=str(e), headers={"Retry-After": str(e.retry_after_seconds)})
        except ExternalServiceError as e:
            raise HTTPException(status_code=502, detail=str(e))
        except StorageError as e:
            self.logger.error(f"Sync could not save catalog: {e}")
            raise HTTPException(status_code=500, detail=str(e))

        return SyncResponse(
            fetched_events=result.fetched_events,
            decoded_events=result.decoded_events,
            total_records=result.total_records,
            changed=result.changed,
            sync_cursor=result.sync_cursor,
        )
