"""
Catalog API Routes.

FastAPI route definitions for catalog reads and content resolution.
"""

from typing import Optional

from fastapi import APIRouter, Query

from .controllers import CatalogController, ResolveController, SyncController
from .schemas import ErrorResponse, SyncResponse, VideoDetailResponse, VideoListResponse


def create_catalog_routes(catalog_controller: CatalogController, resolve_controller: ResolveController) -> APIRouter:
    """Create catalog API routes with dependency injection"""

    router = APIRouter(tags=["videos"])

    @router.get("/api/videos", response_model=VideoListResponse)
    async def list_videos():
        """
        List visible videos, newest first.

        Videos without content and the demo entry are never listed.
        """
        return await catalog_controller.list_videos()

    @router.get("/api/video/{video_id}", response_model=VideoDetailResponse, responses={404: {"description": "Unknown or incomplete video"}})
    async def get_video(video_id: str):
        """
        Get details for the watch page.

        - **video_id**: Stable video identifier
        """
        return await catalog_controller.get_video(video_id)

    @router.get(
        "/api/resolve/{video_id}",
        status_code=302,
        responses={404: {"model": ErrorResponse}, 429: {"model": ErrorResponse}, 502: {"model": ErrorResponse}},
    )
    async def resolve_video(video_id: str):
        """
        Redirect to a short-lived URL for the video content.

        Links expire, so the redirect is never cached. A 429 response carries
        a Retry-After header.
        """
        return await resolve_controller.resolve_video(video_id)

    @router.get("/api/thumb/{video_id}", status_code=302)
    async def resolve_thumbnail(video_id: str):
        """
        Redirect to a short-lived URL for the thumbnail, or to the placeholder
        image when there is none or it cannot be resolved.
        """
        return await resolve_controller.resolve_thumbnail(video_id)

    @router.get("/placeholder-thumb.svg", include_in_schema=False)
    async def placeholder_thumbnail():
        return resolve_controller.placeholder_image()

    return router


def create_admin_catalog_routes(sync_controller: SyncController) -> APIRouter:
    """Create admin routes for catalog maintenance"""

    router = APIRouter(prefix="/admin", tags=["admin"])

    @router.post("/sync", response_model=SyncResponse)
    async def sync_catalog(limit: Optional[int] = Query(None, ge=1, le=100, description="Maximum log entries to fetch")):
        """
        Merge recent catalog events from the channel into the local catalog.

        - **limit**: Maximum number of log entries to fetch
        """
        return await sync_controller.sync(limit=limit)

    return router
