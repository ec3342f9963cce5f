"""
Publish Service.

Uploads a new video, emits its catalog event and records it locally. The
remote log is authoritative: the local catalog is only touched after the
event has been accepted.
"""

import logging
from typing import Optional

from ..domain.interfaces import RemoteLogClient
from ..domain.models import ContentSlot, PublishRequest, PublishResult, UploadedBlob
from ..domain.validation import validate
from ..infrastructure import event_codec
from .catalog_store import CatalogStore
from ...core.errors import InputTooLargeError, StorageError, ValidationError


class PublishService:
    """Producer pipeline for new catalog records"""

    def __init__(self, remote_client: RemoteLogClient, catalog_store: CatalogStore, max_upload_bytes: Optional[int] = None):
        self.remote_client = remote_client
        self.catalog_store = catalog_store
        self.max_upload_bytes = max_upload_bytes
        self.logger = logging.getLogger(__name__)

    async def publish(self, request: PublishRequest) -> PublishResult:
        self._check_request(request)

        # 1. Video. Nothing has happened yet if this fails.
        video = await self.remote_client.upload_blob(request.video, ContentSlot.PRIMARY, request.video_filename)
        self.logger.info(f"Video uploaded at log position {video.log_position}")

        # 2. Thumbnail
        thumbnail_handle = await self._thumbnail_handle(request, video)

        # 3. Event
        payload = event_codec.encode(
            {
                "id": str(video.log_position),
                "title": request.title,
                "description": request.description,
                "primary_handle": video.handle,
                "thumbnail_handle": thumbnail_handle,
                "duration_seconds": request.duration_seconds,
            }
        )
        record = event_codec.decode(payload)
        if record is None:
            raise ValidationError([f"event for log position {video.log_position} does not decode"])

        # 4. Publish. Uploaded blobs stay orphaned if this fails.
        event_position = await self.remote_client.publish_event(payload)
        self.logger.info(f"Catalog event for {record.id} published at log position {event_position}")

        # 5. Local catalog. The event is durable, a later sync repairs this.
        try:
            await self.catalog_store.upsert(record)
        except StorageError as e:
            self.logger.error(f"Event for {record.id} published but local catalog not updated: {e}")
            return PublishResult(record=record, catalog_updated=False, catalog_error=str(e))

        return PublishResult(record=record)

    def _check_request(self, request: PublishRequest) -> None:
        if self.max_upload_bytes is not None:
            for data in (request.video, request.thumbnail):
                if data is not None and len(data) > self.max_upload_bytes:
                    raise InputTooLargeError(len(data), self.max_upload_bytes)

        errors = []
        if not request.video:
            errors.append("video must not be empty")

        # The id is assigned by the upload, check everything else up front
        result = validate({"id": "pending", "title": request.title, "duration_seconds": request.duration_seconds})
        errors.extend(result.errors)

        if errors:
            raise ValidationError(errors)

    async def _thumbnail_handle(self, request: PublishRequest, video: UploadedBlob) -> str:
        if request.thumbnail:
            thumbnail = await self.remote_client.upload_blob(request.thumbnail, ContentSlot.THUMBNAIL, request.thumbnail_filename)
            self.logger.info("Thumbnail uploaded")
            return thumbnail.handle

        if video.derived_thumbnail_handle:
            self.logger.info("Using thumbnail generated by the remote service")
            return video.derived_thumbnail_handle

        return ""
