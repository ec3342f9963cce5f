"""
Telegram Remote Log Client.

Implements the remote log/blob contract on top of the Telegram Bot API:
videos and photos are posted to a channel, catalog events are text posts in
the same channel, and getFile turns a file_id into a temporary download URL.
"""

import asyncio
import functools
import logging
from typing import Any, Dict, List, Optional

import requests

from ..domain.interfaces import RemoteLogClient
from ..domain.models import ContentSlot, RawEvent, UploadedBlob
from ...core.config import TelegramConfig
from ...core.errors import ConfigurationError, ExternalServiceError, NotFoundError, RateLimitedError

# Bot API error codes
FILE_NOT_FOUND_CODES = (400, 404)
RATE_LIMITED_CODE = 429
DEFAULT_RETRY_AFTER_SECONDS = 60

UPLOAD_METHODS = {
    ContentSlot.PRIMARY: ("sendVideo", "video"),
    ContentSlot.THUMBNAIL: ("sendPhoto", "photo"),
}


class TelegramRemoteLogClient(RemoteLogClient):
    """Bot API client. Holds configuration only; every call is independent."""

    def __init__(self, config: TelegramConfig):
        if not config.bot_token:
            raise ConfigurationError("Telegram bot token is not configured (TELEGRAM_BOT_TOKEN)")

        self.config = config
        self.api_url = f"{config.api_base_url.rstrip('/')}/bot{config.bot_token}"
        self.file_url = f"{config.file_base_url.rstrip('/')}/bot{config.bot_token}"
        self.logger = logging.getLogger(__name__)

    async def upload_blob(self, data: bytes, slot: ContentSlot, filename: str) -> UploadedBlob:
        method, field = UPLOAD_METHODS[slot]
        self.logger.info(f"Uploading {slot.value} ({len(data) / (1024 * 1024):.2f} MB) via {method}")

        result = await self._call(method, data={"chat_id": self._channel_id()}, files={field: (filename, data)})
        return self._blob_from_message(result, slot)

    async def publish_event(self, payload: str) -> int:
        result = await self._call("sendMessage", json={"chat_id": self._channel_id(), "text": payload})
        return int(result["message_id"])

    async def fetch_recent_events(self, limit: int, after: Optional[int] = None) -> List[RawEvent]:
        params: Dict[str, Any] = {"limit": limit, "allowed_updates": ["channel_post", "edited_channel_post"]}
        if after is not None:
            # Also acknowledges everything up to `after` on the Bot API side
            params["offset"] = after + 1

        updates = await self._call("getUpdates", json=params)

        events = []
        for update in sorted(updates, key=lambda u: u.get("update_id", 0)):
            post = update.get("channel_post") or update.get("edited_channel_post")
            if post and post.get("text"):
                events.append(RawEvent(position=int(update["update_id"]), payload=post["text"]))

        self.logger.debug(f"Fetched {len(updates)} updates, {len(events)} with text")
        return events

    async def resolve_content_url(self, handle: str) -> str:
        if not handle:
            raise NotFoundError("content handle")

        try:
            result = await self._call("getFile", json={"file_id": handle})
        except ExternalServiceError as e:
            if e.code in FILE_NOT_FOUND_CODES:
                raise NotFoundError("content") from e
            raise

        if not isinstance(result, dict):
            raise ExternalServiceError(None, "getFile returned no file object")

        file_path = result.get("file_path")
        if not file_path:
            raise NotFoundError("content")
        return f"{self.file_url}/{file_path}"

    def _channel_id(self) -> str:
        if not self.config.channel_id:
            raise ConfigurationError("Telegram channel id is not configured (TELEGRAM_CHANNEL_ID)")
        return str(self.config.channel_id)

    async def _call(self, method: str, **kwargs) -> Any:
        """Run a Bot API call in the default executor"""
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, functools.partial(self._call_sync, method, **kwargs))

    def _call_sync(self, method: str, **kwargs) -> Any:
        self.logger.debug(f"Bot API call: {method}")

        try:
            response = requests.post(f"{self.api_url}/{method}", timeout=self.config.request_timeout_seconds, **kwargs)
        except requests.RequestException as e:
            raise ExternalServiceError(None, f"{method} failed: {type(e).__name__}") from e

        try:
            body = response.json()
        except ValueError:
            raise ExternalServiceError(response.status_code, f"{method} returned a non-JSON response")

        if not body.get("ok"):
            code = body.get("error_code", response.status_code)
            description = body.get("description", "Telegram API error")
            self.logger.warning(f"Bot API {method} failed: {code} {description}")

            if code == RATE_LIMITED_CODE:
                retry_after = (body.get("parameters") or {}).get("retry_after", DEFAULT_RETRY_AFTER_SECONDS)
                raise RateLimitedError(int(retry_after))
            raise ExternalServiceError(code, description)

        return body.get("result")

    @staticmethod
    def _blob_from_message(message: Dict[str, Any], slot: ContentSlot) -> UploadedBlob:
        position = int(message["message_id"])

        if slot is ContentSlot.THUMBNAIL:
            sizes = message.get("photo") or []
            if not sizes:
                raise ExternalServiceError(None, "Photo upload response has no sizes")
            # Largest size is last
            return UploadedBlob(handle=sizes[-1]["file_id"], log_position=position)

        for kind in ("video", "document", "animation"):
            media = message.get(kind)
            if media:
                derived = media.get("thumbnail") or media.get("thumb") or {}
                return UploadedBlob(handle=media["file_id"], log_position=position, derived_thumbnail_handle=derived.get("file_id", ""))

        raise ExternalServiceError(None, "Upload response has no file_id")
