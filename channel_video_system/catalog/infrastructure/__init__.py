"""
Catalog Infrastructure Layer.

Implementations of the domain interfaces backed by the file system, the
Telegram Bot API and OpenCV, plus the wire codec for catalog events.
"""

from .repositories import JsonFileCatalogRepository
from .telegram_client import TelegramRemoteLogClient
from . import event_codec

__all__ = [
    "JsonFileCatalogRepository",
    "TelegramRemoteLogClient",
    "event_codec",
]
