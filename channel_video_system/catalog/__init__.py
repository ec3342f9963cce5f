"""
Catalog Module for the Channel Video System.

Metadata catalog and content resolution for videos hosted in a Telegram
channel, following clean architecture principles.
"""

from .domain.models import VideoRecord, ContentSlot, ResolvedContent
from .application.catalog_store import CatalogStore
from .application.publish_service import PublishService
from .application.sync_service import SyncService
from .application.resolver_service import ResolverService
from .integration import CatalogModule, create_catalog_module

__all__ = [
    "VideoRecord",
    "ContentSlot",
    "ResolvedContent",
    "CatalogStore",
    "PublishService",
    "SyncService",
    "ResolverService",
    "CatalogModule",
    "create_catalog_module",
]
