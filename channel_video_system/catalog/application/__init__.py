"""
Catalog Application Layer.

Contains use cases and application services that orchestrate domain logic
and coordinate between domain and infrastructure layers.
"""

from .catalog_store import CatalogStore
from .publish_service import PublishService
from .sync_service import SyncService
from .resolver_service import ResolverService

__all__ = [
    "CatalogStore",
    "PublishService",
    "SyncService",
    "ResolverService",
]
