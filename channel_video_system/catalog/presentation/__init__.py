"""
Catalog Presentation Layer.

Contains HTTP controllers, response models, and API route definitions.
"""

from .controllers import CatalogController, ResolveController, SyncController
from .schemas import VideoSummaryResponse, VideoListResponse, VideoDetailResponse, ErrorResponse, SyncResponse
from .routes import create_catalog_routes, create_admin_catalog_routes

__all__ = [
    "CatalogController",
    "ResolveController",
    "SyncController",
    "VideoSummaryResponse",
    "VideoListResponse",
    "VideoDetailResponse",
    "ErrorResponse",
    "SyncResponse",
    "create_catalog_routes",
    "create_admin_catalog_routes",
]
