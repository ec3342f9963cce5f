"""
Catalog Domain Layer.

Contains pure business logic and domain models for the video catalog.
No external dependencies - only Python standard library and domain concepts.
"""

from .models import (
    VideoRecord,
    ContentSlot,
    CatalogSnapshot,
    ValidationResult,
    ResolvedContent,
    DEMO_RECORD_ID,
    SCHEMA_VERSION,
)
from .validation import validate
from .interfaces import CatalogRepository, RemoteLogClient, MetadataExtractor

__all__ = [
    "VideoRecord",
    "ContentSlot",
    "CatalogSnapshot",
    "ValidationResult",
    "ResolvedContent",
    "DEMO_RECORD_ID",
    "SCHEMA_VERSION",
    "validate",
    "CatalogRepository",
    "RemoteLogClient",
    "MetadataExtractor",
]
