"""
Channel Video System - Core Module

Configuration, error taxonomy, logging and time helpers shared by the
catalog, the API and the CLI.
"""

from .config import Config
from .errors import (
    CatalogError,
    ConfigurationError,
    ValidationError,
    InputTooLargeError,
    NotFoundError,
    RateLimitedError,
    ExternalServiceError,
    StorageError,
)

__all__ = [
    "Config",
    "CatalogError",
    "ConfigurationError",
    "ValidationError",
    "InputTooLargeError",
    "NotFoundError",
    "RateLimitedError",
    "ExternalServiceError",
    "StorageError",
]
