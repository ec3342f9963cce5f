"""
Error taxonomy for the Channel Video System.

Every failure the catalog can surface maps to one of these classes so that
the HTTP layer and the CLI can translate them without inspecting messages.
"""

from typing import List, Optional


class CatalogError(Exception):
    """Base class for all catalog errors"""


class ConfigurationError(CatalogError):
    """Missing credentials or unusable configuration"""


class ValidationError(CatalogError):
    """Malformed record fields. Local only, never retried."""

    def __init__(self, errors: List[str]):
        self.errors = list(errors)
        super().__init__("; ".join(self.errors) or "validation failed")


class InputTooLargeError(ValidationError):
    """Input file exceeds the remote service's per-file limit"""

    def __init__(self, size_bytes: int, limit_bytes: int):
        self.size_bytes = size_bytes
        self.limit_bytes = limit_bytes
        super().__init__([f"file is {size_bytes / (1024 * 1024):.2f} MB, limit is {limit_bytes / (1024 * 1024):.0f} MB"])


class NotFoundError(CatalogError):
    """Record, content handle or remote content is missing"""

    def __init__(self, subject: str):
        self.subject = subject
        super().__init__(f"{subject} not found")


class ExternalServiceError(CatalogError):
    """Any other non-success response from the remote service"""

    def __init__(self, code: Optional[int], description: str):
        self.code = code
        self.description = description
        super().__init__(f"remote error {code}: {description}" if code is not None else f"remote error: {description}")


class RateLimitedError(ExternalServiceError):
    """Remote service throttled the request. Check for it before ExternalServiceError."""

    def __init__(self, retry_after_seconds: int):
        self.retry_after_seconds = retry_after_seconds
        super().__init__(429, f"rate limited, retry after {retry_after_seconds}s")


class StorageError(CatalogError):
    """Local snapshot could not be read or written"""
