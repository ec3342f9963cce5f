"""
Catalog API Request/Response Schemas.

Pydantic models for API serialization.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class VideoSummaryResponse(BaseModel):
    """One entry of the video list"""
    id: str = Field(..., description="Stable video identifier")
    title: str = Field(..., description="Video title")
    description: str = Field("", description="Video description")
    duration_seconds: float = Field(0, description="Duration in seconds, 0 when unknown")
    thumbnail_url: str = Field(..., description="Thumbnail redirect path or placeholder")
    created_at: int = Field(..., description="Upload time, Unix seconds")
    created_at_display: Optional[str] = Field(None, description="Upload time in the configured timezone")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "42",
                "title": "Cat vs. cucumber",
                "description": "",
                "duration_seconds": 37,
                "thumbnail_url": "/api/thumb/42",
                "created_at": 1760774400,
                "created_at_display": "2025-10-18 08:00:00 UTC",
            }
        }
    )


class VideoListResponse(BaseModel):
    """Video list response"""
    videos: List[VideoSummaryResponse] = Field(..., description="Visible videos, newest first")
    total: int = Field(..., description="Number of videos")


class VideoDetailResponse(VideoSummaryResponse):
    """Video detail for the watch page"""
    video_url: str = Field(..., description="Redirect path to the video content")
    download_url: str = Field(..., description="Redirect path used for downloads")


class ErrorResponse(BaseModel):
    """Structured error body"""
    error: str = Field(..., description="Error category")
    detail: str = Field(..., description="Human readable message")
    retry_after_seconds: Optional[int] = Field(None, description="Set for rate limited responses")


class SyncResponse(BaseModel):
    """Result of an on-demand catalog sync"""
    fetched_events: int
    decoded_events: int
    total_records: int
    changed: bool
    sync_cursor: Optional[int] = None
