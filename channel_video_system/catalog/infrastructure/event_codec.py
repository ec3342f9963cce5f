"""
Catalog Event Codec.

Converts between VideoRecord fields and the JSON text posted to the remote
log. The log also carries unrelated messages, so decoding filters instead of
raising.
"""

import json
from typing import Any, Callable, Mapping, Optional

from ..domain.models import DecodeResult, VideoRecord, SCHEMA_VERSION
from ..domain.validation import validate
from ...core.timezone_utils import now_unix

EVENT_TYPE = "video_meta"
UNTITLED = "Untitled"


def _wire_position(record_id: Any) -> Any:
    """Log positions are integers on the wire; other ids pass through"""
    if isinstance(record_id, str) and record_id.isascii() and record_id.isdigit() and str(int(record_id)) == record_id:
        return int(record_id)
    return record_id


def encode(fields: Mapping[str, Any], now: Optional[Callable[[], int]] = None) -> str:
    """Serialize record fields as a catalog event, stamping version and creation time"""
    clock = now or now_unix
    event = {
        "type": EVENT_TYPE,
        "schema_version": SCHEMA_VERSION,
        "video_msg_id": _wire_position(fields["id"]),
        "file_id": fields.get("primary_handle", ""),
        "thumb_file_id": fields.get("thumbnail_handle", ""),
        "title": fields["title"],
        "description": fields.get("description", ""),
        "duration": fields.get("duration_seconds", 0),
        "uploaded_at": int(clock()),
    }
    return json.dumps(event, indent=2, ensure_ascii=False)


def decode_event(raw: Optional[str]) -> DecodeResult:
    """Decode a log payload, reporting why it was skipped when it is not a catalog event"""
    if not raw:
        return DecodeResult(skip_reason="empty payload")

    try:
        data = json.loads(raw)
    except (TypeError, ValueError):
        return DecodeResult(skip_reason="not JSON")

    if not isinstance(data, dict):
        return DecodeResult(skip_reason="not a JSON object")
    if data.get("type") != EVENT_TYPE:
        return DecodeResult(skip_reason=f"type {data.get('type')!r} is not a catalog event")
    if data.get("video_msg_id") in (None, ""):
        return DecodeResult(skip_reason="missing video_msg_id")

    candidate = {
        "id": str(data["video_msg_id"]),
        "title": data.get("title") or UNTITLED,
        "description": data.get("description") or "",
        "primary_handle": data.get("file_id") or "",
        "thumbnail_handle": data.get("thumb_file_id") or "",
        "duration_seconds": data.get("duration") or 0,
        "created_at": data.get("uploaded_at") or 0,
        "schema_version": data.get("schema_version") or SCHEMA_VERSION,
    }

    result = validate(candidate)
    if not result.valid:
        return DecodeResult(skip_reason="invalid fields: " + "; ".join(result.errors))
    created_at = candidate["created_at"]
    if isinstance(created_at, bool) or not isinstance(created_at, (int, float)):
        return DecodeResult(skip_reason="invalid fields: uploaded_at must be a number")
    if not isinstance(candidate["description"], str) or not isinstance(candidate["thumbnail_handle"], str):
        return DecodeResult(skip_reason="invalid fields: description and thumb_file_id must be strings")
    candidate["created_at"] = int(created_at)

    return DecodeResult(record=VideoRecord(**candidate))


def decode(raw: Optional[str]) -> Optional[VideoRecord]:
    """Decode a log payload; None when it is not a catalog event"""
    return decode_event(raw).record
