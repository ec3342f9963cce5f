"""
Timezone utilities for the Channel Video System.

Records carry Unix timestamps; these helpers render them in the configured
timezone for API responses and CLI output.
"""

import datetime
import time
import logging
from typing import Optional

import pytz


class TimezoneManager:
    """Converts catalog timestamps to timezone-aware datetimes"""

    def __init__(self, timezone_name: str = "UTC"):
        self.logger = logging.getLogger(__name__)
        try:
            self.timezone = pytz.timezone(timezone_name)
            self.timezone_name = timezone_name
        except pytz.UnknownTimeZoneError:
            self.logger.warning(f"Unknown timezone {timezone_name!r}, falling back to UTC")
            self.timezone = pytz.UTC
            self.timezone_name = "UTC"

    def from_unix(self, timestamp: int) -> Optional[datetime.datetime]:
        """Unix seconds to a local datetime. 0 means unknown."""
        if not timestamp:
            return None
        return datetime.datetime.fromtimestamp(timestamp, pytz.UTC).astimezone(self.timezone)

    def format_unix(self, timestamp: int, format_str: str = "%Y-%m-%d %H:%M:%S %Z") -> str:
        dt = self.from_unix(timestamp)
        return dt.strftime(format_str) if dt else "unknown"


def now_unix() -> int:
    """Current Unix time in whole seconds"""
    return int(time.time())
