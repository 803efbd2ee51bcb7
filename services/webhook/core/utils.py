"""
Webhook Utility Module
"""

from datetime import datetime, timezone
from typing import Mapping


def utc_timestamp() -> str:
    """Current UTC time as ISO-8601 with millisecond precision and a Z suffix."""
    now = datetime.now(timezone.utc).isoformat(timespec="milliseconds")
    return now.replace("+00:00", "Z")


def has_header(headers: Mapping[str, str], name: str) -> bool:
    """Case-insensitive header presence check."""
    wanted = name.lower()
    return any(key.lower() == wanted for key in headers)
