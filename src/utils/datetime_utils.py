"""Timestamp helpers for catalog records.

Records are stamped with timezone-aware UTC datetimes. SQLite hands them back
naive, so isoformat_utc() treats a naive value as UTC when rendering.
"""

from datetime import datetime, timezone
from typing import Optional


def utc_now() -> datetime:
    """Current time as a timezone-aware UTC datetime (column default)."""
    return datetime.now(timezone.utc)


def isoformat_utc(value: Optional[datetime]) -> Optional[str]:
    """Render a timestamp as ISO 8601 with an explicit UTC offset."""
    if value is None:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat()
