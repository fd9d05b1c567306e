"""UTC time handling for events and API metadata."""

from datetime import datetime, timezone


def now_utc() -> datetime:
    """
    Current time in UTC.

    Event timestamps and response metadata are always timezone-aware.
    """
    return datetime.now(timezone.utc)
