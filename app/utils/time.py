"""Time utilities for server-assigned timestamps."""

from datetime import datetime, timezone


def utc_now() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def to_iso_z(dt: datetime) -> str:
    """
    Format a datetime as ISO 8601 UTC with millisecond precision and a Z suffix.

    Naive datetimes are assumed to already be in UTC.

    Example:
        >>> to_iso_z(datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc))
        '2024-01-15T10:30:00.000Z'
    """
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    dt_utc = dt.astimezone(timezone.utc)
    return dt_utc.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def utc_now_iso() -> str:
    """Current UTC time formatted by to_iso_z()."""
    return to_iso_z(utc_now())
