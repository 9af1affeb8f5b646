"""Timestamp source shared by the stores."""

from datetime import UTC, datetime


def utc_now_iso() -> str:
    """Current UTC time as ISO-8601 with millisecond precision, e.g. ``2024-05-01T12:00:00.000Z``."""
    return datetime.now(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")
