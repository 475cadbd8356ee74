"""UTC timestamp helpers."""

from datetime import datetime, timezone


def utc_now_iso() -> str:
    """Current UTC time as a fixed-width ISO-8601 string (sorts chronologically)."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds")
