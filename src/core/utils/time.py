"""
Time-related utilities for the catalog core.

Catalog timestamps arrive as ISO-8601 strings. Ordering compares
epoch seconds so that naive and offset-aware values mix safely.
"""

from datetime import datetime, timezone


def parse_iso_timestamp(value: str | None) -> datetime | None:
    """Parse an ISO-8601 timestamp, treating naive values as UTC.

    A trailing ``Z`` is accepted. Returns None for empty or
    unparseable input.
    """
    if not value or not value.strip():
        return None

    text = value.strip()
    if text.endswith(("Z", "z")):
        text = f"{text[:-1]}+00:00"

    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)

    return parsed


def timestamp_sort_key(value: str | None) -> float:
    """Epoch seconds for ordering; missing or invalid values sort as the epoch."""
    parsed = parse_iso_timestamp(value)
    if parsed is None:
        return 0.0
    return parsed.timestamp()
