"""Timestamps for rotation outcome records."""
from datetime import datetime, timezone


def get_utc_iso_timestamp() -> str:
    """Current UTC time as ISO 8601 with a 'Z' suffix, e.g. 2026-03-01T12:00:00.123456Z."""
    return datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z')
