"""Commit timestamp normalization.

Turns the backend's raw ``commit_timeline`` strings into sorted UTC
datetimes. Bad entries are dropped rather than reported: the backend is
trusted, but GitHub occasionally hands back odd formatting and a partial
dashboard beats a broken one.
"""

import logging
from collections.abc import Iterable
from datetime import UTC, datetime
from typing import Any

logger = logging.getLogger(__name__)

__all__ = ["normalize_timestamps", "parse_timestamp", "to_utc"]


def parse_timestamp(value: Any) -> datetime | None:
    """Parse one ISO 8601 timestamp into a UTC datetime.

    Naive timestamps are taken to be UTC already.

    Args:
        value: Raw timeline entry.

    Returns:
        UTC datetime, or None if the value is not a parseable string.
    """
    if not isinstance(value, str) or not value.strip():
        return None

    try:
        dt = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    except ValueError:
        return None

    return to_utc(dt)


def to_utc(dt: datetime) -> datetime:
    """Convert to UTC, taking naive datetimes to be UTC already."""
    return dt.replace(tzinfo=UTC) if dt.tzinfo is None else dt.astimezone(UTC)


def normalize_timestamps(raw: Iterable[Any] | None) -> list[datetime]:
    """Parse and sort a raw commit timeline.

    Args:
        raw: Timeline entries from the report, possibly None.

    Returns:
        Parsed UTC datetimes in ascending order.
    """
    if not raw:
        return []

    parsed: list[datetime] = []
    dropped = 0
    for value in raw:
        dt = parse_timestamp(value)
        if dt is None:
            dropped += 1
            continue
        parsed.append(dt)

    if dropped:
        logger.debug("Dropped %d unparseable timeline entries", dropped)

    parsed.sort()
    return parsed
