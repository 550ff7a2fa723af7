"""Commit bucketing by calendar day, hour of day and day of week.

All grouping happens in UTC. Local-time bucketing shifts commits made
near midnight into the neighbouring day, so the calendar key is always the
UTC date.

Shapes:
    - by day: sparse, one bucket per UTC date that has commits, ascending
    - by hour: dense, exactly 24 buckets (0-23)
    - by weekday: dense, exactly 7 buckets (0=Sunday .. 6=Saturday)
"""

import logging
from collections.abc import Iterable, Sequence
from datetime import date, datetime

import pandas as pd

from hack_introspector.analytics.models import (
    CommitDayBucket,
    CommitHourBucket,
    CommitWeekdayBucket,
)

logger = logging.getLogger(__name__)

__all__ = [
    "DAY_NAMES",
    "DAY_SHORT_NAMES",
    "bucket_by_day",
    "bucket_by_hour",
    "bucket_by_weekday",
    "format_hour_label",
    "sunday_based_weekday",
]

DAY_NAMES = ["Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"]
DAY_SHORT_NAMES = ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]


def format_hour_label(hour: int) -> str:
    """Format an hour of day on the 12-hour clock.

    Args:
        hour: Hour 0-23 (24 is accepted as the end of the day).

    Returns:
        Label such as "12 AM", "9 AM", "12 PM" or "6 PM".
    """
    hour %= 24
    if hour == 0:
        return "12 AM"
    if hour == 12:
        return "12 PM"
    return f"{hour} AM" if hour < 12 else f"{hour - 12} PM"


def sunday_based_weekday(d: date) -> int:
    """Day of week with Sunday=0 .. Saturday=6."""
    return d.isoweekday() % 7


def bucket_by_day(timestamps: Sequence[datetime]) -> list[CommitDayBucket]:
    """Group commits by UTC calendar day.

    Only days that have commits are returned; callers that want a full
    calendar backfill zeros themselves.

    Args:
        timestamps: Normalized commit timestamps.

    Returns:
        Day buckets sorted by date.
    """
    if not timestamps:
        return []

    index = _utc_index(timestamps)
    counts = pd.Series(index.strftime("%Y-%m-%d")).value_counts().sort_index()

    buckets = []
    for key, count in counts.items():
        day = date.fromisoformat(str(key))
        buckets.append(
            CommitDayBucket(
                date=str(key),
                count=int(count),
                day_of_week=sunday_based_weekday(day),
                week_number=day.isocalendar().week,
            )
        )

    logger.debug("Bucketed %d commits into %d days", len(timestamps), len(buckets))
    return buckets


def bucket_by_hour(timestamps: Sequence[datetime]) -> list[CommitHourBucket]:
    """Group commits by UTC hour of day.

    Args:
        timestamps: Normalized commit timestamps.

    Returns:
        Exactly 24 buckets, zero-filled.
    """
    hours = _utc_index(timestamps).hour if timestamps else []
    counts = _count_dense(hours, 24)
    return [
        CommitHourBucket(hour=hour, count=count, label=format_hour_label(hour))
        for hour, count in enumerate(counts)
    ]


def bucket_by_weekday(timestamps: Sequence[datetime]) -> list[CommitWeekdayBucket]:
    """Group commits by UTC day of week.

    Args:
        timestamps: Normalized commit timestamps.

    Returns:
        Exactly 7 buckets (Sunday first) with their share of the total.
    """
    # pandas counts Monday=0; shift so Sunday=0
    weekdays = (_utc_index(timestamps).dayofweek + 1) % 7 if timestamps else []
    counts = _count_dense(weekdays, 7)
    total = len(timestamps)

    return [
        CommitWeekdayBucket(
            day=day,
            name=DAY_NAMES[day],
            short_name=DAY_SHORT_NAMES[day],
            count=count,
            percentage=(count / total) * 100 if total > 0 else 0.0,
        )
        for day, count in enumerate(counts)
    ]


def _utc_index(timestamps: Sequence[datetime]) -> pd.DatetimeIndex:
    return pd.DatetimeIndex(pd.to_datetime(list(timestamps), utc=True))


def _count_dense(values: Iterable[int], size: int) -> list[int]:
    """Count occurrences of 0..size-1, zero-filling missing keys."""
    counts = (
        pd.Series(list(values), dtype="int64")
        .value_counts()
        .reindex(range(size), fill_value=0)
    )
    return [int(c) for c in counts]
