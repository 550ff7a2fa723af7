"""Project statistics and health scores.

Health scores (each an int in 0-100):
    - Consistency: mean hourly commits / busiest hour. A flat 24-hour
      distribution scores 100, a single spike scores near 0.
    - Insomnia: share of commits made at night (UTC hours 22-23 and 0-6).
    - Bus Factor: 1 - top contributor's share. One contributor scores 0.
    - Volume: commits per active day x 10, capped at 100.

The night window covers 22:00 through 06:59: nine hours, 22 and 6 both
inclusive.
"""

import logging
import math
from collections.abc import Sequence
from datetime import datetime

from hack_introspector.analytics.buckets import bucket_by_day, bucket_by_hour
from hack_introspector.analytics.models import (
    HealthScores,
    PeakDay,
    PeakHour,
    ProjectStats,
)
from hack_introspector.analytics.timestamps import to_utc
from hack_introspector.report.models import AnalyticsReport, Contributor

logger = logging.getLogger(__name__)

__all__ = [
    "NIGHT_HOURS",
    "calculate_bus_factor",
    "calculate_consistency",
    "calculate_health_scores",
    "calculate_insomnia",
    "calculate_project_stats",
    "calculate_volume",
]

NIGHT_HOURS = frozenset({22, 23, 0, 1, 2, 3, 4, 5, 6})


def calculate_project_stats(
    report: AnalyticsReport | None,
    all_timestamps: Sequence[datetime],
    filtered_timestamps: Sequence[datetime],
) -> ProjectStats:
    """Summarize a report for the stats grid.

    Age and the first/last commit come from the full history; averages and
    peaks describe the filtered selection.

    Args:
        report: Source report, for contributor and language counts.
        all_timestamps: Sorted timestamps of the whole history.
        filtered_timestamps: Timestamps inside the selected range.

    Returns:
        ProjectStats; all zero/None when there is no history.
    """
    if report is None or not all_timestamps:
        return ProjectStats()

    first = all_timestamps[0]
    last = all_timestamps[-1]
    age_days = max(1, math.ceil((last - first).total_seconds() / 86400))
    per_day = len(filtered_timestamps) / age_days

    by_day = bucket_by_day(filtered_timestamps)
    peak_day = None
    if by_day:
        top_day = max(by_day, key=lambda d: d.count)
        peak_day = PeakDay(date=top_day.date, count=top_day.count)

    top_hour = max(bucket_by_hour(filtered_timestamps), key=lambda h: h.count)
    peak_hour = PeakHour(hour=top_hour.hour, count=top_hour.count) if top_hour.count > 0 else None

    return ProjectStats(
        total_commits=len(all_timestamps),
        filtered_commits=len(filtered_timestamps),
        total_contributors=len(report.contributors),
        total_languages=len(report.repo_info.languages),
        first_commit_date=first,
        last_commit_date=last,
        project_age_days=age_days,
        avg_commits_per_day=per_day,
        avg_commits_per_week=per_day * 7,
        peak_day=peak_day,
        peak_hour=peak_hour,
    )


def calculate_consistency(timestamps: Sequence[datetime]) -> int:
    """Score how evenly commits spread over the 24 hours of the day."""
    counts = [bucket.count for bucket in bucket_by_hour(timestamps)]
    peak = max(counts)
    if peak == 0:
        return 0
    mean = sum(counts) / len(counts)
    return _score(100 * mean / peak)


def calculate_insomnia(timestamps: Sequence[datetime]) -> int:
    """Score the share of commits made at night."""
    if not timestamps:
        return 0
    night = sum(1 for ts in timestamps if to_utc(ts).hour in NIGHT_HOURS)
    return _score(100 * night / len(timestamps))


def calculate_bus_factor(contributors: Sequence[Contributor]) -> int:
    """Score how little the commit volume depends on the top contributor."""
    total = sum(c.total for c in contributors)
    if total <= 0:
        return 0
    top = max(c.total for c in contributors)
    return _score(100 * (1 - top / total))


def calculate_volume(timestamps: Sequence[datetime]) -> int:
    """Score commits per active day, scaled by 10."""
    active_days = len(bucket_by_day(timestamps))
    if active_days == 0:
        return 0
    return _score(10 * len(timestamps) / active_days)


def calculate_health_scores(
    timestamps: Sequence[datetime], contributors: Sequence[Contributor]
) -> HealthScores:
    """Compute all four health scores.

    Args:
        timestamps: Normalized timestamps, normally the unfiltered history.
        contributors: Contributor totals from the report.

    Returns:
        HealthScores with every value in 0-100.
    """
    scores = HealthScores(
        consistency=calculate_consistency(timestamps),
        insomnia=calculate_insomnia(timestamps),
        bus_factor=calculate_bus_factor(contributors),
        volume=calculate_volume(timestamps),
    )
    logger.debug("Health scores: %s", scores)
    return scores


def _score(value: float) -> int:
    """Round half up and clamp into 0-100."""
    return max(0, min(100, math.floor(value + 0.5)))
