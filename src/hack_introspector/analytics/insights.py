"""Derived insight cards: time-of-day habits and day-level activity."""

import logging
from collections.abc import Sequence
from datetime import date, timedelta

from hack_introspector.analytics.models import (
    ActivitySummary,
    CommitDayBucket,
    CommitHourBucket,
    TimeInsights,
)

logger = logging.getLogger(__name__)

__all__ = ["DAY_PERIODS", "WORK_HOURS", "calculate_time_insights", "summarize_activity"]

# Period name -> hours it covers, in display order
DAY_PERIODS: dict[str, range] = {
    "night": range(0, 6),
    "morning": range(6, 12),
    "afternoon": range(12, 18),
    "evening": range(18, 24),
}

WORK_HOURS = range(9, 17)


def calculate_time_insights(hours: Sequence[CommitHourBucket]) -> TimeInsights | None:
    """Summarize when during the day commits happen.

    Args:
        hours: The 24 hour-of-day buckets.

    Returns:
        TimeInsights, or None when there are no commits.
    """
    by_hour = {bucket.hour: bucket.count for bucket in hours}
    total = sum(by_hour.values())
    if total == 0:
        return None

    periods = {
        name: sum(by_hour.get(h, 0) for h in span) for name, span in DAY_PERIODS.items()
    }
    # first period wins ties
    dominant = max(periods, key=lambda name: periods[name])

    ordered = sorted(hours, key=lambda b: b.count, reverse=True)
    work = sum(by_hour.get(h, 0) for h in WORK_HOURS)

    return TimeInsights(
        total_commits=total,
        periods=periods,
        dominant_period=dominant,
        dominant_count=periods[dominant],
        peak_hour=ordered[0],
        top_hours=tuple(b for b in ordered[:3] if b.count > 0),
        work_hours_commits=work,
        off_hours_commits=total - work,
        work_hours_percent=work / total * 100,
    )


def summarize_activity(days: Sequence[CommitDayBucket]) -> ActivitySummary:
    """Summarize day-level activity.

    The streak is the run of consecutive calendar days with commits that
    ends on the latest active day.

    Args:
        days: Sparse day buckets sorted by date.

    Returns:
        ActivitySummary; zero-valued when there are no days.
    """
    active = [d for d in days if d.count > 0]
    if not active:
        return ActivitySummary()

    total = sum(d.count for d in active)
    busiest = max(active, key=lambda d: d.count)
    weekend = sum(d.count for d in active if d.day_of_week in (0, 6))

    streak = 1
    previous = date.fromisoformat(active[-1].date)
    for bucket in reversed(active[:-1]):
        current = date.fromisoformat(bucket.date)
        if previous - current != timedelta(days=1):
            break
        streak += 1
        previous = current

    return ActivitySummary(
        total_commits=total,
        active_days=len(active),
        avg_per_active_day=total / len(active),
        most_active_date=busiest.date,
        most_active_count=busiest.count,
        streak_days=streak,
        weekend_commits=weekend,
        weekday_commits=total - weekend,
    )
