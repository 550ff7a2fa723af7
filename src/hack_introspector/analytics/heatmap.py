"""Adaptive hour-of-day heatmap.

The heatmap always has 24 hour columns. What a row means depends on how
long the commit history is, picked from ``HEATMAP_TIERS``:

    span <= 1 day   -> six 4-hour blocks
    span <= 14 days -> one row per UTC calendar day, at most 14
    longer          -> one row per Sunday-based week, at most 12

Rows past the cap are not dropped: their commits fold into the last row.
This keeps the grid a fixed, legible size at the price of overstating the
final row on long histories.
"""

import logging
import math
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from datetime import date, datetime, timedelta

from hack_introspector.analytics.buckets import format_hour_label, sunday_based_weekday
from hack_introspector.analytics.models import HeatmapGrid, HeatmapResolution
from hack_introspector.analytics.timestamps import to_utc

logger = logging.getLogger(__name__)

__all__ = ["HEATMAP_TIERS", "HeatmapTier", "build_heatmap", "select_tier"]

HOURS_PER_BLOCK = 4


@dataclass(frozen=True)
class HeatmapTier:
    """One row of the resolution decision table."""

    max_span_days: float
    resolution: HeatmapResolution
    max_rows: int
    fixed_rows: bool = False


HEATMAP_TIERS: tuple[HeatmapTier, ...] = (
    HeatmapTier(
        max_span_days=1, resolution=HeatmapResolution.HOUR_BLOCK, max_rows=6, fixed_rows=True
    ),
    HeatmapTier(max_span_days=14, resolution=HeatmapResolution.DAY, max_rows=14),
    HeatmapTier(max_span_days=math.inf, resolution=HeatmapResolution.WEEK, max_rows=12),
)


def select_tier(span_days: float) -> HeatmapTier:
    """Pick the heatmap tier for a history of the given length.

    Args:
        span_days: Days between the earliest and latest commit.

    Returns:
        First tier whose span bound covers the history.
    """
    for tier in HEATMAP_TIERS:
        if span_days <= tier.max_span_days:
            return tier
    return HEATMAP_TIERS[-1]


def build_heatmap(timestamps: Sequence[datetime]) -> HeatmapGrid:
    """Build the rows x 24 commit heatmap.

    Args:
        timestamps: Commit timestamps; rows and hours are taken in UTC.

    Returns:
        HeatmapGrid; a single "No data" row when there are no commits.
    """
    if not timestamps:
        return HeatmapGrid(
            grid=(tuple([0] * 24),),
            row_labels=("No data",),
            resolution=HeatmapResolution.HOUR_BLOCK,
        )

    timestamps = [to_utc(ts) for ts in timestamps]
    first = min(timestamps)
    last = max(timestamps)
    span_days = (last - first).total_seconds() / 86400
    tier = select_tier(span_days)

    origin_for, index_for, label_for = _LAYOUTS[tier.resolution]
    origin = origin_for(first.date())
    if tier.fixed_rows:
        row_count = tier.max_rows
    else:
        row_count = min(tier.max_rows, index_for(last, origin) + 1)

    grid = [[0] * 24 for _ in range(row_count)]
    for ts in timestamps:
        row = max(0, min(index_for(ts, origin), row_count - 1))
        grid[row][ts.hour] += 1

    logger.debug(
        "Heatmap for %.1f day span: %s resolution, %d rows",
        span_days,
        tier.resolution.value,
        row_count,
    )
    return HeatmapGrid(
        grid=tuple(tuple(row) for row in grid),
        row_labels=tuple(label_for(i, origin) for i in range(row_count)),
        resolution=tier.resolution,
    )


def _block_index(ts: datetime, origin: date) -> int:
    return ts.hour // HOURS_PER_BLOCK


def _block_label(row: int, origin: date) -> str:
    start = row * HOURS_PER_BLOCK
    return f"{format_hour_label(start)} - {format_hour_label(start + HOURS_PER_BLOCK)}"


def _day_index(ts: datetime, origin: date) -> int:
    return (ts.date() - origin).days


def _day_label(row: int, origin: date) -> str:
    return (origin + timedelta(days=row)).strftime("%a, %b %d")


def _week_origin(first_day: date) -> date:
    return first_day - timedelta(days=sunday_based_weekday(first_day))


def _week_index(ts: datetime, origin: date) -> int:
    return (ts.date() - origin).days // 7


def _week_label(row: int, origin: date) -> str:
    return f"Week of {(origin + timedelta(weeks=row)).strftime('%b %d')}"


def _same_day(first_day: date) -> date:
    return first_day


_LAYOUTS: dict[
    HeatmapResolution,
    tuple[
        Callable[[date], date],
        Callable[[datetime, date], int],
        Callable[[int, date], str],
    ],
] = {
    HeatmapResolution.HOUR_BLOCK: (_same_day, _block_index, _block_label),
    HeatmapResolution.DAY: (_same_day, _day_index, _day_label),
    HeatmapResolution.WEEK: (_week_origin, _week_index, _week_label),
}
