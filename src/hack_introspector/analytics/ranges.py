"""Date range presets and filtering.

Presets are relative to the dataset itself, not to "now": "last 30 days"
means the 30 days before the newest commit, so an old hackathon repo still
shows its final sprint.
"""

import logging
from collections.abc import Sequence
from datetime import datetime, timedelta

import pandas as pd

from hack_introspector.analytics.models import DatePreset, DateRange

logger = logging.getLogger(__name__)

__all__ = ["clamp_range", "filter_by_range", "preset_to_range"]

PRESET_DAYS = {
    DatePreset.LAST_7_DAYS: 7,
    DatePreset.LAST_30_DAYS: 30,
    DatePreset.LAST_90_DAYS: 90,
}


def preset_to_range(
    preset: DatePreset | str,
    timestamps: Sequence[datetime],
    custom: DateRange | None = None,
) -> DateRange | None:
    """Resolve a preset into a concrete range.

    Args:
        preset: Preset or its string value ("all", "7d", "30d", "90d", "1y", "custom").
        timestamps: Sorted normalized timestamps of the whole dataset.
        custom: Explicit range for the custom preset. It is returned as-is;
            narrowing chosen by the user is never widened.

    Returns:
        The range, or None when the dataset is empty or a custom preset has no bounds.

    Raises:
        ValueError: If preset is not a known preset value.
    """
    preset = DatePreset(preset)
    if not timestamps:
        return None

    min_date = timestamps[0]
    max_date = timestamps[-1]

    if preset is DatePreset.ALL:
        return DateRange(start=min_date, end=max_date)
    if preset is DatePreset.CUSTOM:
        return custom

    if preset is DatePreset.LAST_YEAR:
        start = (pd.Timestamp(max_date) - pd.DateOffset(years=1)).to_pydatetime()
    else:
        start = max_date - timedelta(days=PRESET_DAYS[preset])

    return DateRange(start=max(start, min_date), end=max_date)


def filter_by_range(
    timestamps: Sequence[datetime], date_range: DateRange | None
) -> list[datetime]:
    """Keep timestamps inside the range, both bounds inclusive.

    Args:
        timestamps: Normalized timestamps.
        date_range: Range to keep, or None for no filtering.

    Returns:
        Timestamps within the range, in input order.
    """
    if date_range is None:
        return list(timestamps)

    kept = [ts for ts in timestamps if date_range.start <= ts <= date_range.end]
    logger.debug("Range filter kept %d of %d commits", len(kept), len(timestamps))
    return kept


def clamp_range(date_range: DateRange, timestamps: Sequence[datetime]) -> DateRange:
    """Clamp a user-chosen range into the dataset's bounds.

    Meant for date picker inputs; filtering itself never clamps.

    Args:
        date_range: Requested range.
        timestamps: Sorted normalized timestamps of the whole dataset.

    Returns:
        Range limited to [first commit, last commit]. Ranges entirely outside
        the data collapse onto the nearest bound.
    """
    if not timestamps:
        return date_range

    min_date = timestamps[0]
    max_date = timestamps[-1]
    start = min(max(date_range.start, min_date), max_date)
    end = max(min(date_range.end, max_date), min_date)
    return DateRange(start=start, end=max(start, end))
