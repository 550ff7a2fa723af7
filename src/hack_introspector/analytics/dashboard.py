"""Dashboard orchestrator.

Runs every analytics transform for one report and one selected range.
Health scores and project age always describe the whole history; buckets,
heatmap, averages and insight cards describe the selected range.
"""

import logging
from collections.abc import Mapping

from hack_introspector.analytics.buckets import bucket_by_day, bucket_by_hour, bucket_by_weekday
from hack_introspector.analytics.heatmap import build_heatmap
from hack_introspector.analytics.insights import calculate_time_insights, summarize_activity
from hack_introspector.analytics.models import Dashboard, DatePreset, DateRange
from hack_introspector.analytics.ranges import filter_by_range, preset_to_range
from hack_introspector.analytics.ranking import rank_contributors, rank_languages
from hack_introspector.analytics.scores import calculate_health_scores, calculate_project_stats
from hack_introspector.analytics.timestamps import normalize_timestamps
from hack_introspector.report.models import AnalyticsReport

logger = logging.getLogger(__name__)

__all__ = ["build_dashboard"]


def build_dashboard(
    report: AnalyticsReport,
    preset: DatePreset | str = DatePreset.ALL,
    custom_range: DateRange | None = None,
    language_colors: Mapping[str, str] | None = None,
) -> Dashboard:
    """Compute every chart record for a report.

    Args:
        report: Backend analytics report.
        preset: Date range preset to apply.
        custom_range: Explicit range, used when preset is "custom".
        language_colors: Optional language color overrides.

    Returns:
        Dashboard with all derived records.

    Raises:
        ValueError: If preset is not a known preset value.
    """
    all_timestamps = normalize_timestamps(report.commit_timeline)
    date_range = preset_to_range(preset, all_timestamps, custom_range)
    filtered = filter_by_range(all_timestamps, date_range)

    by_day = bucket_by_day(filtered)
    by_hour = bucket_by_hour(filtered)

    dashboard = Dashboard(
        repo_name=report.repo_info.full_name or report.repo_info.name,
        date_range=date_range,
        stats=calculate_project_stats(report, all_timestamps, filtered),
        health=calculate_health_scores(all_timestamps, report.contributors),
        by_day=by_day,
        by_hour=by_hour,
        by_weekday=bucket_by_weekday(filtered),
        heatmap=build_heatmap(filtered),
        contributors=rank_contributors(report.contributors),
        languages=rank_languages(report.repo_info.languages, language_colors),
        time_insights=calculate_time_insights(by_hour),
        activity=summarize_activity(by_day),
    )

    logger.info(
        "Built dashboard for %s: %d of %d commits in range",
        dashboard.repo_name or "<unnamed>",
        len(filtered),
        len(all_timestamps),
    )
    return dashboard
