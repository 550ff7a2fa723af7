"""Client-side analytics: bucketing, range filtering, scores and rankings."""

from hack_introspector.analytics.buckets import bucket_by_day, bucket_by_hour, bucket_by_weekday
from hack_introspector.analytics.dashboard import build_dashboard
from hack_introspector.analytics.heatmap import build_heatmap
from hack_introspector.analytics.insights import calculate_time_insights, summarize_activity
from hack_introspector.analytics.models import Dashboard, DatePreset, DateRange, HeatmapResolution
from hack_introspector.analytics.ranges import clamp_range, filter_by_range, preset_to_range
from hack_introspector.analytics.ranking import rank_contributors, rank_languages
from hack_introspector.analytics.scores import calculate_health_scores, calculate_project_stats
from hack_introspector.analytics.timestamps import normalize_timestamps

__all__ = [
    "Dashboard",
    "DatePreset",
    "DateRange",
    "HeatmapResolution",
    "bucket_by_day",
    "bucket_by_hour",
    "bucket_by_weekday",
    "build_dashboard",
    "build_heatmap",
    "calculate_health_scores",
    "calculate_project_stats",
    "calculate_time_insights",
    "clamp_range",
    "filter_by_range",
    "normalize_timestamps",
    "preset_to_range",
    "rank_contributors",
    "rank_languages",
    "summarize_activity",
]
