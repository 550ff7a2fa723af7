"""Input report models."""

from hack_introspector.report.models import (
    AnalyticsReport,
    Author,
    Contributor,
    RepoInfo,
    load_report,
)

__all__ = [
    "AnalyticsReport",
    "Author",
    "Contributor",
    "RepoInfo",
    "load_report",
]
