"""Value records produced by the analytics layer.

Every record is frozen: a new date range or a new report means a fresh
computation, never an update in place.
"""

from dataclasses import asdict, dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any

from hack_introspector.analytics.timestamps import to_utc


class DatePreset(str, Enum):
    """Named date range shortcuts, relative to the dataset's own bounds."""

    ALL = "all"
    LAST_7_DAYS = "7d"
    LAST_30_DAYS = "30d"
    LAST_90_DAYS = "90d"
    LAST_YEAR = "1y"
    CUSTOM = "custom"


class HeatmapResolution(str, Enum):
    """Time granularity of one heatmap row."""

    HOUR_BLOCK = "hour-block"
    DAY = "day"
    WEEK = "week"


@dataclass(frozen=True)
class DateRange:
    """Inclusive range of instants.

    Bounds are stored in UTC; naive bounds are taken to be UTC already.
    """

    start: datetime
    end: datetime

    def __post_init__(self) -> None:
        object.__setattr__(self, "start", to_utc(self.start))
        object.__setattr__(self, "end", to_utc(self.end))
        if self.start > self.end:
            msg = f"Range start {self.start.isoformat()} is after end {self.end.isoformat()}"
            raise ValueError(msg)


@dataclass(frozen=True)
class CommitDayBucket:
    date: str
    count: int
    day_of_week: int
    week_number: int


@dataclass(frozen=True)
class CommitHourBucket:
    hour: int
    count: int
    label: str


@dataclass(frozen=True)
class CommitWeekdayBucket:
    day: int
    name: str
    short_name: str
    count: int
    percentage: float


@dataclass(frozen=True)
class HeatmapGrid:
    """Rows x 24 hour-of-day counts."""

    grid: tuple[tuple[int, ...], ...]
    row_labels: tuple[str, ...]
    resolution: HeatmapResolution

    @property
    def max_count(self) -> int:
        return max((max(row) for row in self.grid), default=0)


@dataclass(frozen=True)
class ContributorStat:
    login: str
    avatar_url: str
    commits: int
    percentage: float
    rank: int


@dataclass(frozen=True)
class LanguageStat:
    name: str
    bytes: int
    percentage: float
    color: str


@dataclass(frozen=True)
class HealthScore:
    """One 0-100 radar chart metric."""

    metric: str
    value: int
    full_mark: int = 100


@dataclass(frozen=True)
class HealthScores:
    consistency: int = 0
    insomnia: int = 0
    bus_factor: int = 0
    volume: int = 0

    def as_radar(self) -> list[HealthScore]:
        """Return the scores in radar chart order."""
        return [
            HealthScore("Consistency", self.consistency),
            HealthScore("Insomnia", self.insomnia),
            HealthScore("Bus Factor", self.bus_factor),
            HealthScore("Volume", self.volume),
        ]


@dataclass(frozen=True)
class PeakDay:
    date: str
    count: int


@dataclass(frozen=True)
class PeakHour:
    hour: int
    count: int


@dataclass(frozen=True)
class ProjectStats:
    total_commits: int = 0
    filtered_commits: int = 0
    total_contributors: int = 0
    total_languages: int = 0
    first_commit_date: datetime | None = None
    last_commit_date: datetime | None = None
    project_age_days: int = 0
    avg_commits_per_day: float = 0.0
    avg_commits_per_week: float = 0.0
    peak_day: PeakDay | None = None
    peak_hour: PeakHour | None = None


@dataclass(frozen=True)
class TimeInsights:
    """Time-of-day breakdown of commit activity (UTC)."""

    total_commits: int
    periods: dict[str, int]
    dominant_period: str
    dominant_count: int
    peak_hour: CommitHourBucket
    top_hours: tuple[CommitHourBucket, ...]
    work_hours_commits: int
    off_hours_commits: int
    work_hours_percent: float


@dataclass(frozen=True)
class ActivitySummary:
    total_commits: int = 0
    active_days: int = 0
    avg_per_active_day: float = 0.0
    most_active_date: str | None = None
    most_active_count: int = 0
    streak_days: int = 0
    weekend_commits: int = 0
    weekday_commits: int = 0


@dataclass(frozen=True)
class Dashboard:
    """Every chart-ready record for one report and one selected range."""

    repo_name: str
    date_range: DateRange | None
    stats: ProjectStats
    health: HealthScores
    by_day: list[CommitDayBucket] = field(default_factory=list)
    by_hour: list[CommitHourBucket] = field(default_factory=list)
    by_weekday: list[CommitWeekdayBucket] = field(default_factory=list)
    heatmap: HeatmapGrid | None = None
    contributors: list[ContributorStat] = field(default_factory=list)
    languages: list[LanguageStat] = field(default_factory=list)
    time_insights: TimeInsights | None = None
    activity: ActivitySummary = field(default_factory=ActivitySummary)

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-friendly dictionary."""
        data = asdict(self)
        data["health_radar"] = [asdict(score) for score in self.health.as_radar()]
        return _jsonable(data)


def _jsonable(value: Any) -> Any:
    if isinstance(value, dict):
        return {k: _jsonable(v) for k, v in value.items()}
    if isinstance(value, list | tuple):
        return [_jsonable(v) for v in value]
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, Enum):
        return value.value
    return value
