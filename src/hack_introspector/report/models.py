"""Pydantic models for the backend's analytics report.

The backend is trusted for shape but not for completeness: collections may
be missing or null, and contributors whose GitHub account was deleted come
back with a null author. Those cases default to empty values here so the
analytics layer never has to special-case them.
"""

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

logger = logging.getLogger(__name__)


class Author(BaseModel):
    """Commit author as reported by the GitHub stats API."""

    model_config = ConfigDict(extra="ignore")

    login: str = "unknown"
    avatar_url: str = ""

    @field_validator("login", "avatar_url", mode="before")
    @classmethod
    def none_to_default(cls, v: Any, info: ValidationInfo) -> Any:
        if v is None:
            return "unknown" if info.field_name == "login" else ""
        return v


class Contributor(BaseModel):
    """Contributor commit total."""

    model_config = ConfigDict(extra="ignore")

    author: Author = Field(default_factory=Author)
    total: int = 0

    @field_validator("author", mode="before")
    @classmethod
    def none_author(cls, v: Any) -> Any:
        return {} if v is None else v

    @field_validator("total", mode="before")
    @classmethod
    def none_total(cls, v: Any) -> Any:
        return 0 if v is None else v


class RepoInfo(BaseModel):
    """Repository metadata."""

    model_config = ConfigDict(extra="ignore")

    name: str = ""
    full_name: str = ""
    description: str | None = None
    html_url: str = ""
    language: str | None = None
    languages: dict[str, int] = Field(default_factory=dict)
    stargazers_count: int = 0
    forks_count: int = 0
    open_issues_count: int = 0
    created_at: str | None = None

    @field_validator("languages", mode="before")
    @classmethod
    def coerce_languages(cls, v: Any) -> Any:
        if v is None:
            return {}
        if isinstance(v, dict):
            # drop languages whose byte count is missing or not an integer
            return {
                name: size
                for name, size in v.items()
                if isinstance(size, int) and not isinstance(size, bool)
            }
        return v


class AnalyticsReport(BaseModel):
    """One analysis result for one repository.

    ``commit_timeline`` is kept as raw values; parsing and discarding bad
    entries is the normalizer's job.
    """

    model_config = ConfigDict(extra="ignore")

    id: int | None = None
    repo_info: RepoInfo = Field(default_factory=RepoInfo)
    contributors: list[Contributor] = Field(default_factory=list)
    commit_timeline: list[Any] = Field(default_factory=list)
    generated_at: str | None = None

    @field_validator("repo_info", mode="before")
    @classmethod
    def none_repo_info(cls, v: Any) -> Any:
        return {} if v is None else v

    @field_validator("contributors", "commit_timeline", mode="before")
    @classmethod
    def none_to_list(cls, v: Any) -> Any:
        return [] if v is None else v

    @classmethod
    def from_json(cls, text: str) -> "AnalyticsReport":
        """Parse a report from JSON text."""
        return cls.model_validate(json.loads(text))


def load_report(path: Path) -> AnalyticsReport:
    """Load an analytics report from a JSON file.

    Args:
        path: Path to the report JSON.

    Returns:
        Validated AnalyticsReport.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        ValidationError: If the payload is not a report object.
    """
    if not path.exists():
        msg = f"Report file not found: {path}"
        raise FileNotFoundError(msg)

    report = AnalyticsReport.from_json(path.read_text(encoding="utf-8"))
    logger.debug(
        "Loaded report for %s with %d timeline entries",
        report.repo_info.full_name or "<unnamed>",
        len(report.commit_timeline),
    )
    return report
