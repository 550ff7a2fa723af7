"""Shared fixtures for hack-introspector tests.

The sample report covers a three-day hackathon (Sat 2026-01-10 through
Mon 2026-01-12, UTC) with ten valid commits, one unparseable timeline
entry, three contributors (one with a deleted account) and three languages.
"""

from collections.abc import Callable
from datetime import UTC, datetime
from pathlib import Path

import pytest

from hack_introspector.report.models import AnalyticsReport

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def fixtures_dir() -> Path:
    """Path to the static test fixtures."""
    return FIXTURES_DIR


@pytest.fixture
def sample_report_path() -> Path:
    """Path to the sample report JSON."""
    return FIXTURES_DIR / "sample_report.json"


@pytest.fixture
def sample_report(sample_report_path: Path) -> AnalyticsReport:
    """Parsed sample report."""
    return AnalyticsReport.from_json(sample_report_path.read_text(encoding="utf-8"))


@pytest.fixture
def utc() -> Callable[..., datetime]:
    """Factory for UTC datetimes: utc(2026, 1, 10, 9, 15)."""

    def _make(*args: int) -> datetime:
        return datetime(*args, tzinfo=UTC)

    return _make


@pytest.fixture
def sample_timestamps(utc: Callable[..., datetime]) -> list[datetime]:
    """The sample report's valid commit times, sorted."""
    return [
        utc(2026, 1, 10, 9, 15),
        utc(2026, 1, 10, 10, 30),
        utc(2026, 1, 10, 23, 45),
        utc(2026, 1, 11, 2, 10),
        utc(2026, 1, 11, 14, 0),
        utc(2026, 1, 11, 14, 30),
        utc(2026, 1, 12, 6, 0),
        utc(2026, 1, 12, 7, 0),
        utc(2026, 1, 12, 21, 0),
        utc(2026, 1, 12, 22, 0),
    ]
