"""Tests for the analyze and fetch CLI commands."""

import json
from pathlib import Path
from unittest.mock import AsyncMock, patch

import pytest
from click.testing import CliRunner

from hack_introspector.api.http import ApiError
from hack_introspector.cli import main
from hack_introspector.report.models import AnalyticsReport

REPO_URL = "https://github.com/team/hackproject"


@pytest.fixture
def runner() -> CliRunner:
    """Create a Click test runner."""
    return CliRunner()


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    """Create a temporary config file."""
    path = tmp_path / "config.yaml"
    path.write_text(
        """api:
  base_url: "http://backend.test"
dashboard:
  default_preset: "all"
  top_contributors: 2
  language_colors:
    Go: "#00add8"
"""
    )
    return path


class TestMain:
    """Tests for the command group."""

    def test_help(self, runner: CliRunner) -> None:
        """Test that help lists both commands."""
        result = runner.invoke(main, ["--help"])
        assert result.exit_code == 0
        assert "analyze" in result.output
        assert "fetch" in result.output

    def test_version(self, runner: CliRunner) -> None:
        """Test the version option."""
        result = runner.invoke(main, ["--version"])
        assert result.exit_code == 0
        assert "hack-introspector" in result.output

    def test_logging_flags(self, runner: CliRunner, sample_report_path: Path) -> None:
        """Test that the logging flags are accepted before a command."""
        result = runner.invoke(
            main, ["--verbose", "--log-json", "analyze", str(sample_report_path)]
        )
        assert result.exit_code == 0, result.output


class TestAnalyzeCommand:
    """Tests for the analyze command."""

    def test_renders_dashboard(self, runner: CliRunner, sample_report_path: Path) -> None:
        """Test rendering the sample report."""
        result = runner.invoke(main, ["analyze", str(sample_report_path)])

        assert result.exit_code == 0, result.output
        assert "team/hackproject" in result.output
        assert "Project Stats" in result.output
        assert "Project Health" in result.output
        assert "Commit Heatmap" in result.output
        assert "alice" in result.output

    def test_top_contributors_from_config(
        self, runner: CliRunner, sample_report_path: Path, config_file: Path
    ) -> None:
        """Test that the contributor table is cut to the configured size."""
        result = runner.invoke(
            main, ["analyze", str(sample_report_path), "--config", str(config_file)]
        )

        assert result.exit_code == 0, result.output
        assert "alice" in result.output
        assert "bob" in result.output
        assert "unknown" not in result.output

    def test_json_output(self, runner: CliRunner, sample_report_path: Path, tmp_path: Path) -> None:
        """Test writing dashboard JSON."""
        output = tmp_path / "out" / "dashboard.json"
        result = runner.invoke(
            main, ["analyze", str(sample_report_path), "--preset", "7d", "-o", str(output)]
        )

        assert result.exit_code == 0, result.output
        assert "Dashboard written" in result.output
        data = json.loads(output.read_text())
        assert data["repo_name"] == "team/hackproject"
        assert data["stats"]["filtered_commits"] == 10

    def test_custom_range_end_inclusive(
        self, runner: CliRunner, sample_report_path: Path, tmp_path: Path
    ) -> None:
        """Test that --end includes the whole final day."""
        output = tmp_path / "dashboard.json"
        result = runner.invoke(
            main,
            [
                "analyze",
                str(sample_report_path),
                "--start",
                "2026-01-11",
                "--end",
                "2026-01-11",
                "-o",
                str(output),
            ],
        )

        assert result.exit_code == 0, result.output
        data = json.loads(output.read_text())
        assert data["stats"]["filtered_commits"] == 3
        assert [d["date"] for d in data["by_day"]] == ["2026-01-11"]

    def test_start_without_end(self, runner: CliRunner, sample_report_path: Path) -> None:
        """Test that a half-open custom range is a usage error."""
        result = runner.invoke(main, ["analyze", str(sample_report_path), "--start", "2026-01-11"])
        assert result.exit_code == 2
        assert "--start and --end must be given together" in result.output

    def test_inverted_custom_range(self, runner: CliRunner, sample_report_path: Path) -> None:
        """Test that start after end is reported, not raised."""
        result = runner.invoke(
            main,
            ["analyze", str(sample_report_path), "--start", "2026-01-12", "--end", "2026-01-10"],
        )
        assert result.exit_code == 1
        assert "after end" in result.output

    def test_custom_preset_not_selectable(self, runner: CliRunner, sample_report_path: Path) -> None:
        """Test that custom is reached through --start/--end only."""
        result = runner.invoke(main, ["analyze", str(sample_report_path), "--preset", "custom"])
        assert result.exit_code == 2

    def test_missing_report(self, runner: CliRunner, tmp_path: Path) -> None:
        """Test a report path that does not exist."""
        result = runner.invoke(main, ["analyze", str(tmp_path / "nope.json")])
        assert result.exit_code == 2

    def test_invalid_report(self, runner: CliRunner, tmp_path: Path) -> None:
        """Test a report that is not valid JSON."""
        path = tmp_path / "bad.json"
        path.write_text("[1, 2")
        result = runner.invoke(main, ["analyze", str(path)])
        assert result.exit_code == 1
        assert "Error" in result.output

    def test_empty_report(self, runner: CliRunner, tmp_path: Path) -> None:
        """Test that an empty report renders without failing."""
        path = tmp_path / "empty.json"
        path.write_text("{}")
        result = runner.invoke(main, ["analyze", str(path)])
        assert result.exit_code == 0, result.output
        assert "No commit data available" in result.output


class TestFetchCommand:
    """Tests for the fetch command."""

    def test_rejects_non_github_url(self, runner: CliRunner) -> None:
        """Test URL validation before any request."""
        result = runner.invoke(main, ["fetch", "https://gitlab.com/team/project"])
        assert result.exit_code == 1
        assert "Please enter a valid GitHub URL" in result.output

    def test_saves_report(
        self,
        runner: CliRunner,
        sample_report: AnalyticsReport,
        config_file: Path,
        tmp_path: Path,
    ) -> None:
        """Test that a fetched report is written to disk."""
        output = tmp_path / "report.json"
        with patch(
            "hack_introspector.cli.ReportClient.analyze_repository",
            new=AsyncMock(return_value=sample_report),
        ) as analyze:
            result = runner.invoke(
                main, ["fetch", REPO_URL, "-c", str(config_file), "-o", str(output)]
            )

        assert result.exit_code == 0, result.output
        assert "Report saved" in result.output
        analyze.assert_awaited_once_with(REPO_URL)
        saved = AnalyticsReport.from_json(output.read_text())
        assert saved == sample_report

    def test_api_error(self, runner: CliRunner, tmp_path: Path) -> None:
        """Test that backend errors are shown and abort."""
        output = tmp_path / "report.json"
        with patch(
            "hack_introspector.cli.ReportClient.analyze_repository",
            new=AsyncMock(side_effect=ApiError(500, "API Error: Internal Server Error")),
        ):
            result = runner.invoke(main, ["fetch", REPO_URL, "-o", str(output)])

        assert result.exit_code == 1
        assert "API Error: Internal Server Error" in result.output
        assert not output.exists()
