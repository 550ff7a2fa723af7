"""CLI entry point for hack-introspector.

Commands:
- fetch: Ask the backend to analyze a GitHub repository and save the report JSON
- analyze: Render the dashboard for a saved report, or export it as JSON
"""

import asyncio
import json
from datetime import UTC, datetime, timedelta
from pathlib import Path

import click
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from hack_introspector import __version__
from hack_introspector.analytics import Dashboard, DatePreset, DateRange, build_dashboard
from hack_introspector.api import ApiError, ReportClient, ReportSession
from hack_introspector.config import Config, load_config
from hack_introspector.formatting import format_bytes, format_date, format_duration, format_number
from hack_introspector.logging import get_logger, setup_logging
from hack_introspector.report import AnalyticsReport, load_report

console = Console()
logger = get_logger(__name__)

HEAT_SHADES = " ░▒▓█"
BAR_WIDTH = 30


@click.group()
@click.version_option(version=__version__, prog_name="hack-introspector")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Enable verbose output")
@click.option("--log-json", is_flag=True, default=False, help="Emit logs as JSON lines")
@click.pass_context
def main(ctx: click.Context, verbose: bool, log_json: bool) -> None:
    """Hackathon repository analytics.

    \b
    Quick Start:
        1. Fetch a report: hack-introspector fetch https://github.com/owner/repo
        2. Show it: hack-introspector analyze report.json --preset 30d
    """
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    setup_logging(verbose=verbose, json_format=log_json)


def _load_cfg(config: Path | None) -> Config:
    return load_config(config) if config is not None else Config()


# ============================================================================
# FETCH
# ============================================================================


@main.command()
@click.argument("repo_url")
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help="Path to config.yaml file",
)
@click.option(
    "--output",
    "-o",
    type=click.Path(path_type=Path),
    default=Path("report.json"),
    show_default=True,
    help="Where to write the report JSON",
)
def fetch(repo_url: str, config: Path | None, output: Path) -> None:
    """Analyze a GitHub repository via the backend and save the report."""
    if "github.com" not in repo_url:
        console.print("[bold red]Error:[/bold red] Please enter a valid GitHub URL")
        raise click.Abort()

    try:
        cfg = _load_cfg(config)
    except (FileNotFoundError, ValidationError) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise click.Abort() from e

    async def _run() -> AnalyticsReport | None:
        async with ReportClient(
            base_url=cfg.api.resolve_base_url(),
            timeout=cfg.api.timeout_seconds,
        ) as client:
            return await ReportSession(client).load(repo_url)

    console.print(f"[cyan]Fetching repository data for {repo_url}...[/cyan]")
    try:
        report = asyncio.run(_run())
    except ApiError as e:
        logger.debug("Fetch failed with status %d", e.status)
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise click.Abort() from e

    if report is None:
        console.print("[yellow]Request was superseded, nothing written[/yellow]")
        return

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(report.model_dump_json(indent=2), encoding="utf-8")
    console.print(f"[bold green]Report saved:[/bold green] {output}")
    console.print(f"  Commits: {format_number(len(report.commit_timeline))}")
    console.print(f"  Contributors: {format_number(len(report.contributors))}")


# ============================================================================
# ANALYZE
# ============================================================================


@main.command()
@click.argument("report_path", type=click.Path(exists=True, path_type=Path))
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help="Path to config.yaml file",
)
@click.option(
    "--preset",
    "-p",
    type=click.Choice([p.value for p in DatePreset if p is not DatePreset.CUSTOM]),
    default=None,
    help="Date range preset (default from config)",
)
@click.option(
    "--start",
    type=click.DateTime(formats=["%Y-%m-%d"]),
    default=None,
    help="Custom range start (UTC date)",
)
@click.option(
    "--end",
    type=click.DateTime(formats=["%Y-%m-%d"]),
    default=None,
    help="Custom range end (UTC date, inclusive)",
)
@click.option(
    "--output",
    "-o",
    type=click.Path(path_type=Path),
    default=None,
    help="Write dashboard JSON to this file instead of printing",
)
def analyze(
    report_path: Path,
    config: Path | None,
    preset: str | None,
    start: datetime | None,
    end: datetime | None,
    output: Path | None,
) -> None:
    """Show the analytics dashboard for a saved report."""
    if (start is None) != (end is None):
        raise click.UsageError("--start and --end must be given together")

    try:
        cfg = _load_cfg(config)
        report = load_report(report_path)

        custom_range = None
        if start is not None and end is not None:
            custom_range = DateRange(
                start=start.replace(tzinfo=UTC),
                end=end.replace(tzinfo=UTC) + timedelta(days=1) - timedelta(microseconds=1),
            )
            preset = DatePreset.CUSTOM.value

        dashboard = build_dashboard(
            report,
            preset=preset or cfg.dashboard.default_preset,
            custom_range=custom_range,
            language_colors=cfg.dashboard.language_colors,
        )
    except (FileNotFoundError, ValueError) as e:
        # pydantic's ValidationError is a ValueError
        logger.debug("Failed to build dashboard for %s", report_path, exc_info=True)
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise click.Abort() from e

    if output is not None:
        output.parent.mkdir(parents=True, exist_ok=True)
        with output.open("w") as f:
            json.dump(dashboard.to_dict(), f, indent=2, default=str)
        console.print(f"[bold green]Dashboard written:[/bold green] {output}")
        return

    _render_dashboard(dashboard, cfg.dashboard.top_contributors)


# ============================================================================
# RENDERING
# ============================================================================


def _bar(count: int, peak: int, width: int = BAR_WIDTH) -> str:
    if peak <= 0:
        return ""
    return "█" * round(width * count / peak)


def _render_dashboard(dashboard: Dashboard, top_n: int) -> None:
    stats = dashboard.stats

    console.print(f"[bold]{dashboard.repo_name or 'Repository'}[/bold]")
    if dashboard.date_range is not None:
        console.print(
            f"Range: {format_date(dashboard.date_range.start)} - "
            f"{format_date(dashboard.date_range.end)}"
        )
    else:
        console.print("[yellow]No commit data available[/yellow]")
    console.print()

    table = Table(title="Project Stats")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right")
    table.add_row("Total commits", format_number(stats.total_commits))
    table.add_row("Commits in range", format_number(stats.filtered_commits))
    table.add_row("Contributors", format_number(stats.total_contributors))
    table.add_row("Languages", format_number(stats.total_languages))
    table.add_row("First commit", format_date(stats.first_commit_date))
    table.add_row("Last commit", format_date(stats.last_commit_date))
    table.add_row("Project age", format_duration(stats.project_age_days))
    table.add_row("Commits / day", format_number(stats.avg_commits_per_day, 2))
    table.add_row("Commits / week", format_number(stats.avg_commits_per_week, 1))
    if stats.peak_day is not None:
        table.add_row("Peak day", f"{stats.peak_day.date} ({stats.peak_day.count})")
    if stats.peak_hour is not None:
        table.add_row("Peak hour (UTC)", f"{stats.peak_hour.hour}:00 ({stats.peak_hour.count})")
    console.print(table)

    health = Table(title="Project Health")
    health.add_column("Metric", style="cyan")
    health.add_column("Score", justify="right")
    health.add_column("")
    for score in dashboard.health.as_radar():
        health.add_row(score.metric, str(score.value), _bar(score.value, score.full_mark, 20))
    console.print(health)

    peak_hour = max((b.count for b in dashboard.by_hour), default=0)
    hours = Table(title="Commits by Hour (UTC)")
    hours.add_column("Hour", justify="right")
    hours.add_column("Commits", justify="right")
    hours.add_column("")
    for bucket in dashboard.by_hour:
        hours.add_row(bucket.label, str(bucket.count), _bar(bucket.count, peak_hour))
    console.print(hours)

    peak_weekday = max((b.count for b in dashboard.by_weekday), default=0)
    weekdays = Table(title="Commits by Weekday")
    weekdays.add_column("Day")
    weekdays.add_column("Commits", justify="right")
    weekdays.add_column("Share", justify="right")
    weekdays.add_column("")
    for bucket in dashboard.by_weekday:
        weekdays.add_row(
            bucket.name,
            str(bucket.count),
            f"{bucket.percentage:.1f}%",
            _bar(bucket.count, peak_weekday),
        )
    console.print(weekdays)

    if dashboard.heatmap is not None:
        _render_heatmap(dashboard)

    if dashboard.contributors:
        contributors = Table(title="Contributors")
        contributors.add_column("#", justify="right")
        contributors.add_column("Login", style="cyan")
        contributors.add_column("Commits", justify="right")
        contributors.add_column("Share", justify="right")
        for stat in dashboard.contributors[:top_n]:
            contributors.add_row(
                str(stat.rank), stat.login, format_number(stat.commits), f"{stat.percentage:.1f}%"
            )
        console.print(contributors)

    if dashboard.languages:
        languages = Table(title="Languages")
        languages.add_column("Language")
        languages.add_column("Size", justify="right")
        languages.add_column("Share", justify="right")
        for lang in dashboard.languages:
            languages.add_row(
                f"[{lang.color}]■[/] {lang.name}",
                format_bytes(lang.bytes),
                f"{lang.percentage:.1f}%",
            )
        console.print(languages)

    insights = dashboard.time_insights
    if insights is not None:
        console.print("[bold]Time Insights (UTC)[/bold]")
        console.print(f"  Most active hour: {insights.peak_hour.label} ({insights.peak_hour.count})")
        console.print(f"  Dominant period: {insights.dominant_period} ({insights.dominant_count})")
        console.print(
            f"  Work hours: {insights.work_hours_percent:.0f}% "
            f"({insights.work_hours_commits} vs {insights.off_hours_commits} off-hours)"
        )

    activity = dashboard.activity
    if activity.active_days:
        console.print("[bold]Activity[/bold]")
        console.print(
            f"  {format_number(activity.total_commits)} commits on "
            f"{format_number(activity.active_days)} days "
            f"({activity.avg_per_active_day:.1f} per active day)"
        )
        console.print(f"  Current streak: {activity.streak_days} days")
        console.print(
            f"  Weekend vs weekday: {activity.weekend_commits} / {activity.weekday_commits}"
        )


def _render_heatmap(dashboard: Dashboard) -> None:
    heatmap = dashboard.heatmap
    if heatmap is None:
        return

    peak = heatmap.max_count
    label_width = max(len(label) for label in heatmap.row_labels)
    console.print(f"[bold]Commit Heatmap[/bold] ({heatmap.resolution.value})")
    console.print(" " * (label_width + 1) + "".join(f"{h:<4}" for h in range(0, 24, 4)))
    for label, row in zip(heatmap.row_labels, heatmap.grid, strict=True):
        cells = "".join(_shade(count, peak) for count in row)
        console.print(f"{label:>{label_width}} {cells}", highlight=False)
    console.print()


def _shade(count: int, peak: int) -> str:
    if count <= 0 or peak <= 0:
        return "·"
    level = min(len(HEAT_SHADES) - 1, max(1, round(count / peak * (len(HEAT_SHADES) - 1))))
    return HEAT_SHADES[level]
