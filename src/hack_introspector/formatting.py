"""Human-readable formatting for dashboard values."""

from datetime import datetime

__all__ = ["format_bytes", "format_date", "format_duration", "format_number"]


def format_number(num: float, decimals: int = 0) -> str:
    """Format a number with thousands separators."""
    return f"{num:,.{decimals}f}"


def format_date(value: datetime | None, style: str = "medium") -> str:
    """Format a datetime for display.

    Args:
        value: Datetime or None.
        style: "short" (Jan 5), "medium" (Jan 5, 2026) or "long" (Mon, Jan 5, 2026).

    Returns:
        Formatted date, or "N/A" for None.
    """
    if value is None:
        return "N/A"
    day = str(value.day)
    if style == "short":
        return f"{value:%b} {day}"
    if style == "long":
        return f"{value:%a, %b} {day}, {value.year}"
    return f"{value:%b} {day}, {value.year}"


def _plural(count: int, unit: str) -> str:
    return f"{count} {unit}" + ("" if count == 1 else "s")


def format_duration(days: float) -> str:
    """Describe a number of days as days, weeks, months or years."""
    if days < 1:
        return "Less than a day"
    if days < 7:
        return _plural(round(days), "day")
    if days < 30:
        return _plural(round(days / 7), "week")
    if days < 365:
        return _plural(round(days / 30), "month")

    years = int(days // 365)
    remaining_months = round((days % 365) / 30)
    if remaining_months > 0:
        return f"{_plural(years, 'year')}, {_plural(remaining_months, 'month')}"
    return _plural(years, "year")


def format_bytes(size: int) -> str:
    """Format a byte count as B, KB or MB."""
    if size < 1024:
        return f"{size} B"
    if size < 1024 * 1024:
        return f"{size / 1024:.1f} KB"
    return f"{size / (1024 * 1024):.1f} MB"
