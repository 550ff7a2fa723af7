"""Contributor and language rankings.

Contributors rank by commit count, languages by byte count, both
descending. Ranks are sequential (1, 2, 3, ...) with no gaps; ties keep the
order the backend sent them in.
"""

import logging
from collections.abc import Mapping, Sequence

import polars as pl

from hack_introspector.analytics.models import ContributorStat, LanguageStat
from hack_introspector.report.models import Contributor

logger = logging.getLogger(__name__)

__all__ = [
    "DEFAULT_LANGUAGE_COLOR",
    "LANGUAGE_COLORS",
    "get_language_color",
    "rank_contributors",
    "rank_languages",
]

DEFAULT_LANGUAGE_COLOR = "#666666"

# Monochrome palette matching the dashboard theme
LANGUAGE_COLORS: dict[str, str] = {
    "JavaScript": "#333333",
    "TypeScript": "#444444",
    "Python": "#555555",
    "Java": "#666666",
    "Go": "#777777",
    "Rust": "#888888",
    "C": "#999999",
    "C++": "#aaaaaa",
    "Ruby": "#bbbbbb",
    "PHP": "#cccccc",
    "Swift": "#3d3d3d",
    "Kotlin": "#4d4d4d",
    "Scala": "#5d5d5d",
    "Shell": "#6d6d6d",
    "HTML": "#7d7d7d",
    "CSS": "#8d8d8d",
    "SCSS": "#9d9d9d",
    "Vue": "#adadad",
    "Svelte": "#bdbdbd",
}


def get_language_color(name: str, overrides: Mapping[str, str] | None = None) -> str:
    """Look up the display color for a language.

    Args:
        name: Language name as reported by GitHub.
        overrides: Optional colors that take precedence over the built-in table.

    Returns:
        Hex color, or the default color for unknown languages.
    """
    if overrides and name in overrides:
        return overrides[name]
    return LANGUAGE_COLORS.get(name, DEFAULT_LANGUAGE_COLOR)


def rank_contributors(contributors: Sequence[Contributor] | None) -> list[ContributorStat]:
    """Rank contributors by commit count.

    Args:
        contributors: Contributor totals from the report.

    Returns:
        ContributorStat list, highest commit count first.
    """
    if not contributors:
        return []

    df = pl.DataFrame(
        {
            "login": [c.author.login for c in contributors],
            "avatar_url": [c.author.avatar_url for c in contributors],
            "commits": [c.total for c in contributors],
        },
        schema={"login": pl.Utf8, "avatar_url": pl.Utf8, "commits": pl.Int64},
    )
    ranked = _rank_by(df, "commits")

    return [
        ContributorStat(
            login=row["login"],
            avatar_url=row["avatar_url"],
            commits=row["commits"],
            percentage=row["percentage"],
            rank=row["rank"],
        )
        for row in ranked.iter_rows(named=True)
    ]


def rank_languages(
    languages: Mapping[str, int] | None,
    colors: Mapping[str, str] | None = None,
) -> list[LanguageStat]:
    """Rank languages by byte count.

    Args:
        languages: Map of language name to bytes of code.
        colors: Optional color overrides by language name.

    Returns:
        LanguageStat list, largest first.
    """
    if not languages:
        return []

    df = pl.DataFrame(
        {"name": list(languages.keys()), "bytes": list(languages.values())},
        schema={"name": pl.Utf8, "bytes": pl.Int64},
    )
    ranked = _rank_by(df, "bytes")

    return [
        LanguageStat(
            name=row["name"],
            bytes=row["bytes"],
            percentage=row["percentage"],
            color=get_language_color(row["name"], colors),
        )
        for row in ranked.iter_rows(named=True)
    ]


def _rank_by(df: pl.DataFrame, value_col: str) -> pl.DataFrame:
    """Sort descending by a column and add percentage and sequential rank.

    Args:
        df: Non-empty DataFrame with an integer ``value_col``.
        value_col: Column to rank by.

    Returns:
        DataFrame with "percentage" (float) and "rank" (1-based) columns.
    """
    total = df[value_col].sum()
    share = (pl.col(value_col) / total * 100) if total > 0 else pl.lit(0.0)

    ranked = (
        df.sort(value_col, descending=True, maintain_order=True)
        .with_columns(share.cast(pl.Float64).alias("percentage"))
        .with_row_index("rank", offset=1)
    )
    logger.debug("Ranked %d rows by %s (total %d)", len(ranked), value_col, total)
    return ranked
