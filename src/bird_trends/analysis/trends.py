"""Long-form trend series from the wide aggregate table."""

from __future__ import annotations

from collections.abc import Iterable
from typing import NamedTuple

from bird_trends.analysis.aggregate import SeasonYearAggregate
from bird_trends.analysis.seasons import SEASON_ORDER, Season


class TrendPoint(NamedTuple):
    """One (year, season, total) observation for the trend chart."""

    year: int
    season: Season
    count: int


def build_trend_series(aggregates: Iterable[SeasonYearAggregate]) -> list[TrendPoint]:
    """
    Flatten aggregate rows into trend points.

    Emits one point per (row, season): rows keep their input order and
    seasons follow ``SEASON_ORDER`` within each row.
    """
    return [
        TrendPoint(year=agg.year, season=season, count=agg.count(season))
        for agg in aggregates
        for season in SEASON_ORDER
    ]


def series_by_season(points: Iterable[TrendPoint]) -> dict[Season, list[TrendPoint]]:
    """Group trend points into one series per season (``SEASON_ORDER`` keys)."""
    grouped: dict[Season, list[TrendPoint]] = {season: [] for season in SEASON_ORDER}
    for point in points:
        grouped[point.season].append(point)
    return grouped
