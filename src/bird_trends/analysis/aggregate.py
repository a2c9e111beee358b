"""Per-season sighting totals for a range of years.

Each record is counted under its named season *and* under ``all``. The
``all`` column is a whole-year total to read alongside the others, not a
check that they sum to it. Don't "fix" the overlap.
"""

from __future__ import annotations

import csv
import io
from collections.abc import Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from bird_trends.analysis.seasons import (
    SEASON_ORDER,
    Season,
    parse_season,
    season_date_range,
    validate_year,
)
from bird_trends.analysis.species import records_for_species
from bird_trends.exceptions import InvalidArgumentError

if TYPE_CHECKING:
    from bird_trends.datasources.ebird.models import SightingRecord

#: Column order of the exported aggregate table.
AGGREGATE_COLUMNS: tuple[str, ...] = ("year", *(s.value for s in SEASON_ORDER))


@dataclass(frozen=True)
class SeasonYearAggregate:
    """Season totals for one label year."""

    year: int
    spring: int = 0
    breeding: int = 0
    fall: int = 0
    winter: int = 0
    all_year: int = 0

    def count(self, season: Season | str) -> int:
        """Total for a season."""
        season = parse_season(season)
        if season is Season.ALL:
            return self.all_year
        value: int = getattr(self, season.value)
        return value

    def as_row(self) -> dict[str, int]:
        """Mapping keyed by ``AGGREGATE_COLUMNS``, in column order."""
        row = {"year": self.year}
        for season in SEASON_ORDER:
            row[season.value] = self.count(season)
        return row


def aggregate_season_year(
    records: Iterable[SightingRecord],
    season: Season | str,
    year: int,
    species_code: str | None = None,
) -> int:
    """
    Sum record counts that fall inside one season-year window.

    Args:
        records: Sighting records (not modified).
        season: Season or season name.
        year: Label year (>= 1970).
        species_code: Only count this species, if given.

    Returns:
        Total individuals sighted in the window (>= 0).
    """
    start, end = season_date_range(season, year)
    if species_code is not None:
        records = records_for_species(records, species_code)
    return sum(r.count for r in records if start <= r.observed_on < end)


def aggregate_year(
    records: Iterable[SightingRecord],
    year: int,
    species_code: str | None = None,
) -> SeasonYearAggregate:
    """Build the season totals row for one label year."""
    table = list(records)
    totals = {
        season: aggregate_season_year(table, season, year, species_code)
        for season in SEASON_ORDER
    }
    return SeasonYearAggregate(
        year=year,
        spring=totals[Season.SPRING],
        breeding=totals[Season.BREEDING],
        fall=totals[Season.FALL],
        winter=totals[Season.WINTER],
        all_year=totals[Season.ALL],
    )


def aggregate_seasons(
    records: Iterable[SightingRecord],
    start_year: int,
    end_year: int,
    species_code: str | None = None,
) -> list[SeasonYearAggregate]:
    """
    Season totals for every label year in ``[start_year, end_year]``.

    Rows don't depend on each other, so callers may compute them with
    ``aggregate_year`` in any order (the report flow runs one task per year).

    Args:
        records: Sighting records (not modified).
        start_year: First label year, inclusive.
        end_year: Last label year, inclusive.
        species_code: Restrict totals to one species.

    Returns:
        One SeasonYearAggregate per year, ascending.

    Raises:
        InvalidArgumentError: Year before 1970 or ``start_year > end_year``.
    """
    years = label_years(start_year, end_year)
    table = list(records)
    return [aggregate_year(table, year, species_code) for year in years]


def label_years(start_year: int, end_year: int) -> list[int]:
    """Validated inclusive list of label years.

    Raises:
        InvalidArgumentError: Year before 1970 or ``start_year > end_year``.
    """
    validate_year(start_year)
    validate_year(end_year)
    if start_year > end_year:
        msg = f"start_year ({start_year}) is after end_year ({end_year})"
        raise InvalidArgumentError(msg)
    return list(range(start_year, end_year + 1))


# =============================================================================
# Tabular export
# =============================================================================


def aggregates_to_rows(aggregates: Iterable[SeasonYearAggregate]) -> list[dict[str, Any]]:
    """Convert aggregates to table rows (``AGGREGATE_COLUMNS`` keys)."""
    return [agg.as_row() for agg in aggregates]


def aggregates_to_csv(aggregates: Iterable[SeasonYearAggregate]) -> str:
    """Render aggregates as CSV text with the ``AGGREGATE_COLUMNS`` header."""
    buf = io.StringIO()
    writer = csv.DictWriter(buf, fieldnames=list(AGGREGATE_COLUMNS), lineterminator="\n")
    writer.writeheader()
    writer.writerows(aggregates_to_rows(aggregates))
    return buf.getvalue()
