"""Pure analysis over extracted sighting records (no I/O).

Modules:
  - seasons:   Season enum, season-year date windows
  - aggregate: SeasonYearAggregate, per-season totals across a year range, CSV export
  - trends:    TrendPoint, long-form series for charting
  - species:   SpeciesSummary, per-species totals and date span

Pipeline::

    records -> aggregate_seasons(records, 2000, 2020) -> build_trend_series(rows)
"""

from bird_trends.analysis.aggregate import (
    AGGREGATE_COLUMNS,
    SeasonYearAggregate,
    aggregate_season_year,
    aggregate_seasons,
    aggregate_year,
    aggregates_to_csv,
    aggregates_to_rows,
    label_years,
)
from bird_trends.analysis.seasons import (
    MIN_YEAR,
    SEASON_ORDER,
    SEASON_WINDOWS,
    Season,
    SeasonWindow,
    in_season,
    season_date_range,
)
from bird_trends.analysis.species import SpeciesSummary, records_for_species, summarize_species
from bird_trends.analysis.trends import TrendPoint, build_trend_series, series_by_season

__all__ = [
    "AGGREGATE_COLUMNS",
    "MIN_YEAR",
    "SEASON_ORDER",
    "SEASON_WINDOWS",
    "Season",
    "SeasonWindow",
    "SeasonYearAggregate",
    "SpeciesSummary",
    "TrendPoint",
    "aggregate_season_year",
    "aggregate_seasons",
    "aggregate_year",
    "aggregates_to_csv",
    "aggregates_to_rows",
    "build_trend_series",
    "in_season",
    "label_years",
    "records_for_species",
    "season_date_range",
    "series_by_season",
    "summarize_species",
]
