"""Full report page assembly."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import UTC, datetime

from bird_trends.analysis.aggregate import SeasonYearAggregate
from bird_trends.analysis.seasons import SEASON_ORDER, season_date_range
from bird_trends.analysis.species import SpeciesSummary
from bird_trends.analysis.trends import build_trend_series
from bird_trends.renderers import render_template
from bird_trends.renderers.tables import build_season_table_html, build_species_table_html
from bird_trends.renderers.trend_chart import build_trend_chart_html


def _season_legend(year: int) -> list[dict[str, str]]:
    """Month spans for each season, using a sample label year."""
    legend = []
    for season in SEASON_ORDER:
        start, end = season_date_range(season, year)
        legend.append(
            {
                "season": season.value,
                "span": f"{start:%b %d} - {end:%b %d} (exclusive)",
            }
        )
    return legend


def build_report_html(
    region: str,
    aggregates: Sequence[SeasonYearAggregate],
    species: Sequence[SpeciesSummary],
    *,
    smoothing: str = "loess",
    species_code: str | None = None,
    generated_at: datetime | None = None,
) -> str:
    """Build the region report page.

    Args:
        region: Region code shown in the header and used for species links.
        aggregates: Season totals, one per year.
        species: Species summaries for the region.
        smoothing: Trend chart smoothing method.
        species_code: Set when the totals are for a single species.
        generated_at: Timestamp for the footer (defaults to now, UTC).
    """
    generated = generated_at or datetime.now(UTC)
    years = [agg.year for agg in aggregates]
    year_range = f"{min(years)}-{max(years)}" if years else ""

    trend_html = build_trend_chart_html(
        build_trend_series(aggregates),
        smoothing,
        title=f"Sightings per season, {year_range}" if year_range else "",
    )

    return render_template(
        "base.html.j2",
        region=region,
        year_range=year_range,
        species_code=species_code,
        updated=generated.strftime("%Y-%m-%d %H:%M UTC"),
        season_legend=_season_legend(min(years) if years else 2000),
        trend_chart=trend_html,
        season_table=build_season_table_html(aggregates),
        species_table=build_species_table_html(species, region),
    )
