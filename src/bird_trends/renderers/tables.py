"""Season totals and species list HTML tables."""

from __future__ import annotations

from collections.abc import Sequence

from bird_trends.analysis.aggregate import (
    AGGREGATE_COLUMNS,
    SeasonYearAggregate,
    aggregates_to_rows,
)
from bird_trends.analysis.species import SpeciesSummary
from bird_trends.renderers import render_template


def _ebird_species_url(species_code: str, region: str) -> str:
    return f"https://ebird.org/species/{species_code}/{region}"


def build_season_table_html(aggregates: Sequence[SeasonYearAggregate]) -> str:
    """Build the year x season totals table."""
    if not aggregates:
        return "<p>No seasonal totals available.</p>"

    rows = aggregates_to_rows(aggregates)
    return render_template(
        "season_table.html.j2",
        columns=AGGREGATE_COLUMNS,
        rows=[[row[col] for col in AGGREGATE_COLUMNS] for row in rows],
    )


def build_species_table_html(
    summaries: Sequence[SpeciesSummary],
    region: str,
    *,
    limit: int = 25,
) -> str:
    """Build a ranked table of the most-sighted species."""
    if not summaries:
        return "<p>No species recorded.</p>"

    top = list(summaries[:limit])
    max_total = top[0].total_count or 1
    species_rows = [
        {
            "name": s.species_name,
            "url": _ebird_species_url(s.species_code, region),
            "total": s.total_count,
            "checklists": s.checklists,
            "first_seen": s.first_seen.isoformat(),
            "last_seen": s.last_seen.isoformat(),
            "bar_width": int((s.total_count / max_total) * 200),
        }
        for s in top
    ]
    return render_template(
        "species_table.html.j2",
        species=species_rows,
        shown=len(top),
        total_species=len(summaries),
    )
