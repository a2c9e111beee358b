"""Per-species summaries of a region's sighting records."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from datetime import date

    from bird_trends.datasources.ebird.models import SightingRecord


@dataclass(frozen=True)
class SpeciesSummary:
    """Totals for one species across all of a region's records."""

    species_code: str
    species_name: str
    total_count: int
    checklists: int
    first_seen: date
    last_seen: date


def records_for_species(
    records: Iterable[SightingRecord], species_code: str
) -> list[SightingRecord]:
    """Records of a single species, in input order."""
    return [r for r in records if r.species_code == species_code]


def summarize_species(records: Iterable[SightingRecord]) -> list[SpeciesSummary]:
    """
    Group records by species code.

    Each record counts as one checklist. The display name is taken from the
    first record seen for a code.

    Returns:
        SpeciesSummary list sorted by total count (descending), then name.
    """
    by_code: dict[str, list[SightingRecord]] = {}
    for record in records:
        by_code.setdefault(record.species_code, []).append(record)

    summaries = []
    for code, group in by_code.items():
        dates = [r.observed_on for r in group]
        summaries.append(
            SpeciesSummary(
                species_code=code,
                species_name=group[0].species_name,
                total_count=sum(r.count for r in group),
                checklists=len(group),
                first_seen=min(dates),
                last_seen=max(dates),
            )
        )
    return sorted(summaries, key=lambda s: (-s.total_count, s.species_name))
