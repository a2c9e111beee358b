"""eBird sighting record model."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from datetime import date


@dataclass(frozen=True)
class SightingRecord:
    """One species entry from a region's sightings listing.

    Equal records are not merged: two identical rows are two checklist
    entries and both count toward the totals.
    """

    species_code: str
    species_name: str
    count: int
    observed_on: date

    @property
    def year(self) -> int:
        return self.observed_on.year
