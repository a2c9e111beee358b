"""Bird Trends - seasonal bird-sighting trends for a region.

Architecture::

    datasources/   Region page fetch + HTML extraction (eBird region listing)
    analysis/      Season-year windows, per-season aggregation, trend series
    renderers/     Pure data → HTML (season table, trend chart, species list)
    flows/         Prefect orchestration (fetch → extract → aggregate → render)
    services/      Shared utilities (HTTP client with retry)

Data flow: datasources → analysis → renderers → site/index.html

Nothing is cached between runs: every report re-fetches the region page.
"""

__version__ = "0.1.0"
__author__ = "bird-trends contributors"

from bird_trends.config import Settings
from bird_trends.exceptions import (
    BirdTrendsError,
    FetchError,
    InvalidArgumentError,
    InvalidCountError,
    ParseError,
)

__all__ = [
    "BirdTrendsError",
    "FetchError",
    "InvalidArgumentError",
    "InvalidCountError",
    "ParseError",
    "Settings",
    "__version__",
]
