"""eBird region sightings data source.

Fetches a region's "bird list" page (all years, ranked by most recent
checklist) and extracts one record per listed species sighting.

Public API:
  - client: build_region_url, fetch_region_page, PageFetcher
  - models: SightingRecord
  - counts: normalize_count, PRESENCE_MARKER
  - extract: PageSchema, REGION_PAGE_SCHEMA, extract_records
"""

from bird_trends.datasources.ebird.client import (
    PageFetcher,
    build_region_url,
    fetch_region_page,
)
from bird_trends.datasources.ebird.counts import PRESENCE_MARKER, normalize_count
from bird_trends.datasources.ebird.extract import (
    REGION_PAGE_SCHEMA,
    PageSchema,
    extract_records,
)
from bird_trends.datasources.ebird.models import SightingRecord

__all__ = [
    "PRESENCE_MARKER",
    "REGION_PAGE_SCHEMA",
    "PageFetcher",
    "PageSchema",
    "SightingRecord",
    "build_region_url",
    "extract_records",
    "fetch_region_page",
    "normalize_count",
]
