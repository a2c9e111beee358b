"""eBird region page URLs and the default page fetcher."""

from __future__ import annotations

from collections.abc import Callable
from urllib.parse import urlencode

import requests

from bird_trends.exceptions import FetchError
from bird_trends.services.http import session

BASE_URL = "https://ebird.org"

# Query values for "all years" and "rank by most recent checklist"
ALL_YEARS = "all"
RANK_MOST_RECENT = "mrec"

#: Anything that turns a URL into page markup (or raises FetchError).
PageFetcher = Callable[[str], str]


def build_region_url(
    region: str,
    *,
    base_url: str = BASE_URL,
    year: str = ALL_YEARS,
    rank: str = RANK_MOST_RECENT,
) -> str:
    """
    Build the bird-list URL for a region.

    The region code (``US-NY-109``, ``US-NY``, ...) and query values are
    passed through as given.

    Args:
        region: eBird region code.
        base_url: Site root, without trailing slash.
        year: ``yr`` query value (``"all"`` for every year).
        rank: ``rank`` query value (``"mrec"`` = most recent checklist).
    """
    query = urlencode({"yr": year, "rank": rank})
    return f"{base_url.rstrip('/')}/region/{region}?{query}"


def fetch_region_page(url: str) -> str:
    """
    Download a region page and return its markup.

    Transient failures are retried by the shared session; whatever is still
    failing after that is raised as ``FetchError``.

    Raises:
        FetchError: Connection failure, timeout, or non-2xx response.
    """
    try:
        resp = session.get(url)
        resp.raise_for_status()
    except requests.RequestException as exc:
        raise FetchError(url, str(exc)) from exc
    return resp.text
