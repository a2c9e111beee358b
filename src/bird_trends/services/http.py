"""
HTTP session for fetching eBird region pages.

Region listings are served as HTML and can take a while to render for busy
counties. The session asks for HTML, waits up to a minute per request
and retries rate limiting (429) and gateway errors with backoff.
``fetch_region_page`` is the only caller; it turns whatever still fails
into a ``FetchError``.

Usage::

    from bird_trends.services.http import session

    resp = session.get("https://ebird.org/region/US-NY-109?yr=all&rank=mrec")
    resp.raise_for_status()
"""

from __future__ import annotations

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

#: Retry rate limiting and gateway errors from the region page.
DEFAULT_RETRY = Retry(
    total=3,
    backoff_factor=2,  # 0s, 2s, 4s between retries
    status_forcelist=[429, 502, 503, 504],
    allowed_methods=["GET", "HEAD"],
    raise_on_status=False,  # let resp.raise_for_status() handle it
)

DEFAULT_TIMEOUT = 60  # seconds

USER_AGENT = "bird-trends/0.1 (seasonal sighting trend reports)"


def create_session(
    retry: Retry | None = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> requests.Session:
    """
    Build a ``requests.Session`` with retry adapter mounted.

    Args:
        retry: Custom retry strategy (defaults to ``DEFAULT_RETRY``).
        timeout: Default timeout applied to every request.
    """
    s = requests.Session()
    adapter = HTTPAdapter(max_retries=retry or DEFAULT_RETRY)
    s.mount("https://", adapter)
    s.mount("http://", adapter)
    s.headers["User-Agent"] = USER_AGENT
    s.headers["Accept"] = "text/html,application/xhtml+xml"

    _original_send = s.send

    def _send_with_timeout(
        prepared: requests.PreparedRequest, **kwargs: object
    ) -> requests.Response:
        kwargs.setdefault("timeout", timeout)
        return _original_send(prepared, **kwargs)  # type: ignore[arg-type]

    s.send = _send_with_timeout  # type: ignore[method-assign]
    return s


#: Shared by every region page fetch.
session: requests.Session = create_session()
