"""Error taxonomy for the region report pipeline.

None of these are retried inside the library; the caller decides whether to
re-fetch or abort.
"""

from __future__ import annotations


class BirdTrendsError(Exception):
    """Base class for all bird-trends errors."""


class FetchError(BirdTrendsError):
    """The region page could not be retrieved."""

    def __init__(self, url: str, reason: str) -> None:
        self.url = url
        self.reason = reason
        super().__init__(f"Failed to fetch {url}: {reason}")


class ParseError(BirdTrendsError):
    """The page markup does not have the expected sightings table structure."""


class InvalidCountError(BirdTrendsError, ValueError):
    """A count cell holds text that is neither a number nor the presence marker."""

    def __init__(self, text: str) -> None:
        self.text = text
        super().__init__(f"Unrecognized count value: {text!r}")


class InvalidArgumentError(BirdTrendsError, ValueError):
    """A caller passed an unknown season, an out-of-range year, or a bad option."""
