"""Migration seasons and their season-year date windows.

A season-year is labeled by the year the season *starts* in. Winter and the
whole-year ``all`` bucket start in one calendar year and finish in the next:

    winter 1999 = [1999-12-01, 2000-03-01)
    all 1999    = [1999-03-01, 2000-03-01)

End dates are always exclusive so a sighting on a boundary day lands in
exactly one of two adjacent windows.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import StrEnum

from bird_trends.exceptions import InvalidArgumentError

MIN_YEAR = 1970


class Season(StrEnum):
    """Season buckets used for trend aggregation."""

    SPRING = "spring"
    BREEDING = "breeding"
    FALL = "fall"
    WINTER = "winter"
    ALL = "all"


@dataclass(frozen=True)
class SeasonWindow:
    """Month span of a season. ``end_month`` is exclusive."""

    start_month: int
    end_month: int
    crosses_year: bool


SEASON_WINDOWS: dict[Season, SeasonWindow] = {
    Season.SPRING: SeasonWindow(start_month=3, end_month=6, crosses_year=False),
    Season.BREEDING: SeasonWindow(start_month=6, end_month=8, crosses_year=False),
    Season.FALL: SeasonWindow(start_month=8, end_month=12, crosses_year=False),
    Season.WINTER: SeasonWindow(start_month=12, end_month=3, crosses_year=True),
    Season.ALL: SeasonWindow(start_month=3, end_month=3, crosses_year=True),
}

#: Canonical order for table columns and trend series.
SEASON_ORDER: tuple[Season, ...] = (
    Season.SPRING,
    Season.BREEDING,
    Season.FALL,
    Season.WINTER,
    Season.ALL,
)


def parse_season(season: Season | str) -> Season:
    """Coerce a season name to ``Season``.

    Raises:
        InvalidArgumentError: If the name isn't one of the five seasons.
    """
    if isinstance(season, Season):
        return season
    try:
        return Season(season)
    except ValueError:
        valid = ", ".join(s.value for s in SEASON_ORDER)
        msg = f"Unknown season {season!r} (expected one of: {valid})"
        raise InvalidArgumentError(msg) from None


def validate_year(year: int) -> int:
    """Check a label year is an int no earlier than ``MIN_YEAR``."""
    if isinstance(year, bool) or not isinstance(year, int):
        msg = f"Year must be an integer, got {year!r}"
        raise InvalidArgumentError(msg)
    if year < MIN_YEAR:
        msg = f"Year {year} is before {MIN_YEAR}"
        raise InvalidArgumentError(msg)
    return year


def season_date_range(season: Season | str, year: int) -> tuple[date, date]:
    """
    Return the half-open ``[start, end)`` date range of a season-year.

    Args:
        season: Season or season name (``"spring"``, ``"winter"``, ...).
        year: Label year (the year the season starts in), >= 1970.

    Returns:
        Tuple of (start date, exclusive end date).

    Raises:
        InvalidArgumentError: Unknown season or year before 1970.
    """
    window = SEASON_WINDOWS[parse_season(season)]
    year = validate_year(year)
    end_year = year + 1 if window.crosses_year else year
    return date(year, window.start_month, 1), date(end_year, window.end_month, 1)


def in_season(observed_on: date, season: Season | str, year: int) -> bool:
    """True if a date falls inside the season-year window."""
    start, end = season_date_range(season, year)
    return start <= observed_on < end
