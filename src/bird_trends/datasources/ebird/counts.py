"""Count cell normalization.

eBird lets observers report a species as present without a number; the
listing shows ``X`` in that case. We read it as 1, the only count we know
for certain. This is the one place that rule lives.
"""

from __future__ import annotations

import re

from bird_trends.exceptions import InvalidCountError

#: Marker for "one or more individuals, exact number not recorded".
PRESENCE_MARKER = "X"

# Plain digits, or digits grouped with thousands separators ("1,200").
_COUNT_RE = re.compile(r"^(?:\d+|\d{1,3}(?:,\d{3})+)$")


def normalize_count(text: str) -> int:
    """Convert count cell text into a non-negative integer.

    Args:
        text: Raw cell text, e.g. ``"42"``, ``" 1,200 "`` or ``"X"``.

    Returns:
        The count; ``1`` for the presence marker.

    Raises:
        InvalidCountError: For empty, negative, fractional or non-numeric text.
    """
    value = text.strip()
    if value == PRESENCE_MARKER:
        return 1
    if not _COUNT_RE.match(value):
        raise InvalidCountError(text)
    return int(value.replace(",", ""))
