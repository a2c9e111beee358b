"""Seasonal trend line chart (inline SVG).

One line per season over the report's year range. Lines are drawn through
LOESS-smoothed values by default (locally weighted linear regression, fine
for the few dozen points a year range produces); raw yearly totals are
drawn as dots underneath.
"""

from __future__ import annotations

import math
from collections.abc import Callable, Sequence

from bird_trends.analysis.seasons import Season
from bird_trends.analysis.trends import TrendPoint, series_by_season
from bird_trends.exceptions import InvalidArgumentError
from bird_trends.renderers import render_template

SMOOTHING_METHODS = ("loess", "none")
DEFAULT_SPAN = 0.75

SEASON_COLORS: dict[Season, str] = {
    Season.SPRING: "#3cb44b",
    Season.BREEDING: "#f58231",
    Season.FALL: "#9a6324",
    Season.WINTER: "#4363d8",
    Season.ALL: "#555555",
}


def build_trend_chart_html(
    points: Sequence[TrendPoint],
    smoothing: str = "loess",
    *,
    title: str = "",
) -> str:
    """Build the seasonal trend SVG chart.

    Args:
        points: Trend points, any order within a season.
        smoothing: ``"loess"`` or ``"none"``.
        title: Optional caption above the chart.

    Returns:
        Rendered HTML string with inline SVG chart.

    Raises:
        InvalidArgumentError: Unknown smoothing method.
    """
    if smoothing not in SMOOTHING_METHODS:
        expected = ", ".join(SMOOTHING_METHODS)
        msg = f"Unknown smoothing method {smoothing!r} (expected one of: {expected})"
        raise InvalidArgumentError(msg)
    if not points:
        return "<p>No trend data available.</p>"

    svg_width = 760
    svg_height = 340
    margin_left = 55
    margin_top = 25
    margin_right = 20
    margin_bottom = 30
    plot_right = svg_width - margin_right
    plot_bottom = svg_height - margin_bottom
    plot_width = plot_right - margin_left
    plot_height = plot_bottom - margin_top

    years = sorted({p.year for p in points})
    first_year, last_year = years[0], years[-1]
    year_span = max(1, last_year - first_year)
    y_max = _round_up_nice(max(p.count for p in points) * 1.1)

    def x_for_year(year: float) -> float:
        return margin_left + (year - first_year) / year_span * plot_width

    def y_for_count(count: float) -> float:
        return plot_bottom - (count / y_max) * plot_height

    n_ticks = 5
    y_ticks = []
    for i in range(n_ticks + 1):
        val = y_max * i / n_ticks
        y_ticks.append({"y": round(y_for_count(val), 1), "label": f"{val:.0f}"})

    x_labels = [
        {"x": round(x_for_year(year), 1), "text": str(year)}
        for year in _year_ticks(first_year, last_year)
    ]

    series = []
    for season, season_points in series_by_season(points).items():
        if not season_points:
            continue
        ordered = sorted(season_points, key=lambda p: p.year)
        series.append(
            _build_series(season, ordered, smoothing, x_for_year, y_for_count),
        )

    return render_template(
        "trend_chart.html.j2",
        title=title,
        smoothing=smoothing,
        svg_width=svg_width,
        svg_height=svg_height,
        margin_left=margin_left,
        margin_top=margin_top,
        plot_right=plot_right,
        plot_bottom=plot_bottom,
        y_ticks=y_ticks,
        x_labels=x_labels,
        series=series,
    )


def _build_series(
    season: Season,
    points: list[TrendPoint],
    smoothing: str,
    x_fn: Callable[[float], float],
    y_fn: Callable[[float], float],
) -> dict[str, object]:
    """Polyline points and raw dots for one season."""
    xs = [float(p.year) for p in points]
    ys = [float(p.count) for p in points]
    fitted = loess_smooth(xs, ys) if smoothing == "loess" else ys
    # Smoothed counts can dip below zero between sparse years
    line = " ".join(
        f"{x_fn(x):.1f},{y_fn(max(0.0, y)):.1f}" for x, y in zip(xs, fitted, strict=True)
    )
    dots = [
        {"cx": round(x_fn(x), 1), "cy": round(y_fn(y), 1)} for x, y in zip(xs, ys, strict=True)
    ]
    return {
        "label": season.value,
        "color": SEASON_COLORS[season],
        "points": line,
        "dots": dots,
        "dashed": season is Season.ALL,
    }


def loess_smooth(
    xs: Sequence[float], ys: Sequence[float], span: float = DEFAULT_SPAN
) -> list[float]:
    """Locally weighted linear regression at each input x.

    Each fit uses the ``ceil(span * n)`` nearest neighbors with tricube
    weights. Fewer than three points are returned unchanged.

    Args:
        xs: X values (need not be sorted).
        ys: Y values, same length as ``xs``.
        span: Fraction of points in each local fit (0 < span <= 1).
    """
    n = len(xs)
    if n != len(ys):
        msg = f"xs and ys differ in length ({n} != {len(ys)})"
        raise InvalidArgumentError(msg)
    if not 0 < span <= 1:
        msg = f"span must be in (0, 1], got {span}"
        raise InvalidArgumentError(msg)
    if n < 3:
        return [float(y) for y in ys]

    k = min(n, max(3, math.ceil(span * n)))
    fitted: list[float] = []
    for x0 in xs:
        distances = sorted(abs(x - x0) for x in xs)
        h = distances[k - 1] or 1.0
        # Widen slightly so the k-th neighbor keeps a nonzero weight
        h *= 1.001
        weights = [_tricube(abs(x - x0) / h) for x in xs]
        fitted.append(_weighted_linear_fit(xs, ys, weights, x0))
    return fitted


def _tricube(u: float) -> float:
    return (1 - u**3) ** 3 if u < 1 else 0.0


def _weighted_linear_fit(
    xs: Sequence[float], ys: Sequence[float], weights: Sequence[float], x0: float
) -> float:
    """Evaluate a weighted least-squares line at x0."""
    total_w = sum(weights)
    x_bar = sum(w * x for w, x in zip(weights, xs, strict=True)) / total_w
    y_bar = sum(w * y for w, y in zip(weights, ys, strict=True)) / total_w
    sxx = sum(w * (x - x_bar) ** 2 for w, x in zip(weights, xs, strict=True))
    if sxx == 0:
        return y_bar
    sxy = sum(w * (x - x_bar) * (y - y_bar) for w, x, y in zip(weights, xs, ys, strict=True))
    return y_bar + (sxy / sxx) * (x0 - x_bar)


def _year_ticks(first_year: int, last_year: int, max_labels: int = 12) -> list[int]:
    """Evenly stepped year labels, at most ``max_labels`` of them."""
    step = max(1, math.ceil((last_year - first_year + 1) / max_labels))
    return list(range(first_year, last_year + 1, step))


def _round_up_nice(value: float) -> float:
    """Round a value up to 1, 2 or 5 times a power of ten for axis scaling."""
    if value <= 0:
        return 10.0
    magnitude = 10 ** math.floor(math.log10(value))
    for factor in (1, 2, 5, 10):
        if factor * magnitude >= value:
            return float(factor * magnitude)
    return float(10 * magnitude)
