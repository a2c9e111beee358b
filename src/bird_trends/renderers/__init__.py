"""Pure rendering functions: structured data -> HTML strings.

All renderers follow the same pattern:
  - Input: dataclasses / tuples from analysis/
  - Output: str (HTML fragment, not a full page)
  - No side effects, no I/O, no Prefect decorators

Used by flows/report.py which assembles the page.

Public API:
  - tables: build_season_table_html, build_species_table_html
  - trend_chart: build_trend_chart_html, loess_smooth, SMOOTHING_METHODS
  - report: build_report_html (full page from base.html.j2)

Templates live in ``templates/*.html.j2``; fragments have no <html>/<body>.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import jinja2

# Shared Jinja2 environment for all renderers
_TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "templates"
_jinja_env = jinja2.Environment(
    loader=jinja2.FileSystemLoader(str(_TEMPLATE_DIR)),
    autoescape=True,
)


def render_template(template_name: str, **kwargs: Any) -> str:
    """Render a Jinja2 template by name."""
    return _jinja_env.get_template(template_name).render(**kwargs)
