"""
Prefect flow for building a seasonal sightings report for one region.

fetch region page → extract records → per-year season totals → HTML report

Run locally:
    python -m bird_trends.flows.report

Run with Prefect dashboard:
    prefect server start &
    python -m bird_trends.flows.report
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from prefect import flow, task

from bird_trends.analysis.aggregate import (
    SeasonYearAggregate,
    aggregate_year,
    aggregates_to_csv,
    label_years,
)
from bird_trends.analysis.species import summarize_species
from bird_trends.datasources.ebird import (
    SightingRecord,
    build_region_url,
    extract_records,
    fetch_region_page,
)
from bird_trends.datasources.ebird.client import BASE_URL
from bird_trends.renderers.report import build_report_html

SITE_DIR = Path("site")


@task(name="fetch-region-page", retries=2, retry_delay_seconds=5)
def fetch_page(url: str) -> str:
    """Fetch raw region page markup."""
    return fetch_region_page(url)


@task(name="extract-records")
def extract(markup: str) -> list[SightingRecord]:
    """Parse sighting records out of the page markup."""
    return extract_records(markup)


@task(name="aggregate-year")
def aggregate(
    records: list[SightingRecord],
    year: int,
    species_code: str | None = None,
) -> SeasonYearAggregate:
    """Season totals for one label year."""
    return aggregate_year(records, year, species_code)


@task(name="build-report")
def build_report(
    region: str,
    records: list[SightingRecord],
    aggregates: list[SeasonYearAggregate],
    smoothing: str = "loess",
    species_code: str | None = None,
) -> str:
    """Render the report page."""
    return build_report_html(
        region,
        aggregates,
        summarize_species(records),
        smoothing=smoothing,
        species_code=species_code,
    )


@task(name="write-report")
def write_report(html: str, site_dir: Path = SITE_DIR) -> Path:
    """Write the report to ``site_dir/index.html``."""
    site_dir.mkdir(parents=True, exist_ok=True)
    output_path = site_dir / "index.html"
    with output_path.open("w") as f:
        f.write(html)
    return output_path


@task(name="write-csv")
def write_csv(aggregates: list[SeasonYearAggregate], csv_path: Path) -> Path:
    """Export the season totals table as CSV."""
    csv_path.parent.mkdir(parents=True, exist_ok=True)
    with csv_path.open("w", newline="") as f:
        f.write(aggregates_to_csv(aggregates))
    return csv_path


@flow(name="region-report", log_prints=True)
def region_report(
    region: str,
    start_year: int,
    end_year: int,
    species_code: str | None = None,
    smoothing: str = "loess",
    site_dir: Path = SITE_DIR,
    csv_path: Path | None = None,
    base_url: str = BASE_URL,
) -> dict[str, Any]:
    """
    Fetch, aggregate and render a seasonal sightings report.

    Years are validated before anything is fetched. Each year's totals are
    an independent task reading the same record list.
    """
    years = label_years(start_year, end_year)

    url = build_region_url(region, base_url=base_url)
    print(f"Fetching region page {url}...")
    markup = fetch_page(url)

    records = extract(markup)
    species_count = len({r.species_code for r in records})
    print(f"Extracted {len(records)} sightings of {species_count} species.")

    aggregates = [aggregate(records, year, species_code) for year in years]
    print(f"Aggregated season totals for {len(years)} years ({start_year}-{end_year}).")

    html = build_report(region, records, aggregates, smoothing, species_code)
    output_path = write_report(html, site_dir)
    print(f"Report written: {output_path}")

    result: dict[str, Any] = {
        "region": region,
        "records": len(records),
        "species": species_count,
        "years": len(years),
        "output": str(output_path),
    }
    if csv_path is not None:
        result["csv"] = str(write_csv(aggregates, csv_path))
        print(f"Season totals exported: {csv_path}")
    return result


if __name__ == "__main__":
    from bird_trends.config import get_settings

    settings = get_settings()
    result = region_report(
        settings.region,
        settings.start_year,
        settings.end_year,
        smoothing=settings.smoothing,
        site_dir=settings.site_dir,
        base_url=settings.base_url,
    )
    print(f"Flow complete: {result}")
