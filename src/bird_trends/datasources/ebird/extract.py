"""Region page extraction: sightings table markup -> SightingRecord list.

The page layout is described by a ``PageSchema`` of CSS selectors instead of
positional lookups scattered through the code. If the layout changes, the
extractor fails loudly with one ``ParseError`` rather than quietly producing
rows full of empty strings.

Expected shape (only the parts we read)::

    <table class="sightings">
      <tr class="has-details">
        <td class="species-name"><a data-species-code="amecro">American Crow</a></td>
        <td class="count">12</td>
        <td class="date">15 Mar 2005</td>
      </tr>
      ...
    </table>
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import TYPE_CHECKING

from bs4 import BeautifulSoup

from bird_trends.datasources.ebird.counts import normalize_count
from bird_trends.datasources.ebird.models import SightingRecord
from bird_trends.exceptions import ParseError

if TYPE_CHECKING:
    from bs4 import Tag

# =============================================================================
# Page schema
# =============================================================================


@dataclass(frozen=True)
class PageSchema:
    """Node paths for the parts of a region page we extract."""

    table: str
    row: str
    species_cell: str
    species_anchor: str
    code_attribute: str
    count_cell: str
    date_cell: str
    date_formats: tuple[str, ...]


REGION_PAGE_SCHEMA = PageSchema(
    table="table.sightings",
    row="tr.has-details",
    species_cell="td.species-name",
    species_anchor="a",
    code_attribute="data-species-code",
    count_cell="td.count",
    date_cell="td.date",
    date_formats=("%d %b %Y", "%d-%b-%Y"),
)


# =============================================================================
# Extraction
# =============================================================================


def extract_records(
    markup: str,
    schema: PageSchema = REGION_PAGE_SCHEMA,
) -> list[SightingRecord]:
    """
    Parse region page markup into sighting records, in page order.

    Rows without a species-name cell are skipped (unnamed taxa such as
    spuhs and hybrids don't carry one). Rows whose date can't be parsed are
    skipped too, since they can't be placed in any season. Counts are
    normalized before the date is read, so bad count text always raises.

    Args:
        markup: Raw HTML of the region page.
        schema: Selectors describing the page layout.

    Returns:
        List of SightingRecord, one per retained row.

    Raises:
        ParseError: The sightings table is missing, a species-name cell has
            no named link, or a named row lacks its species code, count cell
            or date cell.
        InvalidCountError: A count cell holds unrecognized text.
    """
    soup = BeautifulSoup(markup, "html.parser")
    table = soup.select_one(schema.table)
    if table is None:
        msg = f"No sightings table matching {schema.table!r} in page"
        raise ParseError(msg)

    records: list[SightingRecord] = []
    for row_number, row in enumerate(table.select(schema.row), start=1):
        record = _parse_row(row, schema, row_number)
        if record is not None:
            records.append(record)
    return records


def _parse_row(row: Tag, schema: PageSchema, row_number: int) -> SightingRecord | None:
    """Parse one detail row. Returns None for rows that are skipped."""
    species_cell = row.select_one(schema.species_cell)
    if species_cell is None:
        return None

    anchor = species_cell.select_one(schema.species_anchor)
    if anchor is None:
        msg = f"Row {row_number}: {schema.species_cell!r} cell has no named link"
        raise ParseError(msg)
    name = anchor.get_text(" ", strip=True)
    if not name:
        msg = f"Row {row_number}: empty species name in {schema.species_cell!r} cell"
        raise ParseError(msg)

    code = anchor.get(schema.code_attribute)
    if not isinstance(code, str) or not code.strip():
        msg = f"Row {row_number} ({name}): missing {schema.code_attribute!r} attribute"
        raise ParseError(msg)

    count_cell = row.select_one(schema.count_cell)
    date_cell = row.select_one(schema.date_cell)
    if count_cell is None or date_cell is None:
        missing = schema.count_cell if count_cell is None else schema.date_cell
        msg = f"Row {row_number} ({name}): no cell matching {missing!r}"
        raise ParseError(msg)

    count = normalize_count(count_cell.get_text(strip=True))
    observed_on = parse_observation_date(date_cell.get_text(" ", strip=True), schema.date_formats)
    if observed_on is None:
        return None

    return SightingRecord(
        species_code=code.strip(),
        species_name=name,
        count=count,
        observed_on=observed_on,
    )


def parse_observation_date(text: str, formats: tuple[str, ...]) -> date | None:
    """Parse a date cell using the first matching format, or None."""
    value = " ".join(text.split())
    if not value:
        return None
    for fmt in formats:
        try:
            return datetime.strptime(value, fmt).date()
        except ValueError:
            continue
    return None
