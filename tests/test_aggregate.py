"""Tests for season-year aggregation and CSV export."""

from __future__ import annotations

import csv
import io
from datetime import date

import pytest

from bird_trends.analysis.aggregate import (
    AGGREGATE_COLUMNS,
    SeasonYearAggregate,
    aggregate_season_year,
    aggregate_seasons,
    aggregate_year,
    aggregates_to_csv,
    aggregates_to_rows,
    label_years,
)
from bird_trends.analysis.seasons import SEASON_ORDER, Season
from bird_trends.datasources.ebird.extract import extract_records
from bird_trends.datasources.ebird.models import SightingRecord
from bird_trends.exceptions import InvalidArgumentError


def rec(code: str, count: int, observed_on: date, name: str | None = None) -> SightingRecord:
    return SightingRecord(code, name or code.title(), count, observed_on)


# Spans label years 2004-2006 with records on season boundaries.
RECORDS = [
    rec("amecro", 3, date(2004, 12, 15)),  # winter 2004
    rec("amecro", 2, date(2005, 2, 28)),  # winter 2004
    rec("speciesa", 1, date(2005, 3, 1)),  # spring 2005, first day
    rec("speciesa", 4, date(2005, 5, 31)),  # spring 2005, last day
    rec("blujay", 6, date(2005, 6, 1)),  # breeding 2005
    rec("blujay", 5, date(2005, 8, 1)),  # fall 2005
    rec("norcar", 10, date(2005, 11, 30)),  # fall 2005
    rec("speciesb", 7, date(2006, 1, 10)),  # winter 2005
    rec("amecro", 1, date(2006, 3, 1)),  # spring 2006
]


class TestAggregateSeasonYear:
    def test_spring(self) -> None:
        """Both boundary days of spring 2005 count."""
        assert aggregate_season_year(RECORDS, "spring", 2005) == 5

    def test_winter_spans_calendar_years(self) -> None:
        """Winter totals include the following January and February."""
        assert aggregate_season_year(RECORDS, Season.WINTER, 2005) == 7
        assert aggregate_season_year(RECORDS, Season.WINTER, 2004) == 5

    def test_boundary_day_counted_once(self) -> None:
        """2006-03-01 is spring 2006, not winter 2005 nor all 2005."""
        assert aggregate_season_year(RECORDS, "spring", 2006) == 1
        assert aggregate_season_year(RECORDS, "all", 2005) == 33

    def test_species_filter(self) -> None:
        assert aggregate_season_year(RECORDS, "winter", 2004, species_code="amecro") == 5
        assert aggregate_season_year(RECORDS, "winter", 2004, species_code="blujay") == 0

    def test_no_matching_records(self) -> None:
        """A year with no records totals zero."""
        assert aggregate_season_year(RECORDS, "fall", 1990) == 0

    def test_propagates_classifier_errors(self) -> None:
        with pytest.raises(InvalidArgumentError):
            aggregate_season_year(RECORDS, "summer", 2005)
        with pytest.raises(InvalidArgumentError):
            aggregate_season_year(RECORDS, "spring", 1950)


class TestAggregateYear:
    def test_row_for_2005(self) -> None:
        agg = aggregate_year(RECORDS, 2005)
        assert agg == SeasonYearAggregate(
            year=2005, spring=5, breeding=6, fall=15, winter=7, all_year=33
        )

    def test_all_overlaps_named_seasons_by_design(self) -> None:
        """Each record counts under its season and again under 'all'."""
        agg = aggregate_year(RECORDS, 2005)
        named = agg.spring + agg.breeding + agg.fall + agg.winter
        assert agg.all_year == named

    @pytest.mark.parametrize(
        ("record", "season"),
        [
            (rec("speciesa", 4, date(2005, 5, 31)), Season.SPRING),
            (rec("blujay", 6, date(2005, 6, 1)), Season.BREEDING),
            (rec("norcar", 10, date(2005, 11, 30)), Season.FALL),
            (rec("speciesb", 7, date(2006, 1, 10)), Season.WINTER),
        ],
    )
    def test_record_counted_twice(self, record: SightingRecord, season: Season) -> None:
        """A record's named season plus 'all' totals twice its count."""
        named = aggregate_season_year([record], season, 2005)
        whole_year = aggregate_season_year([record], Season.ALL, 2005)
        assert named + whole_year == 2 * record.count

    def test_accepts_one_shot_iterable(self) -> None:
        agg = aggregate_year(iter(RECORDS), 2005)
        assert agg.all_year == 33


class TestAggregateSeasons:
    def test_one_row_per_year_ascending(self) -> None:
        """Rows cover the inclusive range in year order."""
        rows = aggregate_seasons(RECORDS, 2004, 2006)
        assert [r.year for r in rows] == [2004, 2005, 2006]

    def test_single_year_range(self) -> None:
        rows = aggregate_seasons(RECORDS, 2005, 2005)
        assert len(rows) == 1
        assert rows[0].winter == 7

    def test_empty_years_are_zero(self) -> None:
        """Years with no sightings still get a row."""
        rows = aggregate_seasons(RECORDS, 1998, 1999)
        assert all(r.count(s) == 0 for r in rows for s in SEASON_ORDER)

    def test_idempotent(self) -> None:
        """Same input, same rows."""
        first = aggregate_seasons(RECORDS, 2003, 2007)
        second = aggregate_seasons(RECORDS, 2003, 2007)
        assert first == second

    def test_input_not_modified(self) -> None:
        """The record list is read, never changed."""
        snapshot = list(RECORDS)
        aggregate_seasons(RECORDS, 2003, 2007)
        assert snapshot == RECORDS

    def test_counts_non_negative(self) -> None:
        rows = aggregate_seasons(RECORDS, 1970, 2010)
        assert all(r.count(s) >= 0 for r in rows for s in SEASON_ORDER)

    def test_all_never_less_than_any_named_season(self) -> None:
        """Named seasons are contained in the whole season-year."""
        for r in aggregate_seasons(RECORDS, 2003, 2007):
            assert all(r.all_year >= r.count(s) for s in SEASON_ORDER)

    def test_reversed_range(self) -> None:
        """start_year after end_year is rejected."""
        with pytest.raises(InvalidArgumentError, match="after"):
            aggregate_seasons(RECORDS, 2006, 2004)

    def test_year_before_1970(self) -> None:
        with pytest.raises(InvalidArgumentError):
            aggregate_seasons(RECORDS, 1969, 2000)

    def test_species_filter(self) -> None:
        rows = aggregate_seasons(RECORDS, 2004, 2005, species_code="amecro")
        assert [r.winter for r in rows] == [5, 0]


class TestEndToEnd:
    """Markup → records → season totals."""

    MARKUP = (
        '<table class="sightings">'
        '<tr class="has-details"><td class="species-name"><a data-species-code="speciesa">'
        'Species A</a></td><td class="count">X</td><td class="date">15-Mar-2005</td></tr>'
        '<tr class="has-details"><td class="species-name"><a data-species-code="speciesb">'
        'Species B</a></td><td class="count">7</td><td class="date">10-Jan-2006</td></tr>'
        '<tr class="has-details"><td class="species-unnamed">Duck sp.</td>'
        '<td class="count">2</td><td class="date">11-Jan-2006</td></tr>'
        "</table>"
    )

    def test_winter_and_spring_2005(self) -> None:
        """Three-row page: winter 2005 is 7, spring 2005 is 1."""
        records = extract_records(self.MARKUP)
        assert len(records) == 2
        assert aggregate_season_year(records, "winter", 2005) == 7
        assert aggregate_season_year(records, "spring", 2005) == 1

    def test_full_row(self) -> None:
        """Exported row for 2005 from the three-row page."""
        (row,) = aggregate_seasons(extract_records(self.MARKUP), 2005, 2005)
        assert row.as_row() == {
            "year": 2005,
            "spring": 1,
            "breeding": 0,
            "fall": 0,
            "winter": 7,
            "all": 8,
        }


class TestSeasonYearAggregate:
    def test_count_by_name(self) -> None:
        agg = SeasonYearAggregate(year=2000, spring=1, breeding=2, fall=3, winter=4, all_year=10)
        assert agg.count("all") == 10
        assert agg.count(Season.FALL) == 3

    def test_count_unknown_season(self) -> None:
        with pytest.raises(InvalidArgumentError):
            SeasonYearAggregate(year=2000).count("summer")

    def test_row_column_order(self) -> None:
        """Row keys follow the export column order."""
        row = SeasonYearAggregate(year=2000, all_year=1).as_row()
        assert tuple(row) == AGGREGATE_COLUMNS


class TestExport:
    def test_columns_contract(self) -> None:
        assert AGGREGATE_COLUMNS == ("year", "spring", "breeding", "fall", "winter", "all")

    def test_rows(self) -> None:
        rows = aggregates_to_rows(aggregate_seasons(RECORDS, 2004, 2005))
        assert [list(r) for r in rows] == [list(AGGREGATE_COLUMNS)] * 2
        assert rows[1]["fall"] == 15

    def test_csv(self) -> None:
        """CSV has a header and one line per year."""
        text = aggregates_to_csv(aggregate_seasons(RECORDS, 2004, 2005))
        lines = text.splitlines()
        assert lines[0] == "year,spring,breeding,fall,winter,all"
        assert lines[2] == "2005,5,6,15,7,33"
        parsed = list(csv.DictReader(io.StringIO(text)))
        assert parsed[0]["winter"] == "5"

    def test_csv_empty(self) -> None:
        assert aggregates_to_csv([]) == "year,spring,breeding,fall,winter,all\n"


class TestLabelYears:
    def test_inclusive(self) -> None:
        assert label_years(1999, 2001) == [1999, 2000, 2001]

    def test_invalid(self) -> None:
        with pytest.raises(InvalidArgumentError):
            label_years(2001, 1999)
