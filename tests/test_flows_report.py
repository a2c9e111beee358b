"""
Tests for the region report flow.
"""

from __future__ import annotations

from datetime import date
from typing import TYPE_CHECKING
from unittest.mock import Mock, patch

import pytest

from bird_trends.datasources.ebird.models import SightingRecord
from bird_trends.exceptions import FetchError, InvalidArgumentError, ParseError
from bird_trends.flows import report

if TYPE_CHECKING:
    from pathlib import Path

PAGE = (
    "<html><body>"
    '<table class="sightings">'
    '<tr class="has-details"><td class="species-name"><a data-species-code="speciesa">'
    'Species A</a></td><td class="count">X</td><td class="date">15-Mar-2005</td></tr>'
    '<tr class="has-details"><td class="species-name"><a data-species-code="speciesb">'
    'Species B</a></td><td class="count">7</td><td class="date">10-Jan-2006</td></tr>'
    '<tr class="has-details"><td>Gull sp.</td>'
    '<td class="count">3</td><td class="date">11-Jan-2006</td></tr>'
    "</table></body></html>"
)


class TestFetchPage:
    @patch("bird_trends.flows.report.fetch_region_page")
    def test_returns_markup(self, mock_fetch: Mock) -> None:
        """Task returns the fetched page unchanged."""
        mock_fetch.return_value = PAGE
        assert report.fetch_page.fn("https://ebird.org/region/US-NY") == PAGE
        mock_fetch.assert_called_once_with("https://ebird.org/region/US-NY")

    @patch("bird_trends.flows.report.fetch_region_page")
    def test_fetch_error_propagates(self, mock_fetch: Mock) -> None:
        """FetchError is not swallowed by the task."""
        mock_fetch.side_effect = FetchError("https://ebird.org/region/US-NY", "503")
        with pytest.raises(FetchError):
            report.fetch_page.fn("https://ebird.org/region/US-NY")


class TestTasks:
    def test_extract(self) -> None:
        """Unnamed row dropped, two records kept."""
        records = report.extract.fn(PAGE)
        assert [r.species_code for r in records] == ["speciesa", "speciesb"]

    def test_aggregate(self) -> None:
        """One aggregate task computes one year's row."""
        records = [SightingRecord("speciesb", "Species B", 7, date(2006, 1, 10))]
        agg = report.aggregate.fn(records, 2005)
        assert agg.winter == 7
        assert agg.all_year == 7

    def test_write_report(self, tmp_path: Path) -> None:
        """Report lands as index.html in the site dir."""
        output = report.write_report.fn("<html></html>", tmp_path / "site")
        assert output == tmp_path / "site" / "index.html"
        assert output.read_text() == "<html></html>"

    def test_write_csv(self, tmp_path: Path) -> None:
        """CSV export keeps the column contract."""
        records = report.extract.fn(PAGE)
        aggs = [report.aggregate.fn(records, 2005)]
        path = report.write_csv.fn(aggs, tmp_path / "out" / "totals.csv")
        assert path.read_text().splitlines() == [
            "year,spring,breeding,fall,winter,all",
            "2005,1,0,0,7,8",
        ]


class TestRegionReport:
    @patch("bird_trends.flows.report.fetch_region_page")
    def test_region_report(self, mock_fetch: Mock, tmp_path: Path) -> None:
        """Full flow with a mocked fetch writes the page and returns a summary."""
        mock_fetch.return_value = PAGE
        site_dir = tmp_path / "site"
        csv_path = tmp_path / "totals.csv"

        result = report.region_report(
            "US-NY-109",
            2004,
            2006,
            site_dir=site_dir,
            csv_path=csv_path,
        )

        mock_fetch.assert_called_once_with("https://ebird.org/region/US-NY-109?yr=all&rank=mrec")
        assert result["records"] == 2
        assert result["species"] == 2
        assert result["years"] == 3
        assert result["output"] == str(site_dir / "index.html")
        html = (site_dir / "index.html").read_text()
        assert "US-NY-109" in html
        assert "Species A" in html
        lines = csv_path.read_text().splitlines()
        assert lines[2] == "2005,1,0,0,7,8"

    @patch("bird_trends.flows.report.fetch_region_page")
    def test_invalid_years_fail_before_fetch(self, mock_fetch: Mock, tmp_path: Path) -> None:
        """A reversed range never touches the network."""
        with pytest.raises(InvalidArgumentError):
            report.region_report("US-NY", 2010, 2000, site_dir=tmp_path)
        mock_fetch.assert_not_called()

    @patch("bird_trends.flows.report.fetch_region_page")
    def test_parse_error_aborts(self, mock_fetch: Mock, tmp_path: Path) -> None:
        """Unexpected layout fails the run with no output written."""
        mock_fetch.return_value = "<html><body>maintenance</body></html>"
        with pytest.raises(ParseError):
            report.region_report("US-NY", 2000, 2001, site_dir=tmp_path / "site")
        assert not (tmp_path / "site" / "index.html").exists()
