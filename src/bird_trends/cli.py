"""
Command-line interface for the application.

This module provides the main entry point for the CLI.
"""

from __future__ import annotations

import argparse
import functools
import http.server
import sys
from pathlib import Path

from bird_trends import __version__
from bird_trends.analysis.seasons import SEASON_ORDER, season_date_range
from bird_trends.config import get_settings
from bird_trends.exceptions import BirdTrendsError
from bird_trends.flows.report import region_report
from bird_trends.renderers.trend_chart import SMOOTHING_METHODS


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="bird-trends",
        description="Seasonal bird-sighting trends for an eBird region",
    )
    parser.add_argument(
        "-v",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug mode",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser("info", help="Show application info")

    seasons_parser = subparsers.add_parser("seasons", help="Show season date windows for a year")
    seasons_parser.add_argument("--year", type=int, required=True, help="Label year")

    # 'report' command - fetch, aggregate and render
    report_parser = subparsers.add_parser("report", help="Build a seasonal report for a region")
    report_parser.add_argument("--region", default=None, help="Region code (default: settings)")
    report_parser.add_argument("--start-year", type=int, default=None, help="First year")
    report_parser.add_argument("--end-year", type=int, default=None, help="Last year")
    report_parser.add_argument("--species", default=None, help="Only count this species code")
    report_parser.add_argument(
        "--smoothing",
        choices=SMOOTHING_METHODS,
        default=None,
        help="Trend line smoothing (default: settings)",
    )
    report_parser.add_argument("--csv", type=Path, default=None, help="Also write totals as CSV")

    serve_parser = subparsers.add_parser("serve", help="Serve the report locally")
    serve_parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="Port to serve on (default: api_port from settings)",
    )

    return parser


def cmd_info(_args: argparse.Namespace) -> int:
    """Handle the 'info' command."""
    settings = get_settings()
    print(f"Application: {settings.app_name}")
    print(f"Version: {__version__}")
    print(f"Environment: {settings.app_env}")
    print(f"Debug: {settings.debug}")
    print(f"Region: {settings.region}")
    print(f"Years: {settings.start_year}-{settings.end_year}")
    return 0


def cmd_seasons(args: argparse.Namespace) -> int:
    """Handle the 'seasons' command: print each season's [start, end) window."""
    try:
        for season in SEASON_ORDER:
            start, end = season_date_range(season, args.year)
            print(f"{season.value:<9} {start.isoformat()} .. {end.isoformat()} (exclusive)")
    except BirdTrendsError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


def cmd_report(args: argparse.Namespace) -> int:
    """Handle the 'report' command."""
    settings = get_settings()
    if args.debug:
        print(f"Debug mode enabled. Settings: {settings}")

    region = args.region or settings.region
    start_year = args.start_year if args.start_year is not None else settings.start_year
    end_year = args.end_year if args.end_year is not None else settings.end_year

    try:
        result = region_report(
            region,
            start_year,
            end_year,
            species_code=args.species,
            smoothing=args.smoothing or settings.smoothing,
            site_dir=settings.site_dir,
            csv_path=args.csv,
            base_url=settings.base_url,
        )
    except BirdTrendsError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(f"Success: {result['records']} sightings, report at {result['output']}")
    return 0


def cmd_serve(args: argparse.Namespace) -> int:
    """Handle the 'serve' command: serve the built report locally."""
    settings = get_settings()
    port = args.port if args.port is not None else settings.api_port
    site_dir = Path(settings.site_dir)

    if not site_dir.exists():
        print("No site directory found. Run 'bird-trends report' first.", file=sys.stderr)
        return 1

    handler = functools.partial(http.server.SimpleHTTPRequestHandler, directory=str(site_dir))

    with http.server.HTTPServer(("", port), handler) as server:
        print(f"Serving report on http://localhost:{port}/ (Ctrl+C to stop)")
        try:
            server.serve_forever()
        except KeyboardInterrupt:
            print("\nServer stopped.")

    return 0


def main() -> int:
    """Main entry point for the CLI."""
    parser = create_parser()
    args = parser.parse_args()

    if args.command is None:
        parser.print_help()
        return 0

    commands = {
        "info": cmd_info,
        "seasons": cmd_seasons,
        "report": cmd_report,
        "serve": cmd_serve,
    }

    handler = commands.get(args.command)
    if handler:
        return handler(args)
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
