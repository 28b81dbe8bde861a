import argparse
import asyncio
import logging
import sys
from datetime import UTC, date, datetime
from pathlib import Path

from mcp.server.fastmcp import FastMCP
from pydantic import BaseModel

# Initialize the MCP server
mcp = FastMCP(
    "Cercanias Gipuzkoa",
    instructions="Date-filtered timetables for the Cercanías Gipuzkoa Irun - Brinkola line",
)


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str
    timestamp: str


@mcp.tool()
def health() -> HealthResponse:
    """Check if the timetable MCP server is running and healthy.

    Returns the server status, version, and current timestamp.
    """
    from cercanias_timetable import __version__

    return HealthResponse(
        status="ok",
        version=__version__,
        timestamp=datetime.now(UTC).isoformat(),
    )


# Marks a bare --pdf flag: write to the configured output directory
PDF_TO_OUTPUT_DIR = object()


def resolve_pdf_path(pdf_arg, display_date: str) -> Path | None:
    """Turn the --pdf argument into the file to write, or None for no PDF."""
    from cercanias_timetable.data.config import get_config
    from cercanias_timetable.rendering.pdf import default_pdf_filename

    if pdf_arg is None:
        return None
    pdf_name = default_pdf_filename(display_date)
    if pdf_arg is PDF_TO_OUTPUT_DIR:
        return get_config().output_dir / pdf_name
    if pdf_arg.is_dir():
        return pdf_arg / pdf_name
    return pdf_arg


def run_timetable(gtfs_path: Path, selected_date: str, pdf_path: Path | None) -> int:
    """Build (and optionally print to PDF) the timetable for a date."""
    from cercanias_timetable.errors import TimetableError
    from cercanias_timetable.rendering.pdf import render_timetable_pdf
    from cercanias_timetable.services.timetable_service import build_timetable

    try:
        timetable = build_timetable(gtfs_path, selected_date, on_progress=print)
    except (TimetableError, FileNotFoundError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(f"\nResumen para el {timetable.date_used}:")
    print(f"  Irun -> Brinkola: {len(timetable.outbound)} trenes")
    print(f"  Brinkola -> Irun: {len(timetable.inbound)} trenes")

    if pdf_path is not None:
        print("Generando PDF...")
        try:
            written = render_timetable_pdf(timetable, pdf_path)
        except TimetableError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1
        print(f"PDF guardado en {written}")
    return 0


async def run_download(output: Path) -> None:
    """Download the static GTFS feed."""
    from cercanias_timetable.data.config import get_config
    from cercanias_timetable.data.feed_client import FeedClient

    async with FeedClient(get_config()) as client:
        path = await client.download(output)
    print(f"Feed saved to {path}")


def run_stations(query: str | None) -> None:
    """Print the corridor stations, or the matches for a query."""
    from cercanias_timetable.data.stations import CORRIDOR_STATIONS
    from cercanias_timetable.matching import resolve_station

    if query is None:
        for station in CORRIDOR_STATIONS:
            print(f"  {station.position:>2}  {station.code}  {station.name}")
        return

    response = resolve_station(query)
    if not response.matches:
        print(f"No station matches {query!r}")
    for match in response.matches:
        print(f"  {match.position:>2}  {match.code}  {match.name}  ({match.confidence.value})")


def main() -> None:
    parser = argparse.ArgumentParser(
        prog="cercanias-timetable",
        description="Cercanías Gipuzkoa timetable MCP server and PDF generator",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )
    subparsers = parser.add_subparsers(dest="command")

    # timetable command
    timetable_parser = subparsers.add_parser(
        "timetable",
        help="Filter a GTFS feed to the trains running on one date",
    )
    timetable_parser.add_argument(
        "gtfs_path",
        type=Path,
        nargs="?",
        default=None,
        help="Path to GTFS ZIP file or directory (default: CERCANIAS_GTFS_PATH env var)",
    )
    timetable_parser.add_argument(
        "--date",
        default=date.today().isoformat(),
        help="Date in YYYY-MM-DD format (default: today)",
    )
    timetable_parser.add_argument(
        "--pdf",
        type=Path,
        nargs="?",
        const=PDF_TO_OUTPUT_DIR,
        default=None,
        help="Write a PDF (a directory, or no value for CERCANIAS_OUTPUT_DIR, gets the default name)",
    )

    # download command
    download_parser = subparsers.add_parser(
        "download",
        help="Download the static GTFS feed",
    )
    download_parser.add_argument(
        "--output",
        type=Path,
        default=Path("data/gtfs.zip"),
        help="Destination ZIP path (default: data/gtfs.zip)",
    )

    # stations command
    stations_parser = subparsers.add_parser(
        "stations",
        help="List corridor stations or look one up by name or code",
    )
    stations_parser.add_argument("query", nargs="?", default=None)

    args = parser.parse_args()

    # Configure logging
    log_level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    if args.command == "timetable":
        from cercanias_timetable.services.calendar_service import get_service_day
        from cercanias_timetable.services.timetable_service import resolve_feed_path

        try:
            gtfs_path = resolve_feed_path(args.gtfs_path)
            service_day = get_service_day(args.date)
        except ValueError as e:
            parser.error(str(e))

        pdf_path = resolve_pdf_path(args.pdf, service_day.display_date)
        sys.exit(run_timetable(gtfs_path, args.date, pdf_path))
    elif args.command == "download":
        asyncio.run(run_download(args.output))
    elif args.command == "stations":
        run_stations(args.query)
    else:
        # Default: run MCP server
        import cercanias_timetable.tools.station_tools  # noqa: F401
        import cercanias_timetable.tools.timetable_tools  # noqa: F401

        mcp.run()


if __name__ == "__main__":
    main()
