from pathlib import Path

from cercanias_timetable.data.config import get_config
from cercanias_timetable.models.gtfs import Direction
from cercanias_timetable.models.responses import ExportTimetableResponse, GetTimetableResponse
from cercanias_timetable.rendering.pdf import default_pdf_filename, render_timetable_pdf
from cercanias_timetable.server import mcp
from cercanias_timetable.services.timetable_service import (
    build_timetable,
    direction_table,
    resolve_feed_path,
)


@mcp.tool()
def get_timetable(selected_date: str, gtfs_path: str | None = None) -> GetTimetableResponse:
    """Get the Irun - Brinkola timetable for one date.

    Resolves which services run on the date (weekly calendar plus holiday
    exceptions), keeps the trains that stop at two or more corridor stations,
    and returns one table per direction sorted by departure time.

    Examples:
        get_timetable(selected_date="2024-06-03")
        get_timetable(selected_date="2024-12-25", gtfs_path="data/gtfs.zip")

    Args:
        selected_date: Date in YYYY-MM-DD format.
        gtfs_path: GTFS ZIP file or directory. Defaults to CERCANIAS_GTFS_PATH.

    Returns:
        GetTimetableResponse containing:
        - date_used: The date in DD/MM/YYYY format
        - service_count: Number of active services
        - outbound: Irun -> Brinkola table (stations as columns, trips as rows)
        - inbound: Brinkola -> Irun table
    """
    timetable = build_timetable(resolve_feed_path(gtfs_path), selected_date)
    return GetTimetableResponse(
        date_used=timetable.date_used,
        service_count=len(timetable.service_ids),
        outbound=direction_table(timetable, Direction.OUTBOUND),
        inbound=direction_table(timetable, Direction.INBOUND),
    )


@mcp.tool()
def export_timetable_pdf(
    selected_date: str,
    gtfs_path: str | None = None,
    output_path: str | None = None,
) -> ExportTimetableResponse:
    """Write the printable Irun - Brinkola timetable for one date as a PDF.

    The PDF is landscape A4 with one table per direction.

    Args:
        selected_date: Date in YYYY-MM-DD format.
        gtfs_path: GTFS ZIP file or directory. Defaults to CERCANIAS_GTFS_PATH.
        output_path: Destination PDF. Defaults to
                     CERCANIAS_OUTPUT_DIR/Cercanias_Gipuzkoa_DD-MM-YYYY.pdf.

    Returns:
        ExportTimetableResponse with the written path and trip counts.
    """
    timetable = build_timetable(resolve_feed_path(gtfs_path), selected_date)

    if output_path:
        destination = Path(output_path)
    else:
        destination = get_config().output_dir / default_pdf_filename(timetable.date_used)

    written = render_timetable_pdf(timetable, destination)
    return ExportTimetableResponse(
        path=str(written),
        date_used=timetable.date_used,
        outbound_count=len(timetable.outbound),
        inbound_count=len(timetable.inbound),
    )
