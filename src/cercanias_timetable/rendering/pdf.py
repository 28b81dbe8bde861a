"""Printable PDF output: one landscape A4 table per direction."""

import logging
from pathlib import Path

from cercanias_timetable.errors import RenderError
from cercanias_timetable.models.gtfs import Direction
from cercanias_timetable.models.responses import DirectionTable, Timetable
from cercanias_timetable.services.timetable_service import direction_table

logger = logging.getLogger(__name__)

A4_LANDSCAPE_INCHES = (11.69, 8.27)
ROWS_PER_PAGE = 45

HEADER_COLOR = "#E30613"  # Renfe red
GRID_COLOR = "#C8C8C8"
TITLE_FONT_SIZE = 14
SUBTITLE_FONT_SIZE = 10
BODY_FONT_SIZE = 6
HEADER_FONT_SIZE = 5.5
HEADER_HEIGHT_FACTOR = 3.0


def default_pdf_filename(date_used: str) -> str:
    """File name for a timetable PDF ("03/06/2024" -> Cercanias_Gipuzkoa_03-06-2024.pdf)."""
    return f"Cercanias_Gipuzkoa_{date_used.replace('/', '-')}.pdf"


def wrap_station_name(name: str) -> str:
    """Break a station name over lines so 27 columns fit on the page."""
    return name.replace("-", "-\n").replace(" ", "\n")


def paginate(rows: list[list[str]], rows_per_page: int = ROWS_PER_PAGE) -> list[list[list[str]]]:
    """Split rows into pages. An empty table still yields one (header-only) page."""
    if not rows:
        return [[]]
    return [rows[i : i + rows_per_page] for i in range(0, len(rows), rows_per_page)]


def _draw_page(pdf, title: str, subtitle: str, header: list[str], rows: list[list[str]]) -> None:
    import matplotlib.pyplot as plt

    fig = plt.figure(figsize=A4_LANDSCAPE_INCHES)
    try:
        fig.text(0.02, 0.97, title, fontsize=TITLE_FONT_SIZE, ha="left", va="top")
        fig.text(0.02, 0.93, subtitle, fontsize=SUBTITLE_FONT_SIZE, ha="left", va="top")

        ax = fig.add_axes((0.01, 0.02, 0.98, 0.88))
        ax.axis("off")

        # The header is drawn as row 0 so header-only pages still render
        table = ax.table(cellText=[header, *rows], loc="upper center", cellLoc="center")
        table.auto_set_font_size(False)
        table.set_fontsize(BODY_FONT_SIZE)

        for (row, _col), cell in table.get_celld().items():
            cell.set_edgecolor(GRID_COLOR)
            cell.set_linewidth(0.3)
            if row == 0:
                cell.set_height(cell.get_height() * HEADER_HEIGHT_FACTOR)
                cell.set_facecolor(HEADER_COLOR)
                text = cell.get_text()
                text.set_color("white")
                text.set_fontweight("bold")
                text.set_fontsize(HEADER_FONT_SIZE)

        pdf.savefig(fig)
    finally:
        plt.close(fig)


def _draw_direction(pdf, table: DirectionTable, date_used: str) -> None:
    header = [wrap_station_name(station.name) for station in table.stations]
    subtitle = f"Fecha de circulación: {date_used}"
    pages = paginate(table.rows)
    for page_number, rows in enumerate(pages, start=1):
        title = table.title
        if len(pages) > 1:
            title = f"{title} ({page_number}/{len(pages)})"
        _draw_page(pdf, title, subtitle, header, rows)


def render_timetable_pdf(timetable: Timetable, output_path: Path) -> Path:
    """Write the timetable as a PDF, Irun -> Brinkola first.

    Args:
        timetable: Timetable produced by ``build_timetable``.
        output_path: Destination file.

    Returns:
        The path written.

    Raises:
        RenderError: If the PDF could not be generated or written.
    """
    import matplotlib

    matplotlib.use("Agg")
    from matplotlib.backends.backend_pdf import PdfPages

    output_path = Path(output_path)
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with PdfPages(output_path) as pdf:
            for direction in (Direction.OUTBOUND, Direction.INBOUND):
                _draw_direction(pdf, direction_table(timetable, direction), timetable.date_used)
            info = pdf.infodict()
            info["Title"] = f"Cercanías Gipuzkoa {timetable.date_used}"
    except (OSError, ValueError) as e:
        raise RenderError(f"Error generando PDF: {e}") from e

    logger.info(
        f"Wrote {output_path} ({len(timetable.outbound)} outbound, "
        f"{len(timetable.inbound)} inbound trips)"
    )
    return output_path
