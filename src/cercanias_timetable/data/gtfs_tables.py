"""Header-indexed parsing of GTFS text tables.

Each feed member is a comma separated table whose first line names the
columns. Columns are always located by header name, never by position.
Quoted fields with embedded commas are not supported.
"""

import logging
from collections.abc import Iterator, Sequence

from cercanias_timetable.errors import MalformedColumnError, ParseError
from cercanias_timetable.models.gtfs import CalendarDate, CalendarRow, StopTime, Trip

logger = logging.getLogger(__name__)

CALENDAR_FILE = "calendar.txt"
CALENDAR_DATES_FILE = "calendar_dates.txt"
TRIPS_FILE = "trips.txt"
STOP_TIMES_FILE = "stop_times.txt"

# calendar.txt weekday columns indexed by weekday (0=Sunday, 6=Saturday)
WEEKDAY_COLUMNS = [
    "sunday",
    "monday",
    "tuesday",
    "wednesday",
    "thursday",
    "friday",
    "saturday",
]

CALENDAR_DATES_COLUMNS = ["service_id", "date", "exception_type"]
TRIPS_COLUMNS = ["trip_id", "service_id"]
STOP_TIMES_COLUMNS = ["trip_id", "departure_time", "stop_id", "stop_sequence"]

Row = dict[str, str]


def build_header_index(header_line: str, columns: Sequence[str], filename: str) -> dict[str, int]:
    """Map each requested column name to its position in the header.

    Raises:
        MalformedColumnError: If any requested column is absent.
    """
    header = [name.strip() for name in header_line.lstrip("\ufeff").strip().split(",")]
    expected = set(columns)
    header_index: dict[str, int] = {}
    for idx, name in enumerate(header):
        if name in expected and name not in header_index:
            header_index[name] = idx
    missing = [col for col in columns if col not in header_index]
    if missing:
        raise MalformedColumnError(filename, missing)
    return header_index


def row_from_index(fields: list[str], header_index: dict[str, int]) -> Row:
    """Map a split row to a dict by header index. Short rows give empty strings."""
    row: Row = {}
    for col, idx in header_index.items():
        row[col] = fields[idx] if idx < len(fields) else ""
    return row


def _iter_rows(lines: list[str], header_index: dict[str, int]) -> Iterator[tuple[int, Row]]:
    for line_number, line in enumerate(lines[1:], start=2):
        line = line.strip()
        if not line:
            continue
        yield line_number, row_from_index(line.split(","), header_index)


def parse_table(text: str, columns: Sequence[str], filename: str) -> Iterator[tuple[int, Row]]:
    """Parse a mandatory table.

    The header is checked eagerly; rows are produced lazily as
    ``(line_number, row)`` pairs, with line 1 being the header.

    Raises:
        MalformedColumnError: If the header lacks a requested column.
    """
    lines = text.split("\n")
    header_index = build_header_index(lines[0], columns, filename)
    return _iter_rows(lines, header_index)


def try_parse_table(text: str, columns: Sequence[str], filename: str) -> Iterator[tuple[int, Row]]:
    """Parse an optional table, yielding nothing when a column is missing."""
    try:
        return parse_table(text, columns, filename)
    except MalformedColumnError as e:
        logger.warning(f"Ignoring {filename}: {e}")
        return iter(())


def read_calendar(text: str, weekday: str) -> Iterator[CalendarRow]:
    """Read calendar.txt rows, locating only the given weekday column."""
    if weekday not in WEEKDAY_COLUMNS:
        raise ValueError(f"Unknown weekday column: {weekday}")
    columns = ["service_id", weekday, "start_date", "end_date"]
    for _, row in try_parse_table(text, columns, CALENDAR_FILE):
        yield CalendarRow(**row)


def read_calendar_dates(text: str) -> Iterator[CalendarDate]:
    """Read calendar_dates.txt exception rows."""
    for _, row in try_parse_table(text, CALENDAR_DATES_COLUMNS, CALENDAR_DATES_FILE):
        yield CalendarDate(**row)


def read_trips(text: str) -> Iterator[Trip]:
    """Read trips.txt rows.

    Raises:
        MalformedColumnError: If trip_id or service_id is missing.
    """
    for _, row in parse_table(text, TRIPS_COLUMNS, TRIPS_FILE):
        yield Trip(**row)


def read_stop_time_rows(text: str) -> Iterator[tuple[int, Row]]:
    """Read raw stop_times.txt rows without converting them.

    Raises:
        MalformedColumnError: If a required column is missing.
    """
    return parse_table(text, STOP_TIMES_COLUMNS, STOP_TIMES_FILE)


def parse_stop_sequence(value: str, line_number: int) -> int:
    """Parse a stop_sequence value.

    Raises:
        ParseError: If the value is not an integer.
    """
    try:
        return int(value)
    except ValueError as e:
        raise ParseError(STOP_TIMES_FILE, line_number, "stop_sequence", value) from e


def to_stop_time(line_number: int, row: Row) -> StopTime:
    """Build a StopTime from a raw row, trimming the stop code."""
    return StopTime(
        trip_id=row["trip_id"],
        stop_id=row["stop_id"].strip(),
        departure_time=row["departure_time"],
        stop_sequence=parse_stop_sequence(row["stop_sequence"], line_number),
    )
