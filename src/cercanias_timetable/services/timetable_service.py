"""Timetable pipeline: feed + date -> trips per direction -> printable rows."""

import logging
from collections.abc import Callable, Sequence
from datetime import date
from pathlib import Path

from cercanias_timetable.data.feed_archive import FeedArchive
from cercanias_timetable.data.gtfs_tables import (
    CALENDAR_DATES_FILE,
    CALENDAR_FILE,
    STOP_TIMES_FILE,
    TRIPS_FILE,
)
from cercanias_timetable.data.stations import (
    CORRIDOR_STATIONS,
    station_codes,
    stations_for_direction,
)
from cercanias_timetable.errors import MissingFeedFileError
from cercanias_timetable.models.gtfs import ClassifiedTrip, Direction, Station
from cercanias_timetable.models.responses import DirectionTable, StationResult, Timetable
from cercanias_timetable.services.calendar_service import get_service_day, resolve_active_services
from cercanias_timetable.services.trip_service import (
    classify_trips,
    collect_corridor_stop_times,
    select_active_trips,
)

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[str], None]

MANDATORY_FILES = (TRIPS_FILE, STOP_TIMES_FILE)

DIRECTION_TITLES = {
    Direction.OUTBOUND: "Horarios: Irun -> Brinkola",
    Direction.INBOUND: "Horarios: Brinkola -> Irun",
}

# Cell value for a station the train doesn't stop at
NO_STOP_PLACEHOLDER = "-"


def _ignore_progress(message: str) -> None:
    pass


def build_timetable_from_archive(
    archive: FeedArchive,
    selected_date: str | date,
    on_progress: ProgressCallback | None = None,
) -> Timetable:
    """Build the timetable for one date from an opened feed.

    Progress is reported exactly four times, in order: calendar resolution,
    active trip filtering, stop time reading, direction classification.

    Args:
        archive: Opened feed archive.
        selected_date: ``datetime.date`` or ``YYYY-MM-DD`` string.
        on_progress: Optional callback receiving human-readable messages.

    Returns:
        Timetable with both directions sorted by departure.

    Raises:
        InvalidDateError: If the date string is malformed.
        MissingFeedFileError: If trips.txt or stop_times.txt is absent.
        NoActiveServiceError: If no service runs on the date.
        MalformedColumnError: If a mandatory table lacks a required column.
        ParseError: If a stop_sequence value is not an integer.
    """
    report = on_progress or _ignore_progress
    service_day = get_service_day(selected_date)
    logger.info(f"Building timetable for {service_day.display_date} ({service_day.weekday})")

    for filename in MANDATORY_FILES:
        if not archive.has_member(filename):
            raise MissingFeedFileError(filename)

    report("Analizando calendario y excepciones...")
    active_services = resolve_active_services(
        archive.read_text(CALENDAR_FILE),
        archive.read_text(CALENDAR_DATES_FILE),
        service_day.gtfs_date,
        service_day.weekday,
    )

    report(f"Procesando viajes activos ({len(active_services)} servicios)...")
    active_trips = select_active_trips(active_services, archive.read_text(TRIPS_FILE))

    report("Leyendo horarios...")
    trip_stops = collect_corridor_stop_times(
        active_trips, archive.read_text(STOP_TIMES_FILE), station_codes(CORRIDOR_STATIONS)
    )

    report("Organizando direcciones...")
    outbound, inbound = classify_trips(trip_stops, CORRIDOR_STATIONS)

    return Timetable(
        date_used=service_day.display_date,
        service_ids=sorted(active_services),
        outbound=outbound,
        inbound=inbound,
    )


def build_timetable(
    gtfs_path: Path,
    selected_date: str | date,
    on_progress: ProgressCallback | None = None,
) -> Timetable:
    """Build the timetable for one date from a GTFS ZIP file or directory.

    Raises:
        FileNotFoundError: If the GTFS path doesn't exist.
        TimetableError: See ``build_timetable_from_archive``.
    """
    with FeedArchive(gtfs_path) as archive:
        return build_timetable_from_archive(archive, selected_date, on_progress)


def timetable_rows(
    trips: Sequence[ClassifiedTrip],
    stations: Sequence[Station],
    placeholder: str = NO_STOP_PLACEHOLDER,
) -> list[list[str]]:
    """Project trips onto a station ordering, one cell per station.

    Stations the trip skips, and untimed stops, get the placeholder.
    """
    return [
        [trip.stops.get(station.code) or placeholder for station in stations] for trip in trips
    ]


def direction_table(timetable: Timetable, direction: Direction) -> DirectionTable:
    """Tabulate one direction of a timetable in its printed station order."""
    stations = stations_for_direction(direction)
    trips = timetable.outbound if direction == Direction.OUTBOUND else timetable.inbound
    return DirectionTable(
        direction=direction,
        title=DIRECTION_TITLES[direction],
        stations=[
            StationResult(position=st.position, name=st.name, code=st.code) for st in stations
        ],
        rows=timetable_rows(trips, stations),
        count=len(trips),
    )


def resolve_feed_path(gtfs_path: Path | str | None = None) -> Path:
    """Return the feed to read: the given path, else CERCANIAS_GTFS_PATH.

    Raises:
        ValueError: If neither is set.
    """
    from cercanias_timetable.data.config import get_config

    if gtfs_path:
        return Path(gtfs_path)
    configured = get_config().gtfs_path
    if configured is None:
        raise ValueError("No GTFS feed given - pass a path or set CERCANIAS_GTFS_PATH")
    return configured
