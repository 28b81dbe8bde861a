"""Trip filtering and direction classification for the corridor."""

import logging
from collections.abc import Collection, Sequence

from cercanias_timetable.data.gtfs_tables import (
    STOP_TIMES_FILE,
    TRIPS_FILE,
    read_stop_time_rows,
    read_trips,
    to_stop_time,
)
from cercanias_timetable.data.stations import CORRIDOR_STATIONS, code_to_position, station_codes
from cercanias_timetable.errors import MissingFeedFileError
from cercanias_timetable.models.gtfs import ClassifiedTrip, Direction, Station, StopTime

logger = logging.getLogger(__name__)

# HH:MM prefix of a GTFS HH:MM:SS time
DISPLAY_TIME_LENGTH = 5


def format_departure(departure_time: str) -> str:
    """Truncate a GTFS time to HH:MM ("25:10:00" -> "25:10")."""
    return departure_time[:DISPLAY_TIME_LENGTH]


def select_active_trips(active_services: Collection[str], trips_text: str | None) -> set[str]:
    """Return the trip IDs whose service runs on the selected date.

    Raises:
        MissingFeedFileError: If trips.txt is absent.
        MalformedColumnError: If trip_id or service_id is missing.
    """
    if trips_text is None:
        raise MissingFeedFileError(TRIPS_FILE)
    active_trips = {
        trip.trip_id for trip in read_trips(trips_text) if trip.service_id in active_services
    }
    logger.info(f"{len(active_trips):,} active trips")
    return active_trips


def collect_corridor_stop_times(
    active_trips: Collection[str],
    stop_times_text: str | None,
    stop_codes: Collection[str],
) -> dict[str, list[StopTime]]:
    """Group stop events of active trips at corridor stations by trip ID.

    Rows keep their file order within each group. Only kept rows have their
    stop_sequence parsed.

    Raises:
        MissingFeedFileError: If stop_times.txt is absent.
        MalformedColumnError: If a required column is missing.
        ParseError: If a kept row has a non-integer stop_sequence.
    """
    if stop_times_text is None:
        raise MissingFeedFileError(STOP_TIMES_FILE)

    trip_stops: dict[str, list[StopTime]] = {}
    for line_number, row in read_stop_time_rows(stop_times_text):
        if row["trip_id"] not in active_trips:
            continue
        if row["stop_id"].strip() not in stop_codes:
            continue
        stop_time = to_stop_time(line_number, row)
        trip_stops.setdefault(stop_time.trip_id, []).append(stop_time)

    logger.info(f"{len(trip_stops):,} active trips stop on the corridor")
    return trip_stops


def classify_trip(
    trip_id: str, stop_times: list[StopTime], positions: dict[str, int]
) -> ClassifiedTrip | None:
    """Build a ClassifiedTrip, or None if the trip has no direction.

    A trip needs at least two corridor stops. Stops are ordered by
    stop_sequence (stable, so duplicates keep file order) and a station
    visited twice keeps its last departure.
    """
    ordered = sorted(stop_times, key=lambda st: st.stop_sequence)
    if len(ordered) < 2:
        return None

    first_stop, last_stop = ordered[0], ordered[-1]
    first_position = positions.get(first_stop.stop_id)
    last_position = positions.get(last_stop.stop_id)
    if first_position is None or last_position is None:
        return None

    stops: dict[str, str] = {}
    for st in ordered:
        stops[st.stop_id] = format_departure(st.departure_time)

    return ClassifiedTrip(
        trip_id=trip_id,
        stops=stops,
        first_stop_position=first_position,
        last_stop_position=last_position,
        departure_from_origin=first_stop.departure_time,
    )


def classify_trips(
    trip_stops: dict[str, list[StopTime]],
    stations: Sequence[Station] = CORRIDOR_STATIONS,
) -> tuple[list[ClassifiedTrip], list[ClassifiedTrip]]:
    """Split grouped stop events into outbound and inbound trips.

    Outbound trips run towards increasing corridor position. Each list is
    sorted by the raw departure at the first corridor stop; zero-padded
    HH:MM:SS compares correctly as a string, including times past 24:00:00.

    Returns:
        Tuple of (outbound, inbound) trips.
    """
    positions = code_to_position(stations)
    outbound: list[ClassifiedTrip] = []
    inbound: list[ClassifiedTrip] = []
    skipped = 0

    for trip_id, stop_times in trip_stops.items():
        trip = classify_trip(trip_id, stop_times, positions)
        if trip is None:
            skipped += 1
            continue
        if trip.direction == Direction.OUTBOUND:
            outbound.append(trip)
        else:
            inbound.append(trip)

    outbound.sort(key=lambda trip: trip.departure_from_origin)
    inbound.sort(key=lambda trip: trip.departure_from_origin)

    logger.info(
        f"Classified {len(outbound)} outbound and {len(inbound)} inbound trips"
        + (f" (skipped {skipped} with a single corridor stop)" if skipped else "")
    )
    return outbound, inbound


def filter_trips(
    active_services: Collection[str],
    trips_text: str | None,
    stop_times_text: str | None,
    stations: Sequence[Station] = CORRIDOR_STATIONS,
) -> tuple[list[ClassifiedTrip], list[ClassifiedTrip]]:
    """Restrict a feed to the corridor trips of the active services.

    Args:
        active_services: Service IDs running on the selected date.
        trips_text: Contents of trips.txt.
        stop_times_text: Contents of stop_times.txt.
        stations: Corridor stations in line order.

    Returns:
        Tuple of (outbound, inbound) trips, each sorted by departure.

    Raises:
        MissingFeedFileError: If either text is absent.
        MalformedColumnError: If either table lacks a required column.
        ParseError: If a stop_sequence value is not an integer.
    """
    if trips_text is None:
        raise MissingFeedFileError(TRIPS_FILE)
    if stop_times_text is None:
        raise MissingFeedFileError(STOP_TIMES_FILE)

    active_trips = select_active_trips(active_services, trips_text)
    trip_stops = collect_corridor_stop_times(active_trips, stop_times_text, station_codes(stations))
    return classify_trips(trip_stops, stations)
