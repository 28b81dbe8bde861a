"""Built-in station table for the Irun - Brinkola corridor."""

from collections.abc import Sequence

from cercanias_timetable.models.gtfs import Direction, Station

# Ordered from Irun (1) to Brinkola (27)
CORRIDOR_STATIONS: tuple[Station, ...] = tuple(
    Station(position=position, name=name, code=code)
    for position, name, code in (
        (1, "Irún", "11600"),
        (2, "Ventas de Irún", "11518"),
        (3, "Lezo-Rentería", "11516"),
        (4, "Pasaia", "11515"),
        (5, "Herrera", "11514"),
        (6, "Ategorrieta", "11513"),
        (7, "Gros", "11512"),
        (8, "San Sebastián", "11511"),
        (9, "Loiola", "11510"),
        (10, "Martutene", "11509"),
        (11, "Hernani", "11508"),
        (12, "Hernani-Centro", "11507"),
        (13, "Urnieta", "11506"),
        (14, "Andoain", "11505"),
        (15, "Andoain-Centro", "11504"),
        (16, "Villabona-Zizurkil", "11503"),
        (17, "Anoeta", "11502"),
        (18, "Tolosa-Centro", "11501"),
        (19, "Tolosa", "11500"),
        (20, "Alegia", "11409"),
        (21, "Itsasondo", "11406"),
        (22, "Ordizia", "11405"),
        (23, "Beasain", "11404"),
        (24, "Ormaiztegi", "11402"),
        (25, "Zumárraga", "11400"),
        (26, "Legazpi", "11306"),
        (27, "Bríncola", "11305"),
    )
)

_BY_CODE: dict[str, Station] = {station.code: station for station in CORRIDOR_STATIONS}


def station_codes(stations: Sequence[Station] = CORRIDOR_STATIONS) -> frozenset[str]:
    """Return the set of stop codes on the corridor."""
    return frozenset(station.code for station in stations)


def code_to_position(stations: Sequence[Station] = CORRIDOR_STATIONS) -> dict[str, int]:
    """Map stop code -> corridor position."""
    return {station.code: station.position for station in stations}


def get_station_by_code(code: str) -> Station | None:
    """Look up a built-in station by its stop code (whitespace is ignored)."""
    return _BY_CODE.get(code.strip())


def stations_for_direction(direction: Direction) -> list[Station]:
    """Station order as printed for a direction.

    Outbound reads Irun -> Brinkola, inbound reads Brinkola -> Irun.
    """
    if direction == Direction.OUTBOUND:
        return list(CORRIDOR_STATIONS)
    return list(reversed(CORRIDOR_STATIONS))
