"""MCP tools for corridor stations."""

from cercanias_timetable.data.stations import CORRIDOR_STATIONS
from cercanias_timetable.matching import StationResolutionResponse
from cercanias_timetable.matching import resolve_station as _resolve_station
from cercanias_timetable.models.responses import SearchStationsResponse, StationResult
from cercanias_timetable.server import mcp


@mcp.tool()
def list_stations() -> SearchStationsResponse:
    """List the 27 stations of the Irun - Brinkola line in line order.

    Position 1 is Irún and position 27 is Bríncola. The code is the GTFS
    stop_id used in the timetable tables.
    """
    stations = [
        StationResult(position=st.position, name=st.name, code=st.code)
        for st in CORRIDOR_STATIONS
    ]
    return SearchStationsResponse(stations=stations, count=len(stations))


@mcp.tool()
def resolve_station(query: str, limit: int = 5) -> StationResolutionResponse:
    """Find a corridor station by name, Basque/Spanish alias or stop code.

    Examples:
        resolve_station(query="Donostia")  # San Sebastián
        resolve_station(query="11305")  # Bríncola by code
        resolve_station(query="hernani centro")

    Args:
        query: Station name, alias or GTFS stop code.
        limit: Maximum number of matches (default 5, max 27).

    Returns:
        StationResolutionResponse with matches ordered by score. ``resolved``
        is True when the best match is safe to use without asking.
    """
    # Validate limit
    if limit < 1:
        limit = 1
    elif limit > len(CORRIDOR_STATIONS):
        limit = len(CORRIDOR_STATIONS)

    return _resolve_station(query, limit=limit)
