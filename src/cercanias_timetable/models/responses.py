from pydantic import BaseModel, Field

from cercanias_timetable.models.gtfs import ClassifiedTrip, Direction


class Timetable(BaseModel):
    """Corridor trips running on one date, split by direction."""

    date_used: str = Field(description="Selected date in DD/MM/YYYY format")
    service_ids: list[str] = Field(description="Active service IDs, sorted")
    outbound: list[ClassifiedTrip] = Field(description="Irun -> Brinkola trips by departure")
    inbound: list[ClassifiedTrip] = Field(description="Brinkola -> Irun trips by departure")


class StationResult(BaseModel):
    position: int = Field(description="Position along the line, 1 = Irún, 27 = Bríncola")
    name: str
    code: str = Field(description="GTFS stop_id")


class DirectionTable(BaseModel):
    direction: Direction
    title: str = Field(description="Printed page title")
    stations: list[StationResult] = Field(description="Columns, in travel order")
    rows: list[list[str]] = Field(
        description="One row per trip, one HH:MM cell per station ('-' if it doesn't stop)"
    )
    count: int = Field(description="Number of trips")


class GetTimetableResponse(BaseModel):
    date_used: str = Field(description="Selected date in DD/MM/YYYY format")
    service_count: int = Field(description="Number of services active on the date")
    outbound: DirectionTable
    inbound: DirectionTable


class ExportTimetableResponse(BaseModel):
    path: str = Field(description="Path of the generated PDF")
    date_used: str
    outbound_count: int
    inbound_count: int


class SearchStationsResponse(BaseModel):
    stations: list[StationResult]
    count: int = Field(description="Number of stations returned")
