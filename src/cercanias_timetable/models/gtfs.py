"""Pydantic models for the GTFS records the timetable pipeline reads and derives."""

from datetime import date
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Direction(str, Enum):
    """Direction of travel along the corridor."""

    OUTBOUND = "outbound"  # Irun -> Brinkola, increasing position
    INBOUND = "inbound"  # Brinkola -> Irun


class ExceptionType(str, Enum):
    """calendar_dates.txt exception_type values."""

    ADDED = "1"
    REMOVED = "2"


class Station(BaseModel):
    """A station on the fixed corridor table."""

    model_config = ConfigDict(frozen=True)

    position: int = Field(ge=1, description="Position along the line, 1 = Irún")
    name: str
    code: str = Field(description="GTFS stop_id of the station")


class ServiceDay(BaseModel):
    """The calendar date a timetable is built for."""

    model_config = ConfigDict(frozen=True)

    service_date: date
    gtfs_date: str  # YYYYMMDD
    weekday: str  # calendar.txt column name, "sunday".."saturday"
    display_date: str  # DD/MM/YYYY


class CalendarRow(BaseModel):
    """GTFS calendar entity for weekly service patterns.

    Only the weekday column for the target date is read, so the other flags
    default to "0".
    """

    service_id: str
    monday: str = "0"
    tuesday: str = "0"
    wednesday: str = "0"
    thursday: str = "0"
    friday: str = "0"
    saturday: str = "0"
    sunday: str = "0"
    start_date: str  # YYYYMMDD
    end_date: str  # YYYYMMDD

    def runs_on(self, weekday: str) -> bool:
        return getattr(self, weekday) == "1"


class CalendarDate(BaseModel):
    """GTFS calendar_dates entity for service exceptions."""

    service_id: str
    date: str  # YYYYMMDD
    exception_type: str  # 1=added, 2=removed


class Trip(BaseModel):
    """GTFS trip entity (only the columns the filter needs)."""

    trip_id: str
    service_id: str


class StopTime(BaseModel):
    """GTFS stop_times entity."""

    trip_id: str
    stop_id: str
    departure_time: str  # HH:MM:SS, can exceed 24:00:00
    stop_sequence: int


class ClassifiedTrip(BaseModel):
    """A trip with at least two stops on the corridor, ready to print."""

    trip_id: str
    stops: dict[str, str] = Field(description="Station code -> departure time (HH:MM)")
    first_stop_position: int
    last_stop_position: int
    departure_from_origin: str = Field(
        description="Raw HH:MM:SS departure at the first corridor stop, used for sorting"
    )

    @property
    def direction(self) -> Direction:
        if self.first_stop_position < self.last_stop_position:
            return Direction.OUTBOUND
        return Direction.INBOUND
