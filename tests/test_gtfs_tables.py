"""Tests for header-indexed GTFS table parsing."""

import pytest

from cercanias_timetable.data.gtfs_tables import (
    build_header_index,
    parse_stop_sequence,
    parse_table,
    read_calendar,
    read_calendar_dates,
    read_trips,
    row_from_index,
    to_stop_time,
    try_parse_table,
)
from cercanias_timetable.errors import MalformedColumnError, ParseError


class TestBuildHeaderIndex:
    """Tests for locating columns by header name."""

    def test_columns_found_in_any_order(self) -> None:
        """Column positions come from the header, not a fixed layout."""
        index = build_header_index("route_id,service_id,trip_id", ["trip_id", "service_id"], "t")
        assert index == {"trip_id": 2, "service_id": 1}

    def test_strips_bom_and_carriage_return(self) -> None:
        """A UTF-8 BOM and CRLF line ending don't hide column names."""
        index = build_header_index("\ufefftrip_id,service_id\r", ["trip_id", "service_id"], "t")
        assert index == {"trip_id": 0, "service_id": 1}

    def test_first_duplicate_wins(self) -> None:
        """A repeated header name resolves to its first position."""
        index = build_header_index("trip_id,trip_id", ["trip_id"], "t")
        assert index == {"trip_id": 0}

    def test_missing_column_raises(self) -> None:
        """Missing columns raise MalformedColumnError naming them."""
        with pytest.raises(MalformedColumnError) as exc_info:
            build_header_index("trip_id", ["trip_id", "service_id"], "trips.txt")
        assert exc_info.value.filename == "trips.txt"
        assert exc_info.value.missing == ["service_id"]
        assert "service_id" in str(exc_info.value)


class TestParseTable:
    """Tests for row parsing."""

    def test_skips_blank_lines_and_numbers_rows(self) -> None:
        """Blank lines are skipped; line numbers count from the header as 1."""
        rows = list(parse_table("a,b\n1,2\n   \n3,4\n", ["a", "b"], "x.txt"))
        assert rows == [(2, {"a": "1", "b": "2"}), (4, {"a": "3", "b": "4"})]

    def test_short_row_gives_empty_strings(self) -> None:
        """Missing trailing fields read as empty strings."""
        assert row_from_index(["1"], {"a": 0, "b": 1}) == {"a": "1", "b": ""}

    def test_no_quote_handling(self) -> None:
        """Fields are split on every comma, quotes included."""
        rows = list(parse_table('a,b\n"x,y",z\n', ["a", "b"], "x.txt"))
        assert rows == [(2, {"a": '"x', "b": 'y"'})]

    def test_header_checked_before_iteration(self) -> None:
        """A missing column fails at call time, not on first row."""
        with pytest.raises(MalformedColumnError):
            parse_table("a\n1\n", ["a", "b"], "x.txt")

    def test_tolerant_variant_yields_nothing(self) -> None:
        """try_parse_table turns a missing column into an empty table."""
        assert list(try_parse_table("a\n1\n", ["a", "b"], "x.txt")) == []


class TestTypedReaders:
    """Tests for per-table readers."""

    def test_read_calendar_only_needs_target_weekday(self) -> None:
        """Only the weekday being resolved must be present."""
        text = "service_id,monday,start_date,end_date\nS1,1,20240101,20241231\n"
        rules = list(read_calendar(text, "monday"))
        assert len(rules) == 1
        assert rules[0].runs_on("monday")
        assert not rules[0].runs_on("tuesday")

    def test_read_calendar_missing_weekday_column_is_empty(self) -> None:
        """A calendar without the weekday column contributes nothing."""
        text = "service_id,monday,start_date,end_date\nS1,1,20240101,20241231\n"
        assert list(read_calendar(text, "sunday")) == []

    def test_read_calendar_rejects_unknown_weekday(self) -> None:
        """Weekday names are validated."""
        with pytest.raises(ValueError):
            list(read_calendar("service_id\n", "someday"))

    def test_read_calendar_dates(self) -> None:
        """Exception rows are read by header name."""
        text = "date,exception_type,service_id\n20240603,2,S1\n"
        exceptions = list(read_calendar_dates(text))
        assert exceptions[0].service_id == "S1"
        assert exceptions[0].date == "20240603"
        assert exceptions[0].exception_type == "2"

    def test_read_trips_requires_columns(self) -> None:
        """trips.txt without service_id is fatal."""
        with pytest.raises(MalformedColumnError):
            list(read_trips("trip_id,route_id\nT1,R1\n"))


class TestStopSequence:
    """Tests for stop_sequence parsing."""

    def test_parses_integer(self) -> None:
        """Plain integers parse."""
        assert parse_stop_sequence("17", 2) == 17

    def test_invalid_value_raises_parse_error(self) -> None:
        """Non-integers raise ParseError with the line number."""
        with pytest.raises(ParseError) as exc_info:
            parse_stop_sequence("abc", 5)
        assert exc_info.value.line_number == 5
        assert exc_info.value.value == "abc"

    def test_to_stop_time_trims_stop_id(self) -> None:
        """Stop codes are trimmed when the record is built."""
        row = {
            "trip_id": "T1",
            "departure_time": "08:00:00",
            "stop_id": " 11600 ",
            "stop_sequence": "1",
        }
        stop_time = to_stop_time(2, row)
        assert stop_time.stop_id == "11600"
        assert stop_time.stop_sequence == 1
