"""Tests for the timetable and station MCP tools."""

from pathlib import Path

import pytest

from cercanias_timetable.errors import NoActiveServiceError
from cercanias_timetable.models.gtfs import Direction
from cercanias_timetable.tools.station_tools import list_stations, resolve_station
from cercanias_timetable.tools.timetable_tools import export_timetable_pdf, get_timetable


@pytest.fixture
def sample_gtfs_dir(tmp_path: Path) -> Path:
    """Feed with one train each way on weekdays."""
    gtfs_dir = tmp_path / "gtfs"
    gtfs_dir.mkdir()
    (gtfs_dir / "calendar.txt").write_text(
        "service_id,monday,tuesday,wednesday,thursday,friday,saturday,sunday,start_date,end_date\n"
        "WEEKDAY,1,1,1,1,1,0,0,20240101,20241231\n"
    )
    (gtfs_dir / "trips.txt").write_text(
        "route_id,service_id,trip_id\nC1,WEEKDAY,OUT\nC1,WEEKDAY,IN\n"
    )
    (gtfs_dir / "stop_times.txt").write_text(
        "trip_id,arrival_time,departure_time,stop_id,stop_sequence\n"
        "OUT,08:00:00,08:00:00,11600,1\n"
        "OUT,08:40:00,08:40:00,11511,2\n"
        "IN,17:00:00,17:00:00,11305,1\n"
        "IN,18:20:00,18:20:00,11500,2\n"
    )
    return gtfs_dir


class TestGetTimetable:
    """Tests for the get_timetable tool."""

    def test_returns_both_directions(self, sample_gtfs_dir: Path) -> None:
        """Each direction is tabulated in its travel order."""
        response = get_timetable(selected_date="2024-06-03", gtfs_path=str(sample_gtfs_dir))

        assert response.date_used == "03/06/2024"
        assert response.service_count == 1
        assert response.outbound.direction == Direction.OUTBOUND
        assert response.outbound.count == 1
        assert response.outbound.rows[0][0] == "08:00"
        assert response.outbound.rows[0][7] == "08:40"
        assert response.inbound.stations[0].code == "11305"
        assert response.inbound.rows[0][0] == "17:00"

    def test_errors_propagate(self, sample_gtfs_dir: Path) -> None:
        """Pipeline errors reach the caller unchanged."""
        with pytest.raises(NoActiveServiceError):
            get_timetable(selected_date="2024-06-09", gtfs_path=str(sample_gtfs_dir))


class TestExportTimetablePdf:
    """Tests for the export_timetable_pdf tool."""

    def test_explicit_output_path(self, sample_gtfs_dir: Path, tmp_path: Path) -> None:
        """The PDF is written where asked."""
        output = tmp_path / "horario.pdf"
        response = export_timetable_pdf(
            selected_date="2024-06-03",
            gtfs_path=str(sample_gtfs_dir),
            output_path=str(output),
        )
        assert response.path == str(output)
        assert response.outbound_count == 1
        assert response.inbound_count == 1
        assert output.exists()

    def test_default_output_path(
        self, sample_gtfs_dir: Path, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Without a path the PDF goes to CERCANIAS_OUTPUT_DIR."""
        from cercanias_timetable.data.config import get_config

        monkeypatch.setenv("CERCANIAS_OUTPUT_DIR", str(tmp_path / "pdfs"))
        get_config.cache_clear()
        try:
            response = export_timetable_pdf(
                selected_date="2024-06-03", gtfs_path=str(sample_gtfs_dir)
            )
        finally:
            get_config.cache_clear()

        expected = tmp_path / "pdfs" / "Cercanias_Gipuzkoa_03-06-2024.pdf"
        assert response.path == str(expected)
        assert expected.exists()


class TestStationTools:
    """Tests for station tools."""

    def test_list_stations(self) -> None:
        """All 27 stations are listed in line order."""
        response = list_stations()
        assert response.count == 27
        assert response.stations[0].name == "Irún"
        assert response.stations[26].name == "Bríncola"

    def test_resolve_station_clamps_limit(self) -> None:
        """Limits below 1 are raised to 1."""
        response = resolve_station(query="tolosa", limit=0)
        assert len(response.matches) == 1
        assert response.best_match is not None
        assert response.best_match.code == "11500"
