"""Tests for the MCP server, health tool and CLI commands."""

from pathlib import Path

import pytest

from cercanias_timetable import __version__
from cercanias_timetable.server import (
    PDF_TO_OUTPUT_DIR,
    health,
    resolve_pdf_path,
    run_stations,
    run_timetable,
)

CALENDAR = (
    "service_id,monday,tuesday,wednesday,thursday,friday,saturday,sunday,start_date,end_date\n"
    "S1,1,1,1,1,1,0,0,20240101,20241231\n"
)
TRIPS = "route_id,service_id,trip_id\nC1,S1,T1\n"
STOP_TIMES = (
    "trip_id,arrival_time,departure_time,stop_id,stop_sequence\n"
    "T1,08:00:00,08:00:00,11600,1\n"
    "T1,10:30:00,10:30:00,11305,2\n"
)


def write_feed(gtfs_dir: Path) -> Path:
    gtfs_dir.mkdir()
    (gtfs_dir / "calendar.txt").write_text(CALENDAR)
    (gtfs_dir / "trips.txt").write_text(TRIPS)
    (gtfs_dir / "stop_times.txt").write_text(STOP_TIMES)
    return gtfs_dir


def test_health_returns_ok_status():
    """Health check should return status ok."""
    response = health()
    assert response.status == "ok"


def test_health_returns_version():
    """Health check should return the current version."""
    response = health()
    assert response.version == __version__


def test_health_returns_timestamp():
    """Health check should return a valid ISO timestamp."""
    response = health()
    assert "T" in response.timestamp


def test_run_timetable_prints_progress_and_summary(tmp_path: Path, capsys):
    """The CLI prints each phase and the trip counts."""
    gtfs_dir = write_feed(tmp_path / "gtfs")

    assert run_timetable(gtfs_dir, "2024-06-03", None) == 0

    out = capsys.readouterr().out
    assert "Leyendo horarios..." in out
    assert "Resumen para el 03/06/2024" in out
    assert "Irun -> Brinkola: 1 trenes" in out
    assert "Brinkola -> Irun: 0 trenes" in out


def test_run_timetable_reports_errors(tmp_path: Path, capsys):
    """Pipeline errors print the message and return 1."""
    gtfs_dir = write_feed(tmp_path / "gtfs")

    assert run_timetable(gtfs_dir, "2024-06-08", None) == 1

    err = capsys.readouterr().err
    assert "Error: No se encontraron servicios activos para la fecha 08/06/2024." in err


def test_run_timetable_writes_pdf(tmp_path: Path):
    """--pdf writes the PDF."""
    gtfs_dir = write_feed(tmp_path / "gtfs")
    pdf_path = tmp_path / "timetable.pdf"

    assert run_timetable(gtfs_dir, "2024-06-03", pdf_path) == 0
    assert pdf_path.read_bytes().startswith(b"%PDF")


def test_run_stations_lists_line(capsys):
    """Without a query every station is listed."""
    run_stations(None)
    out = capsys.readouterr().out
    assert out.count("\n") == 27
    assert "11600  Irún" in out


def test_run_stations_query(capsys):
    """A query prints its matches."""
    run_stations("Donostia")
    assert "San Sebastián" in capsys.readouterr().out


def test_run_timetable_reports_corrupt_feed(tmp_path: Path, capsys):
    """A file that isn't a ZIP is reported like any other feed error."""
    feed = tmp_path / "feed.zip"
    feed.write_bytes(b"not a zip")

    assert run_timetable(feed, "2024-06-03", None) == 1

    err = capsys.readouterr().err
    assert err.startswith("Error: Archivo GTFS no válido:")


class TestResolvePdfPath:
    """Tests for interpreting the --pdf argument."""

    def test_no_flag(self):
        """Without --pdf nothing is written."""
        assert resolve_pdf_path(None, "03/06/2024") is None

    def test_bare_flag_uses_output_dir(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        """A bare --pdf writes the default name into CERCANIAS_OUTPUT_DIR."""
        from cercanias_timetable.data.config import get_config

        monkeypatch.setenv("CERCANIAS_OUTPUT_DIR", str(tmp_path / "pdfs"))
        get_config.cache_clear()
        try:
            path = resolve_pdf_path(PDF_TO_OUTPUT_DIR, "03/06/2024")
        finally:
            get_config.cache_clear()

        assert path == tmp_path / "pdfs" / "Cercanias_Gipuzkoa_03-06-2024.pdf"

    def test_current_directory(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        """An explicit '.' means the current directory, not the output dir."""
        monkeypatch.setenv("CERCANIAS_OUTPUT_DIR", str(tmp_path / "pdfs"))
        path = resolve_pdf_path(Path("."), "03/06/2024")
        assert path == Path(".") / "Cercanias_Gipuzkoa_03-06-2024.pdf"

    def test_directory_gets_default_name(self, tmp_path: Path):
        """A directory argument gets the default file name appended."""
        path = resolve_pdf_path(tmp_path, "03/06/2024")
        assert path == tmp_path / "Cercanias_Gipuzkoa_03-06-2024.pdf"

    def test_explicit_file(self, tmp_path: Path):
        """A file path is used as given."""
        target = tmp_path / "horario.pdf"
        assert resolve_pdf_path(target, "03/06/2024") == target
