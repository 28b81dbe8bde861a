"""Exceptions raised while building a timetable.

Every error aborts the whole request; callers surface ``str(error)`` as-is.
Messages are in Spanish to match the printed timetable.
"""


class TimetableError(Exception):
    """Base class for all timetable pipeline failures."""


class InvalidDateError(TimetableError, ValueError):
    """The selected date is not a valid YYYY-MM-DD calendar date."""

    def __init__(self, value: str):
        self.value = value
        super().__init__(f"Fecha no válida: {value!r} (formato esperado AAAA-MM-DD)")


class NoActiveServiceError(TimetableError):
    """No service runs on the selected date."""

    def __init__(self, display_date: str):
        self.display_date = display_date
        super().__init__(f"No se encontraron servicios activos para la fecha {display_date}.")


class MissingFeedFileError(TimetableError):
    """A mandatory member (trips.txt, stop_times.txt) is absent from the feed."""

    def __init__(self, filename: str):
        self.filename = filename
        super().__init__(f"No se encontró {filename}")


class MalformedColumnError(TimetableError):
    """A mandatory table lacks one or more required columns."""

    def __init__(self, filename: str, missing: list[str]):
        self.filename = filename
        self.missing = missing
        super().__init__(f"{filename} missing columns: {', '.join(missing)}")


class ParseError(TimetableError):
    """A numeric field could not be parsed."""

    def __init__(self, filename: str, line_number: int, column: str, value: str):
        self.filename = filename
        self.line_number = line_number
        self.column = column
        self.value = value
        super().__init__(
            f"{filename} line {line_number}: invalid {column} value {value!r}"
        )


class InvalidFeedError(TimetableError):
    """The feed is not a readable ZIP archive or a member is not UTF-8 text."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Archivo GTFS no válido: {path} ({reason})")


class RenderError(TimetableError):
    """The PDF could not be generated. Already computed trip lists stay valid."""
