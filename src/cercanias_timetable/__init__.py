"""Date-filtered printable timetables for the Cercanías Gipuzkoa Irun - Brinkola line."""

__version__ = "0.1.0"
