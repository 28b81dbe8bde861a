"""Fuzzy matching for corridor stations."""

from cercanias_timetable.matching.models import (
    MatchConfidence,
    MatchType,
    StationMatch,
    StationResolutionResponse,
)
from cercanias_timetable.matching.normalizers import (
    get_meaningful_tokens,
    normalize_text,
    remove_accents,
)
from cercanias_timetable.matching.station_matcher import resolve_station

__all__ = [
    # Matchers
    "resolve_station",
    # Models
    "MatchConfidence",
    "MatchType",
    "StationMatch",
    "StationResolutionResponse",
    # Normalizers
    "normalize_text",
    "remove_accents",
    "get_meaningful_tokens",
]
