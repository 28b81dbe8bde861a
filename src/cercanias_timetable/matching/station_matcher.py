from collections.abc import Sequence

from rapidfuzz import fuzz

from cercanias_timetable.data.stations import CORRIDOR_STATIONS
from cercanias_timetable.matching.models import (
    MatchConfidence,
    MatchType,
    StationMatch,
    StationResolutionResponse,
    confidence_from_score,
)
from cercanias_timetable.matching.normalizers import get_meaningful_tokens, normalize_text
from cercanias_timetable.models.gtfs import Station

MIN_SCORE = 60.0


def _compute_fuzzy_score(query_normalized: str, target_normalized: str) -> float:
    """Blend token_set_ratio (word order) with partial_ratio (substrings).

    Names missing some of the query tokens are penalized.
    """
    token_score = fuzz.token_set_ratio(query_normalized, target_normalized)
    partial_score = fuzz.partial_ratio(query_normalized, target_normalized)
    score = token_score * 0.7 + partial_score * 0.3

    query_tokens = get_meaningful_tokens(query_normalized)
    target_tokens = get_meaningful_tokens(target_normalized)
    if query_tokens and target_tokens:
        query_coverage = len(query_tokens & target_tokens) / len(query_tokens)
        score = score * 0.85 + query_coverage * 100 * 0.15

    return min(100.0, score)


def _to_match(station: Station, score: float, match_type: MatchType) -> StationMatch:
    return StationMatch(
        position=station.position,
        name=station.name,
        code=station.code,
        score=round(score, 1),
        confidence=confidence_from_score(score, match_type),
        match_type=match_type,
    )


def resolve_station(
    query: str,
    limit: int = 5,
    stations: Sequence[Station] = CORRIDOR_STATIONS,
) -> StationResolutionResponse:
    """Resolve a free-text station query against the corridor table.

    Matching order:
    1. Exact stop code ("11511")
    2. Exact normalized name ("donostia" -> San Sebastián)
    3. Fuzzy name match, dropping scores below MIN_SCORE

    Args:
        query: Station name, alias or stop code.
        limit: Maximum number of matches to return.
        stations: Stations to search.

    Returns:
        StationResolutionResponse with matches ordered by score.
    """
    query_clean = query.strip()
    matches: list[StationMatch] = []

    for station in stations:
        if station.code == query_clean:
            matches.append(_to_match(station, 100.0, MatchType.CODE_EXACT))

    if not matches:
        query_normalized = normalize_text(query_clean)
        for station in stations:
            station_normalized = normalize_text(station.name)
            if station_normalized == query_normalized:
                matches.append(_to_match(station, 100.0, MatchType.NAME_EXACT))

        if not matches and query_normalized:
            for station in stations:
                score = _compute_fuzzy_score(query_normalized, normalize_text(station.name))
                if score >= MIN_SCORE:
                    matches.append(_to_match(station, score, MatchType.FUZZY_NAME))

    # Line order breaks ties
    matches.sort(key=lambda m: (-m.score, m.position))
    matches = matches[:limit]

    best_match = matches[0] if matches else None
    resolved = best_match is not None and best_match.confidence in (
        MatchConfidence.EXACT,
        MatchConfidence.HIGH,
    )
    return StationResolutionResponse(
        query=query,
        matches=matches,
        best_match=best_match,
        resolved=resolved,
    )
