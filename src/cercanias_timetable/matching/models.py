from enum import Enum

from pydantic import BaseModel, Field


class MatchConfidence(str, Enum):
    """Confidence level for a match.

    - EXACT: stop code or exact (normalized) name
    - HIGH: score >= 85
    - MEDIUM: score >= 70
    - LOW: score >= 60
    """

    EXACT = "exact"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class MatchType(str, Enum):
    """Type of match found."""

    CODE_EXACT = "code_exact"  # Stop code match
    NAME_EXACT = "name_exact"  # Normalized name match
    FUZZY_NAME = "fuzzy_name"  # Fuzzy name match


def confidence_from_score(score: float, match_type: MatchType) -> MatchConfidence:
    """Determine confidence level from score and match type."""
    if match_type in (MatchType.CODE_EXACT, MatchType.NAME_EXACT):
        return MatchConfidence.EXACT
    if score >= 85:
        return MatchConfidence.HIGH
    if score >= 70:
        return MatchConfidence.MEDIUM
    return MatchConfidence.LOW


class StationMatch(BaseModel):
    """A matched corridor station with confidence information."""

    position: int
    name: str
    code: str
    score: float = Field(description="Match score (0-100)")
    confidence: MatchConfidence = Field(description="Confidence level of the match")
    match_type: MatchType = Field(description="Type of match")


class StationResolutionResponse(BaseModel):
    """Response from resolve_station."""

    query: str = Field(description="Original query string")
    matches: list[StationMatch] = Field(description="Matched stations, ordered by score")
    best_match: StationMatch | None = Field(
        default=None, description="Best match (always set to top match when matches exist)"
    )
    resolved: bool = Field(
        description="True if best_match has EXACT or HIGH confidence (safe to auto-use)"
    )
