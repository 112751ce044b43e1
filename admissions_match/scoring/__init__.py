"""Student/university match scoring."""

from .match_scorer import (
    calculate_criteria_overlap,
    calculate_field_match,
    calculate_gpa_score,
    calculate_language_match,
    calculate_location_match,
    calculate_match_score,
    calculate_overlap,
    calculate_scholarship_fit,
    calculate_tuition_fit,
    get_match_breakdown,
    weighted_score,
)
from .snapshots import (
    CriteriaOverlap,
    MatchBreakdown,
    MatchResult,
    ProgramSnapshot,
    ScholarshipSnapshot,
    StudentSnapshot,
    UniversitySnapshot,
)

__all__ = [
    "calculate_match_score",
    "get_match_breakdown",
    "weighted_score",
    "calculate_field_match",
    "calculate_gpa_score",
    "calculate_language_match",
    "calculate_tuition_fit",
    "calculate_scholarship_fit",
    "calculate_location_match",
    "calculate_overlap",
    "calculate_criteria_overlap",
    "StudentSnapshot",
    "UniversitySnapshot",
    "ProgramSnapshot",
    "ScholarshipSnapshot",
    "MatchBreakdown",
    "CriteriaOverlap",
    "MatchResult",
]
