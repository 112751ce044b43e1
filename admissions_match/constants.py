"""
Application constants for Admissions Match.

Contains scoring weights, neutral fallbacks, and worker defaults.
"""

# =============================================================================
# Scoring
# =============================================================================

# Identifies the weighting scheme below. Stored on every Recommendation row;
# rows written under another scheme are not comparable.
SCORING_VERSION = "criteria-v2"

SCORE_WEIGHTS = {
    "field_match": 0.2,
    "gpa": 0.15,
    "language": 0.1,
    "tuition_fit": 0.15,
    "scholarship_fit": 0.1,
    "location": 0.1,
    "criteria_match": 0.2,
}

# Neutral value used whenever an input is missing
NEUTRAL_SCORE = 0.5

# GPA scale (0-4)
GPA_SCALE_MAX = 4.0

# Program breadth saturates at this many programs
PROGRAM_SATURATION_COUNT = 3

# Scholarship availability saturates at this many scholarships
SCHOLARSHIP_SATURATION_COUNT = 2
NO_SCHOLARSHIP_SCORE = 0.3

# Placeholder until budget data exists on the student profile
TUITION_FIT_SCORE = 0.7

LOCATION_MATCH_SCORE = 1.0

# Language heuristics (case-insensitive substrings)
ENGLISH_PROGRAM_MARKER = "english"
ENGLISH_LEVEL_MARKERS = ("eng", "b2", "c1")
RUSSIAN_PROGRAM_MARKER = "russian"
ENGLISH_MATCH_SCORE = 1.0
RUSSIAN_MATCH_SCORE = 0.8

# Tag overlap: floor for any non-empty pair, remainder scaled by match ratio
OVERLAP_FLOOR = 0.3
OVERLAP_RANGE = 0.7


# =============================================================================
# Recommendation Worker
# =============================================================================

DEFAULT_BATCH_SIZE = 50
DEFAULT_INTERVAL_MINUTES = 5

RECOMMENDATION_JOB_ID = "recommendations"
