"""
Admissions Match Core Library.

Match scoring between students and universities, persisted recommendations,
and the dirty-flag driven recomputation worker.

Usage:
    # Database
    from admissions_match.db import db
    from admissions_match.models import StudentProfile, UniversityProfile, Recommendation
    from admissions_match.repositories import RecommendationRepository

    # Scoring
    from admissions_match.scoring import calculate_match_score

    # Recomputation
    from admissions_match.services import recalculate_for_student
    from admissions_match.scheduler.jobs import run_recommendation_worker

    # Config / Logging
    from admissions_match.config import get_settings
    from admissions_match.logging import get_logger, configure_logging
"""

__version__ = "1.0.0"

# Lazy imports to avoid circular dependencies
# Users should import directly from submodules:
#   from admissions_match.db import db
#   from admissions_match.config import get_settings
#   from admissions_match.logging import get_logger
