"""
Core services for the recommendation engine.

Services sit between the repositories and the scheduler/CLI entry points.
"""

from admissions_match.services.pending import PendingRecalculationSet
from admissions_match.services.recalculation_service import (
    RecalculationService,
    recalculate_for_student,
)

__all__ = [
    "PendingRecalculationSet",
    "RecalculationService",
    "recalculate_for_student",
]
