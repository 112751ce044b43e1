"""
Unified SQLAlchemy models for Admissions Match.

Single source of truth for all database models.

Usage:
    from admissions_match.models import StudentProfile, UniversityProfile, Recommendation
"""

from .base import Base
from .recommendation import Recommendation
from .student import StudentProfile
from .university import Program, Scholarship, UniversityProfile

__all__ = [
    # Base
    "Base",
    # Student
    "StudentProfile",
    # University
    "UniversityProfile",
    "Program",
    "Scholarship",
    # Output
    "Recommendation",
]
