"""
Repository pattern implementations for data access.

Repositories also act as the adapter that turns ORM rows into the
immutable snapshots consumed by the scorer.

Usage:
    from admissions_match.repositories import StudentRepository
    from admissions_match.db import db

    with db.session() as session:
        snapshot = StudentRepository(session).get_snapshot(student_id)
"""

from .base import BaseRepository
from .recommendation_repository import RecommendationRepository
from .student_repository import StudentRepository
from .university_repository import UniversityRepository

__all__ = [
    "BaseRepository",
    "StudentRepository",
    "UniversityRepository",
    "RecommendationRepository",
]
