"""
Recommendation recalculation service.

Recomputes one student's match score against every verified university,
overwrites the Recommendation rows, and clears the student's flag last.
"""

from collections.abc import Callable

from sqlalchemy.orm import Session

from admissions_match.db import db
from admissions_match.logging import get_logger, log_context
from admissions_match.repositories import (
    RecommendationRepository,
    StudentRepository,
    UniversityRepository,
)
from admissions_match.scoring import (
    MatchResult,
    StudentSnapshot,
    UniversitySnapshot,
    calculate_match_score,
)

logger = get_logger("services.recalculation")

Scorer = Callable[[StudentSnapshot, UniversitySnapshot], MatchResult]


class RecalculationService:
    """
    Orchestrates scoring for a single student.

    Usage:
        with db.session() as session:
            service = RecalculationService.from_session(session)
            service.recalculate_for_student(student_id)
    """

    def __init__(
        self,
        students: StudentRepository,
        universities: UniversityRepository,
        recommendations: RecommendationRepository,
        scorer: Scorer = calculate_match_score,
    ):
        self.students = students
        self.universities = universities
        self.recommendations = recommendations
        self.scorer = scorer

    @classmethod
    def from_session(cls, session: Session) -> "RecalculationService":
        return cls(
            StudentRepository(session),
            UniversityRepository(session),
            RecommendationRepository(session),
        )

    def recalculate_for_student(self, student_id: int) -> int | None:
        """
        Recompute and upsert recommendations for one student.

        A missing student is a no-op. Any persistence error propagates before
        the flag is cleared, so the student stays pending and is retried.

        Args:
            student_id: Student to recompute.

        Returns:
            Number of recommendations written, or None if the student is gone.
        """
        with log_context(student_id=student_id):
            student = self.students.get_snapshot(student_id)
            if student is None:
                logger.info("recalculation_skipped_missing_student")
                return None

            universities = self.universities.list_verified_snapshots()
            for university in universities:
                result = self.scorer(student, university)
                self.recommendations.upsert(student_id, university.id, result)

            self.students.clear_needs_recalculation(student_id)
            logger.debug("recalculation_complete", universities=len(universities))
            return len(universities)


def recalculate_for_student(student_id: int) -> int | None:
    """
    Recompute one student in its own transaction.

    Safe to call from any profile-update path as an eager refresh; the
    periodic worker picks up anything this does not.
    """
    with db.session() as session:
        return RecalculationService.from_session(session).recalculate_for_student(student_id)
