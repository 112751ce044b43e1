"""
Recommendation repository.

The recomputation engine is the only writer; everything else reads.
"""

from sqlalchemy.orm import selectinload

from admissions_match.constants import SCORING_VERSION
from admissions_match.models import Recommendation
from admissions_match.scoring import MatchResult

from .base import BaseRepository


class RecommendationRepository(BaseRepository[Recommendation]):
    """Repository for Recommendation operations keyed by (student_id, university_id)."""

    model = Recommendation

    def get(self, student_id: int, university_id: int) -> Recommendation | None:
        """Get the row for a student/university pair."""
        return (
            self.session.query(Recommendation)
            .filter(
                Recommendation.student_id == student_id,
                Recommendation.university_id == university_id,
            )
            .first()
        )

    def upsert(self, student_id: int, university_id: int, result: MatchResult) -> Recommendation:
        """
        Create or fully overwrite the row for a pair.

        Score, breakdown and scoring version are replaced, never merged.
        """
        recommendation = self.get(student_id, university_id)

        if not recommendation:
            recommendation = Recommendation(student_id=student_id, university_id=university_id)
            self.session.add(recommendation)

        recommendation.match_score = result.score
        recommendation.breakdown = result.breakdown.model_dump()
        recommendation.scoring_version = SCORING_VERSION

        self.session.flush()
        return recommendation

    def list_for_student(self, student_id: int, limit: int = 10) -> list[Recommendation]:
        """Top recommendations for a student, best match first."""
        return (
            self.session.query(Recommendation)
            .options(selectinload(Recommendation.university))
            .filter(Recommendation.student_id == student_id)
            .order_by(Recommendation.match_score.desc(), Recommendation.university_id)
            .limit(limit)
            .all()
        )

    def list_for_university(self, university_id: int, limit: int = 10) -> list[Recommendation]:
        """Top recommended students for a university, best match first."""
        return (
            self.session.query(Recommendation)
            .options(selectinload(Recommendation.student))
            .filter(Recommendation.university_id == university_id)
            .order_by(Recommendation.match_score.desc(), Recommendation.student_id)
            .limit(limit)
            .all()
        )
