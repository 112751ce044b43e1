"""
Recommendation SQLAlchemy model.
"""

from datetime import datetime, timezone
from typing import TYPE_CHECKING

from sqlalchemy import JSON, DateTime, Float, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base

if TYPE_CHECKING:
    from .student import StudentProfile
    from .university import UniversityProfile


class Recommendation(Base):
    """
    Match score for one (student, university) pair.

    Written only by the recomputation engine. Each recomputation overwrites
    the row in place; rows are never appended or deleted here.
    """

    __tablename__ = "recommendations"
    __table_args__ = (
        UniqueConstraint("student_id", "university_id", name="uq_recommendations_student_university"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    student_id: Mapped[int] = mapped_column(
        ForeignKey("student_profiles.id", ondelete="CASCADE"), index=True
    )
    university_id: Mapped[int] = mapped_column(
        ForeignKey("university_profiles.id", ondelete="CASCADE"), index=True
    )
    match_score: Mapped[float] = mapped_column(Float)
    breakdown: Mapped[dict] = mapped_column(JSON)
    scoring_version: Mapped[str] = mapped_column(String(32))

    created_at: Mapped[datetime] = mapped_column(
        DateTime, default=lambda: datetime.now(timezone.utc)
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    # Relationships
    student: Mapped["StudentProfile"] = relationship(
        "StudentProfile", back_populates="recommendations"
    )
    university: Mapped["UniversityProfile"] = relationship(
        "UniversityProfile", back_populates="recommendations"
    )

    def to_dict(self) -> dict:
        """Convert to dictionary for display and export."""
        return {
            "student_id": self.student_id,
            "university_id": self.university_id,
            "match_score": self.match_score,
            "breakdown": self.breakdown,
            "scoring_version": self.scoring_version,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }
