"""
University-related SQLAlchemy models.
"""

from datetime import datetime, timezone
from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import JSON, Boolean, DateTime, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base

if TYPE_CHECKING:
    from .recommendation import Recommendation


class UniversityProfile(Base):
    """
    University profile. Only verified universities take part in scoring.
    """

    __tablename__ = "university_profiles"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    university_name: Mapped[str] = mapped_column(String(255))
    country: Mapped[str | None] = mapped_column(String(128), index=True)
    city: Mapped[str | None] = mapped_column(String(128))
    verified: Mapped[bool] = mapped_column(Boolean, default=False, index=True)
    preferred_skills: Mapped[list[str]] = mapped_column(JSON, default=list)
    preferred_interests: Mapped[list[str]] = mapped_column(JSON, default=list)

    created_at: Mapped[datetime] = mapped_column(
        DateTime, default=lambda: datetime.now(timezone.utc)
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    # Relationships
    programs: Mapped[list["Program"]] = relationship(
        "Program", back_populates="university", cascade="all, delete-orphan"
    )
    scholarships: Mapped[list["Scholarship"]] = relationship(
        "Scholarship", back_populates="university", cascade="all, delete-orphan"
    )
    recommendations: Mapped[list["Recommendation"]] = relationship(
        "Recommendation", back_populates="university", cascade="all, delete-orphan"
    )


class Program(Base):
    """Study program offered by a university."""

    __tablename__ = "programs"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    university_id: Mapped[int] = mapped_column(
        ForeignKey("university_profiles.id", ondelete="CASCADE"), index=True
    )
    name: Mapped[str] = mapped_column(String(255))
    degree_level: Mapped[str | None] = mapped_column(String(64))
    field: Mapped[str] = mapped_column(String(255), index=True)
    language: Mapped[str | None] = mapped_column(String(128))
    tuition_fee: Mapped[Decimal | None] = mapped_column(Numeric(12, 2))

    university: Mapped["UniversityProfile"] = relationship(
        "UniversityProfile", back_populates="programs"
    )


class Scholarship(Base):
    """Scholarship offered by a university."""

    __tablename__ = "scholarships"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    university_id: Mapped[int] = mapped_column(
        ForeignKey("university_profiles.id", ondelete="CASCADE"), index=True
    )
    name: Mapped[str] = mapped_column(String(255))
    coverage_percent: Mapped[int | None] = mapped_column(Integer)
    eligibility: Mapped[str | None] = mapped_column(Text)

    university: Mapped["UniversityProfile"] = relationship(
        "UniversityProfile", back_populates="scholarships"
    )
