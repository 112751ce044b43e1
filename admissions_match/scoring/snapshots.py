"""
Immutable inputs and outputs of the match scorer.

Snapshots are plain value types assembled by the repository layer, so the
scorer never touches a database session.
"""

from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class _Snapshot(BaseModel):
    model_config = ConfigDict(frozen=True, from_attributes=True)


def _normalize_tags(value) -> frozenset[str]:
    if not value:
        return frozenset()
    return frozenset(tag.strip().lower() for tag in value if tag and tag.strip())


# =============================================================================
# Inputs
# =============================================================================


class StudentSnapshot(_Snapshot):
    """Read-only view of the student fields used for scoring."""

    id: Optional[int] = None
    gpa: Optional[float] = None
    country: Optional[str] = None
    language_level: Optional[str] = None
    grade_level: Optional[str] = None
    skills: frozenset[str] = frozenset()
    interests: frozenset[str] = frozenset()
    hobbies: frozenset[str] = frozenset()

    @field_validator("skills", "interests", "hobbies", mode="before")
    @classmethod
    def normalize_tags(cls, v):
        return _normalize_tags(v)


class ProgramSnapshot(_Snapshot):
    field: str = ""
    language: Optional[str] = None
    tuition_fee: Optional[Decimal] = None


class ScholarshipSnapshot(_Snapshot):
    eligibility: Optional[str] = None


class UniversitySnapshot(_Snapshot):
    """Read-only view of a university with its programs and scholarships resolved."""

    id: Optional[int] = None
    country: Optional[str] = None
    city: Optional[str] = None
    verified: bool = False
    programs: tuple[ProgramSnapshot, ...] = ()
    scholarships: tuple[ScholarshipSnapshot, ...] = ()
    preferred_skills: frozenset[str] = frozenset()
    preferred_interests: frozenset[str] = frozenset()

    @field_validator("preferred_skills", "preferred_interests", mode="before")
    @classmethod
    def normalize_tags(cls, v):
        return _normalize_tags(v)

    @property
    def program_fields(self) -> frozenset[str]:
        """Lower-cased program fields, used as the skills pool when programs exist."""
        return _normalize_tags(p.field for p in self.programs)


# =============================================================================
# Outputs
# =============================================================================


class CriteriaOverlap(_Snapshot):
    """The three tag-overlap scores averaged into criteria_match."""

    skills: float = Field(ge=0.0, le=1.0)
    interests: float = Field(ge=0.0, le=1.0)
    hobbies: float = Field(ge=0.0, le=1.0)


class MatchBreakdown(_Snapshot):
    """Sub-scores, each in [0, 1], whose weighted sum is the match score."""

    field_match: float = Field(ge=0.0, le=1.0)
    gpa: float = Field(ge=0.0, le=1.0)
    language: float = Field(ge=0.0, le=1.0)
    tuition_fit: float = Field(ge=0.0, le=1.0)
    scholarship_fit: float = Field(ge=0.0, le=1.0)
    location: float = Field(ge=0.0, le=1.0)
    criteria_match: float = Field(ge=0.0, le=1.0)
    criteria_overlap: CriteriaOverlap


class MatchResult(_Snapshot):
    score: float = Field(ge=0.0, le=1.0)
    breakdown: MatchBreakdown
