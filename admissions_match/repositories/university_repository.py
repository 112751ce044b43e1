"""University repository."""

from sqlalchemy.orm import selectinload

from admissions_match.models import UniversityProfile
from admissions_match.scoring import UniversitySnapshot

from .base import BaseRepository


class UniversityRepository(BaseRepository[UniversityProfile]):
    """Repository for UniversityProfile operations."""

    model = UniversityProfile

    def list_verified(self) -> list[UniversityProfile]:
        """Verified universities with programs and scholarships eagerly loaded (no N+1)."""
        return (
            self.session.query(UniversityProfile)
            .options(
                selectinload(UniversityProfile.programs),
                selectinload(UniversityProfile.scholarships),
            )
            .filter(UniversityProfile.verified.is_(True))
            .order_by(UniversityProfile.id)
            .all()
        )

    def list_verified_snapshots(self) -> list[UniversitySnapshot]:
        return [UniversitySnapshot.model_validate(u) for u in self.list_verified()]
