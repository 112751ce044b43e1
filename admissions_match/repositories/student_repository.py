"""Student profile repository, including the recalculation flag."""

from admissions_match.models import StudentProfile
from admissions_match.scoring import StudentSnapshot

from .base import BaseRepository


class StudentRepository(BaseRepository[StudentProfile]):
    """Repository for StudentProfile operations."""

    model = StudentProfile

    def get_snapshot(self, student_id: int) -> StudentSnapshot | None:
        """Load a student as an immutable scoring snapshot, or None if missing."""
        student = self.get_by_id(student_id)
        if student is None:
            return None
        return StudentSnapshot.model_validate(student)

    def list_dirty_ids(self, limit: int) -> list[int]:
        """IDs of up to ``limit`` students flagged for recalculation, ordered by ID."""
        rows = (
            self.session.query(StudentProfile.id)
            .filter(StudentProfile.needs_recalculation.is_(True))
            .order_by(StudentProfile.id)
            .limit(limit)
            .all()
        )
        return [row.id for row in rows]

    def count_dirty(self) -> int:
        return self.count(needs_recalculation=True)

    def _set_flag(self, value: bool, student_id: int | None = None) -> int:
        query = self.session.query(StudentProfile)
        if student_id is not None:
            query = query.filter(StudentProfile.id == student_id)
        updated = query.update(
            {StudentProfile.needs_recalculation: value}, synchronize_session="fetch"
        )
        self.session.flush()
        return updated

    def mark_needs_recalculation(self, student_id: int) -> bool:
        """Flag one student. Returns False when the student does not exist."""
        return self._set_flag(True, student_id) > 0

    def mark_all_needs_recalculation(self) -> int:
        """Flag every student, e.g. after a university-side change."""
        return self._set_flag(True)

    def clear_needs_recalculation(self, student_id: int) -> bool:
        return self._set_flag(False, student_id) > 0
