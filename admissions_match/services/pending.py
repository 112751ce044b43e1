"""
Pending recalculation set.

A work-queue view over the students' ``needs_recalculation`` flag. Profile
mutations enqueue, the worker dequeues batches, and only a successful
recalculation removes a student from the set.
"""

from admissions_match.logging import get_logger
from admissions_match.repositories import StudentRepository

logger = get_logger("services.pending")


class PendingRecalculationSet:
    """
    Students whose recommendations may be stale.

    Usage:
        with db.session() as session:
            pending = PendingRecalculationSet(StudentRepository(session))
            pending.enqueue(student_id)          # student profile changed
            pending.enqueue_all()                # university-side change
            batch = pending.dequeue_batch(50)    # worker
    """

    def __init__(self, students: StudentRepository):
        self.students = students

    def enqueue(self, student_id: int) -> bool:
        """Mark one student stale. Returns False if the student does not exist."""
        found = self.students.mark_needs_recalculation(student_id)
        if not found:
            logger.warning("enqueue_unknown_student", student_id=student_id)
        return found

    def enqueue_all(self) -> int:
        """Mark every student stale; used when a university's scoring inputs change."""
        count = self.students.mark_all_needs_recalculation()
        logger.info("enqueued_all_students", count=count)
        return count

    def dequeue_batch(self, limit: int) -> list[int]:
        """
        Return up to ``limit`` pending student IDs.

        Students stay pending until their recalculation succeeds, so a batch
        lost to a crash is simply picked up again on the next run.
        """
        if limit < 1:
            raise ValueError(f"limit must be >= 1 (got {limit})")
        return self.students.list_dirty_ids(limit)

    def size(self) -> int:
        return self.students.count_dirty()
