"""
Background job functions for the recommendation scheduler.

Includes:
- Recommendation worker (dirty-set scan + per-student recalculation)
"""

from __future__ import annotations

from typing import Optional

from sqlalchemy.exc import SQLAlchemyError

from ..config import get_settings
from ..db import db
from ..logging import get_logger, log_duration
from ..repositories import StudentRepository
from ..services import PendingRecalculationSet, RecalculationService

logger = get_logger("scheduler.jobs")


@log_duration("recommendation_worker")
def run_recommendation_worker(batch_size: Optional[int] = None) -> int:
    """
    Recalculate one bounded batch of pending students.

    Each student runs in its own transaction. A failure for one student is
    logged and leaves that student pending; the rest of the batch continues.
    A failure of the scan itself propagates.

    Args:
        batch_size: Override for the configured batch size.

    Returns:
        Number of students successfully recalculated in this run.
    """
    limit = get_settings().recommendation_batch_size if batch_size is None else batch_size

    with db.session() as session:
        student_ids = PendingRecalculationSet(StudentRepository(session)).dequeue_batch(limit)

    processed = 0
    failed = 0
    for student_id in student_ids:
        try:
            with db.session() as session:
                RecalculationService.from_session(session).recalculate_for_student(student_id)
            processed += 1
        except SQLAlchemyError as exc:
            failed += 1
            logger.error(
                "recalculation_failed",
                student_id=student_id,
                error=str(exc),
                error_type=type(exc).__name__,
            )

    if student_ids:
        logger.info(
            "recommendation_worker_run",
            selected=len(student_ids),
            processed=processed,
            failed=failed,
        )
    return processed


def run_recommendation_job(batch_size: Optional[int] = None) -> None:
    """
    Scheduled entry point. A failed tick is logged and retried on the next one.
    """
    try:
        run_recommendation_worker(batch_size=batch_size)
    except Exception as exc:
        logger.error(
            "recommendation_worker_failed",
            error=str(exc),
            error_type=type(exc).__name__,
        )
