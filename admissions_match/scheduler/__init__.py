"""
Scheduler initialization and management.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Optional

from apscheduler.jobstores.memory import MemoryJobStore
from apscheduler.jobstores.sqlalchemy import SQLAlchemyJobStore
from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.schedulers.base import BaseScheduler
from apscheduler.schedulers.blocking import BlockingScheduler
from apscheduler.triggers.interval import IntervalTrigger

from ..config import get_settings
from ..constants import RECOMMENDATION_JOB_ID
from ..logging import get_logger
from . import jobs

logger = get_logger("scheduler")

JOB_DEFINITIONS = {
    RECOMMENDATION_JOB_ID: {
        "func": jobs.run_recommendation_job,
        "description": "Recalculate recommendations for students flagged as stale",
    },
}

_scheduler: Optional[BackgroundScheduler] = None


def _build_scheduler(scheduler_cls: type[BaseScheduler] = BackgroundScheduler) -> BaseScheduler:
    settings = get_settings()
    if settings.scheduler_jobstore_url:
        jobstore = SQLAlchemyJobStore(url=settings.scheduler_jobstore_url)
    else:
        jobstore = MemoryJobStore()
    return scheduler_cls(jobstores={"default": jobstore}, timezone="UTC")


def _interval(minutes: int) -> IntervalTrigger:
    return IntervalTrigger(minutes=minutes, timezone="UTC")


def get_scheduler() -> BackgroundScheduler:
    global _scheduler
    if _scheduler is None:
        _scheduler = _build_scheduler()
    return _scheduler


def schedule_default_jobs(scheduler: BaseScheduler) -> None:
    settings = get_settings()
    # replace_existing only applies to started schedulers
    if scheduler.get_job(RECOMMENDATION_JOB_ID):
        scheduler.remove_job(RECOMMENDATION_JOB_ID)
    scheduler.add_job(
        jobs.run_recommendation_job,
        _interval(settings.recommendation_interval_minutes),
        id=RECOMMENDATION_JOB_ID,
        replace_existing=True,
        misfire_grace_time=settings.scheduler_misfire_grace_time,
        max_instances=1,
        coalesce=True,
    )


def start_scheduler() -> bool:
    """Start the background scheduler unless ENABLE_SCHEDULER is off. Returns whether it runs."""
    if not get_settings().enable_scheduler:
        logger.info("scheduler_disabled")
        return False
    scheduler = get_scheduler()
    if scheduler.running:
        return True
    schedule_default_jobs(scheduler)
    scheduler.start()
    logger.info("scheduler_started", jobs=len(scheduler.get_jobs()))
    return True


def shutdown_scheduler(wait: bool = True) -> None:
    global _scheduler
    if _scheduler is not None and _scheduler.running:
        _scheduler.shutdown(wait=wait)
        logger.info("scheduler_shut_down")
    _scheduler = None


def run_worker_forever() -> None:
    """Run the recommendation job on a blocking scheduler until interrupted."""
    scheduler = _build_scheduler(BlockingScheduler)
    schedule_default_jobs(scheduler)
    logger.info(
        "worker_scheduled",
        interval_minutes=get_settings().recommendation_interval_minutes,
    )
    try:
        scheduler.start()
    except (KeyboardInterrupt, SystemExit):
        logger.info("worker_stopped")


def list_jobs() -> list[dict[str, Any]]:
    items = []
    for job in get_scheduler().get_jobs():
        next_run_time = getattr(job, "next_run_time", None)
        items.append(
            {
                "id": job.id,
                "name": job.name,
                "next_run_time": next_run_time.isoformat() if next_run_time else None,
                "trigger": str(job.trigger),
                "description": JOB_DEFINITIONS.get(job.id, {}).get("description"),
            }
        )
    return items


def trigger_job(job_id: str, **kwargs) -> None:
    job_def = JOB_DEFINITIONS.get(job_id)
    if not job_def:
        raise ValueError(f"Unknown job_id: {job_id}")
    get_scheduler().add_job(
        job_def["func"],
        "date",
        run_date=datetime.now(timezone.utc),
        kwargs=kwargs,
    )


def reschedule_job(job_id: str, minutes: int) -> None:
    if job_id not in JOB_DEFINITIONS:
        raise ValueError(f"Unknown job_id: {job_id}")
    if minutes < 1:
        raise ValueError(f"minutes must be >= 1 (got {minutes})")
    get_scheduler().reschedule_job(job_id, trigger=_interval(minutes))
