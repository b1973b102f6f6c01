"""Job scheduling and processing tasks.

The worker consumes PENDING jobs one at a time: claim (RUNNING), run the
pipeline registered for the job type, then record COMPLETED or FAILED.
"""

import logging

from sqlalchemy.orm import Session

from compass.tasks.celery_app import celery_app
from compass.models.base import SyncSessionLocal
from compass.services.job_scheduler import claim_next_job, complete_job, fail_job, schedule_all_jobs

logger = logging.getLogger(__name__)


def run_next_job(db: Session) -> dict:
    """Claim and run the oldest pending job. Returns a summary dict."""
    job = claim_next_job(db)
    if not job:
        logger.info("No pending jobs found.")
        return {"message": "No pending jobs"}

    try:
        # Import scrapers package to trigger @register_scraper decorators
        import compass.scrapers  # noqa: F401
        from compass.scrapers.registry import get_scraper_class

        scraper_class = get_scraper_class(job.type)
        if not scraper_class:
            raise ValueError(f"Unknown job type: {job.type.value}")

        summary = scraper_class(db=db).run()
    except Exception as e:
        db.rollback()
        fail_job(db, job, str(e))
        return {"job_id": str(job.id), "status": "failed", "error": str(e)}

    complete_job(db, job, f"Successfully completed: {summary}")
    return {"job_id": str(job.id), "status": "completed", "summary": summary}


@celery_app.task(name="compass.tasks.job_tasks.process_next_job")
def process_next_job():
    """Process one pending job, if any."""
    db = SyncSessionLocal()
    try:
        return run_next_job(db)
    finally:
        db.close()


@celery_app.task(name="compass.tasks.job_tasks.schedule_daily_jobs")
def schedule_daily_jobs():
    """Enqueue one job per type unless already pending/running."""
    db = SyncSessionLocal()
    try:
        result = schedule_all_jobs(db)
        return {"message": result.message, "details": result.details, "has_error": result.has_error}
    finally:
        db.close()
