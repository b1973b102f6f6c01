"""Job scheduling, deduplication and worker-side lifecycle transitions.

A job type may have at most one open (PENDING or RUNNING) job. The scheduler
checks for an open job before inserting; the ``uq_jobs_open_type`` partial
unique index rejects the insert if a concurrent caller got there first, and
that rejection is reported the same way as a hit on the check.

Lifecycle: PENDING -> RUNNING -> COMPLETED | FAILED. Terminal jobs are kept.
"""

import logging
import uuid
from dataclasses import dataclass, field

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from compass.models.base import utcnow
from compass.models.enums import OPEN_JOB_STATUSES, JobStatus, JobType
from compass.models.job import Job
from compass.services.errors import InvalidJobTransitionError

logger = logging.getLogger(__name__)


@dataclass
class ScheduleOutcome:
    job_type: JobType
    created: bool
    message: str
    job_id: uuid.UUID | None = None


@dataclass
class BulkScheduleResult:
    outcomes: list[ScheduleOutcome] = field(default_factory=list)
    details: list[str] = field(default_factory=list)
    has_error: bool = False

    @property
    def message(self) -> str:
        suffix = "Errors occurred." if self.has_error else "All tasks scheduled successfully."
        return f"Daily scheduling finished. {suffix}"


def find_open_job(db: Session, job_type: JobType) -> Job | None:
    """Return the PENDING/RUNNING job for this type, if any."""
    return (
        db.query(Job)
        .filter(Job.type == job_type, Job.status.in_(OPEN_JOB_STATUSES))
        .order_by(Job.created_at.asc())
        .first()
    )


def _already_open(job_type: JobType, job: Job) -> ScheduleOutcome:
    message = f"{job_type.value} job already {job.status.value.lower()}. Skipping automatic schedule."
    logger.info(message)
    return ScheduleOutcome(job_type=job_type, created=False, message=message, job_id=job.id)


def schedule_job_if_not_exists(db: Session, job_type: JobType) -> ScheduleOutcome:
    """Enqueue a PENDING job for ``job_type`` unless one is already open.

    Store faults are rolled back and re-raised; the caller reports them.
    """
    job_type = JobType(job_type)

    existing = find_open_job(db, job_type)
    if existing:
        return _already_open(job_type, existing)

    job = Job(id=uuid.uuid4(), type=job_type, status=JobStatus.PENDING, created_at=utcnow())
    db.add(job)
    try:
        db.commit()
    except IntegrityError:
        # Lost the race against another scheduler; the index kept one open job.
        db.rollback()
        existing = find_open_job(db, job_type)
        if existing is None:
            raise
        return _already_open(job_type, existing)
    except SQLAlchemyError:
        db.rollback()
        raise

    message = f"Successfully scheduled {job_type.value} job with ID: {job.id}"
    logger.info(message)
    return ScheduleOutcome(job_type=job_type, created=True, message=message, job_id=job.id)


def schedule_all_jobs(db: Session) -> BulkScheduleResult:
    """Schedule every job type, continuing past per-type failures."""
    logger.info("Daily scheduler triggered...")
    result = BulkScheduleResult()

    for job_type in JobType:
        try:
            outcome = schedule_job_if_not_exists(db, job_type)
        except Exception as e:
            logger.exception("Scheduling %s failed", job_type.value)
            db.rollback()
            result.details.append(f"Scheduling {job_type.value} failed: {e}")
            result.has_error = True
            continue
        result.outcomes.append(outcome)
        result.details.append(outcome.message)

    logger.info("Daily scheduling finished (errors=%s)", result.has_error)
    return result


def list_recent_jobs(db: Session, limit: int = 10) -> list[Job]:
    """Most recent jobs first. Read-only."""
    return db.query(Job).order_by(Job.created_at.desc()).limit(limit).all()


# ---------------------------------------------------------------------------
# Worker side
# ---------------------------------------------------------------------------


def _transition(job: Job, expected: JobStatus, target: JobStatus) -> None:
    if job.status != expected:
        raise InvalidJobTransitionError(
            f"Job {job.id} cannot move from {job.status.value} to {target.value}"
        )
    job.status = target


def claim_next_job(db: Session) -> Job | None:
    """Move the oldest PENDING job to RUNNING and return it."""
    job = (
        db.query(Job)
        .filter(Job.status == JobStatus.PENDING)
        .order_by(Job.created_at.asc())
        .with_for_update(skip_locked=True)
        .first()
    )
    if not job:
        return None

    _transition(job, JobStatus.PENDING, JobStatus.RUNNING)
    job.started_at = utcnow()
    db.commit()
    logger.info("Claimed job %s of type %s", job.id, job.type.value)
    return job


def complete_job(db: Session, job: Job, message: str = "Successfully completed") -> Job:
    _transition(job, JobStatus.RUNNING, JobStatus.COMPLETED)
    job.ended_at = utcnow()
    job.result = {"message": message}
    db.commit()
    logger.info("Job %s completed", job.id)
    return job


def fail_job(db: Session, job: Job, error: str) -> Job:
    _transition(job, JobStatus.RUNNING, JobStatus.FAILED)
    job.ended_at = utcnow()
    job.result = {"error": error[:2000]}
    db.commit()
    logger.error("Job %s failed: %s", job.id, error)
    return job
