"""Celery application configuration and beat schedule."""

from celery import Celery
from celery.schedules import crontab

from compass.config import get_settings

settings = get_settings()

celery_app = Celery(
    "compass",
    broker=settings.redis_url,
    backend=settings.redis_url,
    include=[
        "compass.tasks.job_tasks",
        "compass.tasks.maintenance_tasks",
    ],
)

celery_app.conf.update(
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    timezone="Pacific/Honolulu",
    task_track_started=True,
    task_time_limit=1800,
    task_soft_time_limit=1740,
    worker_prefetch_multiplier=1,
    task_acks_late=True,
    task_reject_on_worker_lost=True,
)

celery_app.conf.beat_schedule = {
    "schedule-daily-jobs": {
        "task": "compass.tasks.job_tasks.schedule_daily_jobs",
        "schedule": crontab(minute=0, hour=2),
    },
    "process-next-job": {
        "task": "compass.tasks.job_tasks.process_next_job",
        "schedule": crontab(minute="*/10"),
    },
    "remove-past-events": {
        "task": "compass.tasks.maintenance_tasks.remove_past_events",
        "schedule": crontab(minute=30, hour=3),
    },
}
