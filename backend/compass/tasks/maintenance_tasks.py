"""Maintenance tasks: periodic data cleanup."""

import logging

from compass.tasks.celery_app import celery_app
from compass.models.base import SyncSessionLocal
from compass.services import maintenance

logger = logging.getLogger(__name__)


@celery_app.task(name="compass.tasks.maintenance_tasks.remove_past_events")
def remove_past_events():
    """Delete events whose end time has passed."""
    db = SyncSessionLocal()
    try:
        removed = maintenance.remove_past_events(db)
        return {"removed": removed}
    finally:
        db.close()
