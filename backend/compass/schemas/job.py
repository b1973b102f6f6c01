"""Pydantic schemas for scheduled jobs."""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict

from compass.models.enums import JobStatus, JobType


class JobRead(BaseModel):
    """Job row as shown on the admin dashboard."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    type: JobType
    status: JobStatus
    created_at: datetime
    started_at: datetime | None = None
    ended_at: datetime | None = None
    result: dict[str, Any] | None = None


class SchedulerResponse(BaseModel):
    message: str
    details: list[str]


class ImportResponse(BaseModel):
    message: str
    job_id: UUID
    created: bool
