"""Closed enumerations shared by models, services and schemas."""

import enum

from sqlalchemy import Enum


class ContentStatus(str, enum.Enum):
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


class JobType(str, enum.Enum):
    EVENT_SCRAPE = "EVENT_SCRAPE"
    CLUB_SCRAPE = "CLUB_SCRAPE"


class JobStatus(str, enum.Enum):
    PENDING = "PENDING"
    RUNNING = "RUNNING"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"


class AttendanceType(str, enum.Enum):
    IN_PERSON = "IN_PERSON"
    ONLINE = "ONLINE"
    HYBRID = "HYBRID"


# Statuses the scheduler treats as "already scheduled"
OPEN_JOB_STATUSES = (JobStatus.PENDING, JobStatus.RUNNING)
TERMINAL_JOB_STATUSES = (JobStatus.COMPLETED, JobStatus.FAILED)


def enum_column_type(enum_cls: type[enum.Enum], name: str) -> Enum:
    """VARCHAR-backed enum type so the same DDL runs on PostgreSQL and SQLite."""
    return Enum(enum_cls, name=name, native_enum=False, length=20, validate_strings=True)
