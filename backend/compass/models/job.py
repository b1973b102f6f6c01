"""Job model: one row per scheduled scrape/import, kept as history."""

from sqlalchemy import Column, DateTime, Index, JSON, func, text
from sqlalchemy.dialects.postgresql import JSONB

from compass.models.base import Base, UUIDMixin, utcnow
from compass.models.enums import JobStatus, JobType, enum_column_type

_OPEN_STATUS_CLAUSE = text("status IN ('PENDING', 'RUNNING')")


class Job(UUIDMixin, Base):
    __tablename__ = "jobs"

    type = Column(enum_column_type(JobType, "job_type"), nullable=False)
    status = Column(
        enum_column_type(JobStatus, "job_status"),
        default=JobStatus.PENDING,
        nullable=False,
    )
    created_at = Column(DateTime(timezone=True), default=utcnow, server_default=func.now(), nullable=False)
    started_at = Column(DateTime(timezone=True))
    ended_at = Column(DateTime(timezone=True))
    result = Column(JSON().with_variant(JSONB(), "postgresql"))  # {"message": ...} or {"error": ...}

    __table_args__ = (
        Index("idx_jobs_created", "created_at"),
        # At most one open job per type
        Index(
            "uq_jobs_open_type",
            "type",
            unique=True,
            postgresql_where=_OPEN_STATUS_CLAUSE,
            sqlite_where=_OPEN_STATUS_CLAUSE,
        ),
    )

    def __repr__(self) -> str:
        return f"<Job {self.id} {self.type.value} {self.status.value}>"
