"""Scraper registry: maps job types to pipeline classes."""

import logging
from typing import Type

from compass.models.enums import JobType
from compass.scrapers.base import BaseScraper

logger = logging.getLogger(__name__)

_REGISTRY: dict[JobType, Type[BaseScraper]] = {}


def register_scraper(job_type: JobType):
    """Decorator to register the pipeline class for a job type."""
    def decorator(cls: Type[BaseScraper]):
        cls.job_type = job_type
        _REGISTRY[job_type] = cls
        logger.debug(f"Registered scraper for job type: {job_type.value}")
        return cls
    return decorator


def get_scraper_class(job_type: JobType) -> Type[BaseScraper] | None:
    return _REGISTRY.get(JobType(job_type))


def list_job_types() -> list[JobType]:
    return list(_REGISTRY.keys())
