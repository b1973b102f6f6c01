"""Tests for the worker loop that runs scheduled jobs."""

import pytest

import compass.scrapers  # noqa: F401  registers the real pipelines
from compass.models.enums import JobStatus, JobType
from compass.models.job import Job
from compass.scrapers import registry
from compass.scrapers.base import BaseScraper
from compass.services.job_scheduler import schedule_job_if_not_exists
from compass.tasks.job_tasks import run_next_job


class FakeScraper(BaseScraper):
    job_type = JobType.EVENT_SCRAPE
    records = [{"n": 1}, {"n": 2}, {"n": None}]

    def scrape(self):
        return self.records

    def normalize(self, raw):
        return raw if raw["n"] is not None else None

    def save(self, data):
        return "new"


class BrokenScraper(FakeScraper):
    def scrape(self):
        raise RuntimeError("calendar unreachable")


@pytest.fixture
def fake_pipeline(monkeypatch):
    monkeypatch.setitem(registry._REGISTRY, JobType.EVENT_SCRAPE, FakeScraper)


def test_no_pending_jobs(db):
    assert run_next_job(db) == {"message": "No pending jobs"}


def test_runs_and_completes_job(db, fake_pipeline):
    outcome = schedule_job_if_not_exists(db, JobType.EVENT_SCRAPE)

    result = run_next_job(db)

    assert result["status"] == "completed"
    assert result["summary"] == {"found": 3, "new": 2, "updated": 0, "skipped": 1, "failed": 0}
    job = db.get(Job, outcome.job_id)
    assert job.status == JobStatus.COMPLETED
    assert job.result["message"].startswith("Successfully completed")
    assert job.started_at is not None and job.ended_at is not None


def test_failure_marks_job_failed(db, monkeypatch):
    monkeypatch.setitem(registry._REGISTRY, JobType.EVENT_SCRAPE, BrokenScraper)
    outcome = schedule_job_if_not_exists(db, JobType.EVENT_SCRAPE)

    result = run_next_job(db)

    assert result == {"job_id": str(outcome.job_id), "status": "failed", "error": "calendar unreachable"}
    db.expire_all()
    job = db.get(Job, outcome.job_id)
    assert job.status == JobStatus.FAILED
    assert job.result == {"error": "calendar unreachable"}


def test_unregistered_type_fails(db, monkeypatch):
    monkeypatch.delitem(registry._REGISTRY, JobType.CLUB_SCRAPE)
    schedule_job_if_not_exists(db, JobType.CLUB_SCRAPE)

    result = run_next_job(db)

    assert result["status"] == "failed"
    assert "Unknown job type" in result["error"]


def test_finished_job_frees_the_type(db, fake_pipeline):
    schedule_job_if_not_exists(db, JobType.EVENT_SCRAPE)
    run_next_job(db)

    assert schedule_job_if_not_exists(db, JobType.EVENT_SCRAPE).created is True


def test_every_job_type_has_a_pipeline():
    assert set(registry.list_job_types()) == set(JobType)
