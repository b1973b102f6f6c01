"""Base scraper abstract class for job pipelines."""

import logging
import time
from abc import ABC, abstractmethod
from typing import Any

import httpx
from sqlalchemy.orm import Session

from compass.config import Settings, get_settings
from compass.models.enums import JobType

logger = logging.getLogger(__name__)


class BaseScraper(ABC):
    """Abstract base class for the pipeline behind a JobType.

    Subclasses must implement:
        scrape() -> list[dict]        - fetch raw records from the source
        normalize(raw) -> dict | None - map a raw record to model fields, None to skip
        save(data) -> str             - upsert, returning 'new', 'updated' or 'existing'
    """

    job_type: JobType
    request_delay: float = 0.0

    def __init__(self, db: Session, settings: Settings | None = None, client: httpx.Client | None = None):
        self.db = db
        self.settings = settings or get_settings()
        self._owns_client = client is None
        self.client = client or httpx.Client(
            timeout=self.settings.scrape_timeout,
            follow_redirects=True,
            headers={"User-Agent": self.settings.scraper_user_agent},
        )

    @abstractmethod
    def scrape(self) -> list[dict]:
        ...

    @abstractmethod
    def normalize(self, raw: dict) -> dict | None:
        ...

    @abstractmethod
    def save(self, data: dict) -> str:
        ...

    def finalize(self) -> dict[str, Any]:
        """Post-processing after all records are saved."""
        return {}

    def fetch(self, url: str) -> str:
        if self.request_delay:
            time.sleep(self.request_delay)
        logger.info(f"Fetching URL: {url}")
        resp = self.client.get(url)
        resp.raise_for_status()
        return resp.text

    def close(self) -> None:
        """Close the HTTP client if this scraper created it."""
        if self._owns_client and not self.client.is_closed:
            self.client.close()

    def run(self) -> dict[str, Any]:
        """Execute the full cycle: fetch, normalize, save, finalize."""
        try:
            return self._run()
        finally:
            self.close()

    def _run(self) -> dict[str, Any]:
        raw_records = self.scrape()
        logger.info(f"[{self.job_type.value}] Fetched {len(raw_records)} raw records")

        summary = {"found": len(raw_records), "new": 0, "updated": 0, "skipped": 0, "failed": 0}
        for raw in raw_records:
            try:
                normalized = self.normalize(raw)
                if normalized is None:
                    summary["skipped"] += 1
                    continue
                result = self.save(normalized)
                if result in ("new", "updated"):
                    summary[result] += 1
            except Exception as e:
                self.db.rollback()
                summary["failed"] += 1
                logger.warning(f"[{self.job_type.value}] Failed to process record: {e}")

        summary.update(self.finalize())
        return summary
