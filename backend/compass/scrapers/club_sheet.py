"""Registered-organization sheet importer (CLUB_SCRAPE pipeline).

Reads the published CSV export of the club spreadsheet. Row 1 is the header;
clubs are upserted by name.
"""

import csv
import io
import logging

from compass.models.club import Club
from compass.models.enums import ContentStatus, JobType
from compass.scrapers.base import BaseScraper
from compass.scrapers.registry import register_scraper
from compass.services.category_tagger import get_or_create_category, standardize_club_type

logger = logging.getLogger(__name__)

HEADER_NAME = "Name of Organization"
HEADER_CATEGORY = "Type"
HEADER_CONTACT_NAME = "Main Contact Person"
HEADER_CONTACT_EMAIL = "Contact Person's Email"
HEADER_PURPOSE = "Purpose"


def _cell(row: dict, header: str) -> str | None:
    value = (row.get(header) or "").strip()
    return value or None


@register_scraper(JobType.CLUB_SCRAPE)
class ClubSheetScraper(BaseScraper):

    def scrape(self) -> list[dict]:
        text = self.fetch(self.settings.club_sheet_csv_url)
        reader = csv.DictReader(io.StringIO(text))
        # Spreadsheet row numbers: data starts on row 2
        return [{"row": index, **row} for index, row in enumerate(reader, start=2)]

    def normalize(self, raw: dict) -> dict | None:
        name = _cell(raw, HEADER_NAME)
        purpose = _cell(raw, HEADER_PURPOSE)
        if not name:
            logger.warning(f"[Row {raw['row']}] Skipping row: missing '{HEADER_NAME}'")
            return None
        if not purpose:
            logger.warning(f"[Row {raw['row']}] Skipping club '{name}': missing '{HEADER_PURPOSE}'")
            return None

        return {
            "name": name,
            "purpose": purpose,
            "category_description": _cell(raw, HEADER_CATEGORY),
            "primary_contact_name": _cell(raw, HEADER_CONTACT_NAME),
            "contact_email": _cell(raw, HEADER_CONTACT_EMAIL),
        }

    def save(self, data: dict) -> str:
        club = self.db.query(Club).filter(Club.name == data["name"]).first()
        if club:
            for key, value in data.items():
                setattr(club, key, value)
            result = "updated"
        else:
            club = Club(**data, status=ContentStatus.PENDING)
            self.db.add(club)
            result = "new"

        standard = standardize_club_type(data["category_description"])
        if standard and all(c.name != standard for c in club.categories):
            club.categories.append(get_or_create_category(self.db, standard))

        self.db.commit()
        return result
