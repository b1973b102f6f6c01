"""Scraper package: import all scrapers to trigger @register_scraper decorators."""

from compass.scrapers.uh_calendar import UHCalendarScraper  # noqa: F401
from compass.scrapers.club_sheet import ClubSheetScraper  # noqa: F401
