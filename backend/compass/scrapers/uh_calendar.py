"""UH Manoa calendar scraper (EVENT_SCRAPE pipeline).

The calendar list page links each event as ``...?et_id=<id>``; detail pages
carry an ``#event-display`` block with an H2 title, a date/time line and
location lines separated by <br> up to the first <hr>, then description
paragraphs and "Event Sponsor" / "More Information" / "Ticket Information"
sections introduced by <strong> labels.

Calendar times are Hawaii wall-clock times and are stored as UTC.
"""

import logging
import re
from datetime import date, datetime, timezone
from urllib.parse import parse_qs, urljoin, urlparse
from zoneinfo import ZoneInfo

from bs4 import BeautifulSoup, NavigableString, Tag

from compass.models.base import utcnow
from compass.models.enums import AttendanceType, ContentStatus, JobType
from compass.models.event import Event
from compass.scrapers.base import BaseScraper
from compass.scrapers.registry import register_scraper
from compass.services.category_tagger import get_or_create_category, tag_event
from compass.services.maintenance import remove_past_events

logger = logging.getLogger(__name__)

HAWAII_TZ = ZoneInfo("Pacific/Honolulu")

_DATE_FORMATS = ("%B %d %Y", "%b %d %Y")
_DATE_ONLY_RE = re.compile(r"([A-Za-z]+ \d{1,2})(?:,?\s*(\d{4}))?")
_DATE_TIME_RANGE_RE = re.compile(
    r"(?:([A-Za-z]+ \d{1,2},?(?:\s*\d{4})?),?\s*)?"
    r"(\d{1,2}:\d{2}\s*[ap]m)\s*(?:–|-)?\s*(\d{1,2}:\d{2}\s*[ap]m)?",
    re.IGNORECASE,
)
_URL_DATE_RE = re.compile(r"/(\d{4})/(\d{2})/(\d{2})/")
_VIRTUAL_RE = re.compile(r"\b(zoom|online|virtual|webinar|hybrid|webcast|join meeting)\b", re.IGNORECASE)
_ZOOM_URL_RE = re.compile(r"https://[\w-]*\.?zoom\.us/(?:j|my|w|meeting)/[\w?=-]+", re.IGNORECASE)
_PHONE_RE = re.compile(r"\(?\d{3}\)?[-.\s]?\d{3}[-.\s]?\d{4}")
_COST_RE = re.compile(
    r"(\$\d+(?:\.\d{2})?)|(free admission)|(free event)|free and open to the public",
    re.IGNORECASE,
)
_PAGE_LINK_TEXT_RE = re.compile(r"more info|website|details|event page|register", re.IGNORECASE)


def _parse_date(text: str, year: int) -> date | None:
    text = text.replace(",", " ").strip()
    text = re.sub(r"\s+", " ", text)
    if not re.search(r"\d{4}", text):
        text = f"{text} {year}"
    for fmt in _DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    return None


def _parse_time(text: str):
    try:
        return datetime.strptime(text.replace(" ", "").lower(), "%I:%M%p").time()
    except ValueError:
        return None


def _to_utc(day: date, clock=None) -> datetime:
    local = datetime.combine(day, clock or datetime.min.time(), tzinfo=HAWAII_TZ)
    return local.astimezone(timezone.utc)


def parse_datetime_string(
    text: str | None,
    event_url: str | None = None,
    today: date | None = None,
) -> tuple[datetime | None, datetime | None, bool]:
    """Parse a calendar date/time line into (start, end, all_day).

    Handles "All day" lines, "April 3, 2025, 3:00pm - 4:30pm", lines without a
    year (current year assumed) and lines without a date (taken from a
    /YYYY/MM/DD/ segment of the event URL when present).
    """
    text = (text or "").strip()
    year = (today or date.today()).year

    if "all day" in text.lower():
        match = _DATE_ONLY_RE.search(text)
        day = _parse_date(" ".join(filter(None, match.groups())), year) if match else None
        return (_to_utc(day) if day else None), None, True

    match = _DATE_TIME_RANGE_RE.search(text)
    if not match:
        # Date only: treat as all day
        match = _DATE_ONLY_RE.search(text)
        day = _parse_date(" ".join(filter(None, match.groups())), year) if match else None
        if day:
            return _to_utc(day), None, True
        return None, None, False

    date_part, start_part, end_part = match.groups()
    day = None
    if date_part:
        day = _parse_date(date_part, year)
    elif event_url:
        url_match = _URL_DATE_RE.search(event_url)
        if url_match:
            y, m, d = (int(g) for g in url_match.groups())
            day = date(y, m, d)
    if day is None:
        logger.warning(f"Could not determine a date for '{text}'")
        return None, None, False

    start_time = _parse_time(start_part)
    if start_time is None:
        return None, None, False
    start = _to_utc(day, start_time)

    end = None
    end_time = _parse_time(end_part) if end_part else None
    if end_time is not None:
        end = _to_utc(day, end_time)
        if end < start:
            logger.warning(f"End time before start time in '{text}'; dropping end time")
            end = None
    return start, end, False


def parse_list_page(html: str, base_url: str) -> list[dict]:
    """Collect unique event links (by et_id) from the calendar list table."""
    soup = BeautifulSoup(html, "lxml")
    events: dict[str, dict] = {}
    for link in soup.select("table tr td:nth-child(2) a[href]"):
        url = urljoin(base_url, link["href"])
        event_id = parse_qs(urlparse(url).query).get("et_id", [None])[0]
        if not event_id:
            logger.debug(f"Found link without et_id: {url}")
            continue
        events.setdefault(event_id, {"event_id": event_id, "url": url})
    return list(events.values())


def _section_text(section: Tag, label: re.Pattern) -> str:
    """Text following the <strong> label of a section."""
    strong = section.find("strong")
    if strong is None:
        text = label.sub("", section.get_text(" "))
    else:
        text = " ".join(
            node.get_text(" ") if isinstance(node, Tag) else str(node) for node in strong.next_siblings
        )
    return re.sub(r"\s+", " ", text).strip()


def _extract_contact(section: Tag, page_url: str | None) -> dict:
    contact = {"contact_name": None, "contact_phone": None, "contact_email": None}

    mailto = section.find("a", href=re.compile(r"^mailto:"))
    if mailto:
        contact["contact_email"] = mailto["href"].replace("mailto:", "").strip() or None

    text = re.sub(r"\s+", " ", section.get_text(" ")).strip()
    phone = _PHONE_RE.search(text)
    if phone:
        contact["contact_phone"] = re.sub(r"\D", "", phone.group(0))
        text = text.replace(phone.group(0), "")

    for remove in filter(None, [contact["contact_email"], page_url]):
        text = text.replace(remove, "")
    for link in section.find_all("a"):
        text = text.replace(link.get_text(" ").strip(), "")

    text = re.sub(r"^More Information:?", "", text.strip(), flags=re.IGNORECASE)
    text = re.sub(r"\s+,", ",", text)
    text = re.sub(r",+", ",", text).strip(" ,")
    if text and not re.fullmatch(r"[,.\s]*", text) and not text.startswith("http"):
        contact["contact_name"] = text
    return contact


def parse_event_detail(html: str, event_url: str, event_id: str, today: date | None = None) -> dict | None:
    """Parse one detail page into Event fields; None when title or start is missing."""
    soup = BeautifulSoup(html, "lxml")
    display = soup.select_one("#event-display")
    if display is None:
        logger.error(f"[{event_id}] Could not find #event-display")
        return None

    data = {
        "external_id": event_id,
        "event_url": event_url,
        "title": None,
        "description": None,
        "location": None,
        "location_virtual_url": None,
        "attendance_type": AttendanceType.IN_PERSON,
        "organizer_sponsor": None,
        "cost_admission": None,
        "event_page_url": None,
        "contact_name": None,
        "contact_phone": None,
        "contact_email": None,
    }

    title = display.find("h2")
    data["title"] = title.get_text(strip=True) if title else None

    # Date/time and location lines sit between the title and the first <hr>
    chunks = []
    for node in (title.next_siblings if title else []):
        if isinstance(node, Tag):
            if node.name == "hr":
                break
            if node.name == "br":
                chunks.append("\n")
        elif isinstance(node, NavigableString) and node.strip():
            chunks.append(node.strip())
    lines = [line.strip() for line in "".join(chunks).split("\n") if line.strip()]
    date_line = lines[0] if lines else ""
    raw_location = ", ".join(lines[1:]) or None

    if raw_location:
        physical = [
            part.strip() for part in raw_location.split(",")
            if part.strip() and not _VIRTUAL_RE.search(part) and not part.strip().startswith("http")
        ]
        data["location"] = ", ".join(physical) or None

    start, end, all_day = parse_datetime_string(date_line, event_url, today=today)
    data["start_datetime"], data["end_datetime"], data["all_day"] = start, end, all_day

    paragraphs = [p.get_text(" ", strip=True) for p in display.find_all("p")]
    data["description"] = "\n\n".join(p for p in paragraphs if p) or None

    sponsor = info = ticket = None
    for el in display.find_all(["p", "div"]):
        strong = el.find("strong")
        if not strong:
            continue
        label = strong.get_text(strip=True)
        if re.match(r"Event Sponsor", label, re.IGNORECASE):
            sponsor = el
        elif re.match(r"More Information", label, re.IGNORECASE):
            info = el
        elif re.match(r"Ticket Information", label, re.IGNORECASE):
            ticket = el

    if sponsor is not None:
        data["organizer_sponsor"] = _section_text(sponsor, re.compile(r"Event Sponsor:?", re.I)) or None

    info_text = ""
    if info is not None:
        info_text = info.get_text(" ")
        links = [a for a in info.find_all("a", href=True) if not a["href"].startswith("mailto:")]
        preferred = next((a for a in links if _PAGE_LINK_TEXT_RE.search(a.get_text())), None)
        chosen = preferred or (links[0] if links else None)
        if chosen is not None:
            data["event_page_url"] = urljoin(event_url, chosen["href"])
        data.update(_extract_contact(info, data["event_page_url"]))

    if ticket is not None:
        data["cost_admission"] = _section_text(ticket, re.compile(r"Ticket Information:?", re.I)) or None
    else:
        cost = _COST_RE.search(info_text)
        if cost:
            data["cost_admission"] = cost.group(0)

    info_hrefs = " ".join(a["href"] for a in info.find_all("a", href=True)) if info is not None else ""
    zoom = None
    for candidate in (raw_location or "", info_hrefs, data["description"] or ""):
        found = _ZOOM_URL_RE.search(candidate)
        if found:
            zoom = found.group(0)
            break
    data["location_virtual_url"] = zoom

    virtual = bool(zoom) or any(_VIRTUAL_RE.search(t or "") for t in (raw_location, data["description"], info_text))
    if virtual and data["location"]:
        data["attendance_type"] = AttendanceType.HYBRID
    elif virtual:
        data["attendance_type"] = AttendanceType.ONLINE
        data["location"] = None

    if not data["title"] or not data["start_datetime"]:
        logger.error(f"[{event_id}] Missing title or start date/time; skipping {event_url}")
        return None
    return data


@register_scraper(JobType.EVENT_SCRAPE)
class UHCalendarScraper(BaseScraper):
    request_delay = 3.0

    def scrape(self) -> list[dict]:
        listing = parse_list_page(self.fetch(self.settings.uh_calendar_url), self.settings.uh_calendar_url)
        logger.info(f"Found {len(listing)} unique event links")

        pages = []
        for item in listing:
            try:
                pages.append({**item, "html": self.fetch(item["url"])})
            except Exception as e:
                logger.error(f"[{item['event_id']}] Failed to fetch detail page {item['url']}: {e}")
        return pages

    def normalize(self, raw: dict) -> dict | None:
        return parse_event_detail(raw["html"], raw["url"], raw["event_id"])

    def save(self, data: dict) -> str:
        existing = self.db.query(Event).filter(Event.external_id == data["external_id"]).first()
        now = utcnow()

        if existing:
            for key, value in data.items():
                setattr(existing, key, value)
            existing.last_scraped_at = now
            event, result = existing, "updated"
        else:
            event = Event(**data, last_scraped_at=now, status=ContentStatus.PENDING)
            self.db.add(event)
            result = "new"

        if not event.categories:
            names = tag_event(event.title, event.description, event.organizer_sponsor)
            event.categories = [get_or_create_category(self.db, name) for name in names]

        self.db.commit()
        return result

    def finalize(self) -> dict:
        return {"removed_past": remove_past_events(self.db)}
