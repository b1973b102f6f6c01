"""Category tagging for scraped events and imported clubs."""

import re
from typing import Final

from sqlalchemy.orm import Session

from compass.models.category import Category

# Event categories shown in the event filters
EVENT_CATEGORIES: Final[list[str]] = [
    "Academic",
    "Arts & Music",
    "Community Service",
    "Cultural",
    "Environmental",
    "Gaming",
    "Health & Wellness",
    "Hobbies",
    "Outdoors & Recreation",
    "Political",
    "Professional Development",
    "Religious & Spiritual",
    "Social",
    "Sports",
    "Technology",
]

# Club categories, taken from the "Type" column of the registered-organization sheet
CLUB_CATEGORIES: Final[list[str]] = [
    "Academic/Professional",
    "Ethnic/Cultural",
    "Fraternity/Sorority",
    "Honorary Society",
    "Leisure/Recreational",
    "Political",
    "Religious/Spiritual",
    "Service",
    "Sport/Leisure",
    "Student Affairs",
]

# Sheet spellings -> standard club category (keys compared case-insensitively)
CLUB_TYPE_MAPPING: Final[dict[str, str]] = {
    "sport/leisure": "Sport/Leisure",
    "leisure/sport": "Sport/Leisure",
    "sports": "Sport/Leisure",
    "sports/leisure": "Sport/Leisure",
    "sports/recreation": "Sport/Leisure",
    "leisure": "Leisure/Recreational",
    "recreational": "Leisure/Recreational",
    "academic": "Academic/Professional",
    "academic/profesional": "Academic/Professional",
    "professional": "Academic/Professional",
    "cultural": "Ethnic/Cultural",
    "ethnic": "Ethnic/Cultural",
    "religious": "Religious/Spiritual",
    "spiritual": "Religious/Spiritual",
    "religious/spirtual": "Religious/Spiritual",
    "religiuos": "Religious/Spiritual",
    "service/volunteer": "Service",
    "community service": "Service",
    "volunteering": "Service",
    "fraternity": "Fraternity/Sorority",
    "sorority": "Fraternity/Sorority",
    "greek life": "Fraternity/Sorority",
    "student government": "Student Affairs",
    "student organization": "Student Affairs",
    "honor society": "Honorary Society",
    "honors": "Honorary Society",
    "political/advocacy": "Political",
    "advocacy": "Political",
    "other": "Academic/Professional",
}

# Keyword rules for events; every matching category is kept, in this order
EVENT_CATEGORY_PATTERNS: Final[list[tuple[str, list[str]]]] = [
    ("Academic", [
        r"\blecture\b",
        r"\bseminar\b",
        r"\bcolloquium\b",
        r"\bsymposium\b",
        r"\bdissertation\b",
        r"\bthesis\b",
        r"\bdefense\b",
        r"\bresearch\b",
        r"\bworkshop\b",
        r"\bstudy\b",
    ]),
    ("Arts & Music", [
        r"\bconcert\b",
        r"\bmusic\b",
        r"\bexhibit(ion)?\b",
        r"\bgallery\b",
        r"\btheat(er|re)\b",
        r"\bdance\b",
        r"\bfilm\b",
        r"\bart\b",
        r"\bperformance\b",
        r"\borchestra\b",
        r"\bchoir\b",
    ]),
    ("Community Service", [
        r"\bvolunteer(ing)?\b",
        r"\bservice project\b",
        r"\bdonat(e|ion)\b",
        r"\bfundrais(er|ing)\b",
        r"\bfood drive\b",
        r"\bclean[-\s]?up\b",
    ]),
    ("Cultural", [
        r"\bcultur(e|al)\b",
        r"\bhawaiian\b",
        r"\bhula\b",
        r"\bheritage\b",
        r"\bfestival\b",
        r"\blanguage\b",
        r"\bpacific islander\b",
        r"\bmakahiki\b",
    ]),
    ("Environmental", [
        r"\bsustainab(le|ility)\b",
        r"\benvironment(al)?\b",
        r"\bclimate\b",
        r"\bocean\b",
        r"\bconservation\b",
        r"\brecycl(e|ing)\b",
    ]),
    ("Gaming", [
        r"\bgam(e|es|ing)\b",
        r"\besports?\b",
        r"\bboard game\b",
        r"\btournament\b.*\bvideo\b",
    ]),
    ("Health & Wellness", [
        r"\bhealth\b",
        r"\bwellness\b",
        r"\bmental\b",
        r"\bmeditation\b",
        r"\byoga\b",
        r"\bnutrition\b",
        r"\bcounseling\b",
        r"\bstress\b",
    ]),
    ("Hobbies", [
        r"\bcraft(s)?\b",
        r"\bcooking\b",
        r"\bphotography\b",
        r"\bknitting\b",
        r"\bgardening\b",
        r"\bbook club\b",
    ]),
    ("Outdoors & Recreation", [
        r"\bhik(e|ing)\b",
        r"\bsurf(ing)?\b",
        r"\bbeach\b",
        r"\boutdoor(s)?\b",
        r"\bcamping\b",
        r"\brecreation(al)?\b",
    ]),
    ("Political", [
        r"\bpolitic(s|al)\b",
        r"\belection\b",
        r"\bvot(e|ing|er)\b",
        r"\bpolicy\b",
        r"\blegislat(ive|ure|ion)\b",
        r"\bcivic\b",
    ]),
    ("Professional Development", [
        r"\bcareer\b",
        r"\bjob fair\b",
        r"\binternship\b",
        r"\bresume\b",
        r"\bnetworking\b",
        r"\bprofessional\b",
        r"\binterview\b",
        r"\bleadership\b",
    ]),
    ("Religious & Spiritual", [
        r"\bchurch\b",
        r"\bfaith\b",
        r"\bworship\b",
        r"\bbible\b",
        r"\bprayer\b",
        r"\bspiritual\b",
        r"\bministry\b",
    ]),
    ("Social", [
        r"\bmixer\b",
        r"\bsocial\b",
        r"\bparty\b",
        r"\bmeet(-|\s)?(and|&)(-|\s)?greet\b",
        r"\bpotluck\b",
        r"\bgathering\b",
        r"\bcelebration\b",
    ]),
    ("Sports", [
        r"\brainbow warriors?\b",
        r"\bwahine\b",
        r"\bathletic(s)?\b",
        r"\bbasketball\b",
        r"\bvolleyball\b",
        r"\bfootball\b",
        r"\bbaseball\b",
        r"\bsoccer\b",
        r"\bintramural\b",
    ]),
    ("Technology", [
        r"\btechnology\b",
        r"\bcomputer\b",
        r"\bcoding\b",
        r"\bprogramming\b",
        r"\bhackathon\b",
        r"\bsoftware\b",
        r"\bdata science\b",
        r"\b(ai|artificial intelligence)\b",
        r"\bcyber(security)?\b",
    ]),
]

MAX_EVENT_TAGS: Final[int] = 3


def tag_event(
    title: str | None,
    description: str | None = None,
    organizer: str | None = None,
) -> list[str]:
    """Return up to MAX_EVENT_TAGS event categories matching the event text.

    Events that match nothing are tagged "Academic", the campus default.
    """
    text = " ".join(filter(None, [title, description, organizer])).lower()
    if not text:
        return []

    tags = []
    for category, patterns in EVENT_CATEGORY_PATTERNS:
        if any(re.search(pattern, text, re.IGNORECASE) for pattern in patterns):
            tags.append(category)
        if len(tags) >= MAX_EVENT_TAGS:
            break

    return tags or ["Academic"]


def standardize_club_type(raw_type: str | None) -> str | None:
    """Map a sheet "Type" value to a standard club category."""
    if not raw_type:
        return None
    value = raw_type.strip()
    for standard in CLUB_CATEGORIES:
        if value.lower() == standard.lower():
            return standard
    return CLUB_TYPE_MAPPING.get(value.lower())


def get_all_categories() -> list[str]:
    """Every standard category, events first then clubs, without duplicates."""
    return list(dict.fromkeys(EVENT_CATEGORIES + CLUB_CATEGORIES))


def get_or_create_category(db: Session, name: str) -> Category:
    category = db.query(Category).filter(Category.name == name).first()
    if category is None:
        category = Category(name=name)
        db.add(category)
        db.flush()
    return category
