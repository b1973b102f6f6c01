"""API tests for the public club and event listings."""

from compass.models.enums import ContentStatus
from compass.services.category_tagger import get_or_create_category
from tests.factories import make_club, make_event


def test_clubs_only_approved(client, db):
    make_club(db, "Visible", ContentStatus.APPROVED)
    make_club(db, "Waiting")
    make_club(db, "Hidden", ContentStatus.REJECTED)

    resp = client.get("/api/v1/clubs")

    assert resp.status_code == 200
    assert [c["name"] for c in resp.json()] == ["Visible"]


def test_clubs_category_filter(client, db):
    surf = make_club(db, "Surf Club", ContentStatus.APPROVED)
    make_club(db, "Chess Club", ContentStatus.APPROVED)
    surf.categories.append(get_or_create_category(db, "Sport/Leisure"))
    db.commit()

    resp = client.get("/api/v1/clubs", params={"category": "Sport/Leisure"})

    body = resp.json()
    assert [c["name"] for c in body] == ["Surf Club"]
    assert [c["name"] for c in body[0]["categories"]] == ["Sport/Leisure"]


def test_events_upcoming_and_approved(client, db):
    make_event(db, "Later", ContentStatus.APPROVED, days_ahead=10)
    make_event(db, "Sooner", ContentStatus.APPROVED, days_ahead=2)
    make_event(db, "Past", ContentStatus.APPROVED, days_ahead=-5)
    make_event(db, "Unreviewed", days_ahead=3)

    resp = client.get("/api/v1/events")

    assert [e["title"] for e in resp.json()] == ["Sooner", "Later"]


def test_events_include_past(client, db):
    make_event(db, "Past", ContentStatus.APPROVED, days_ahead=-5)

    resp = client.get("/api/v1/events", params={"include_past": True})

    assert [e["title"] for e in resp.json()] == ["Past"]


def test_events_category_filter(client, db):
    talk = make_event(db, "Talk", ContentStatus.APPROVED)
    make_event(db, "Game", ContentStatus.APPROVED)
    talk.categories.append(get_or_create_category(db, "Academic"))
    db.commit()

    resp = client.get("/api/v1/events", params={"category": "Academic"})

    assert [e["title"] for e in resp.json()] == ["Talk"]


def test_categories(client, db):
    get_or_create_category(db, "Social")
    get_or_create_category(db, "Academic")
    db.commit()

    resp = client.get("/api/v1/categories")

    assert [c["name"] for c in resp.json()] == ["Academic", "Social"]


def test_health(client):
    assert client.get("/health").json()["status"] == "healthy"
