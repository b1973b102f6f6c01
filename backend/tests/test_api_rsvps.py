"""API tests for event RSVPs."""

import uuid

import pytest

from compass.models.enums import ContentStatus
from compass.models.rsvp import RSVP
from tests.factories import make_event


def test_rsvp_created(user_client, regular_user, db):
    event = make_event(db, status=ContentStatus.APPROVED)

    resp = user_client.post(f"/api/v1/events/{event.id}/rsvp")

    assert resp.status_code == 201
    body = resp.json()
    assert body["event_id"] == str(event.id)
    assert body["user_id"] == str(regular_user.id)
    assert db.query(RSVP).count() == 1


def test_pending_event_accepts_rsvp(user_client, db):
    event = make_event(db)
    assert user_client.post(f"/api/v1/events/{event.id}/rsvp").status_code == 201


def test_duplicate_rsvp_is_409(user_client, db):
    event = make_event(db, status=ContentStatus.APPROVED)
    user_client.post(f"/api/v1/events/{event.id}/rsvp")

    resp = user_client.post(f"/api/v1/events/{event.id}/rsvp")

    assert resp.status_code == 409
    assert resp.json()["detail"] == "You have already RSVPed to this event"
    assert db.query(RSVP).count() == 1


@pytest.mark.parametrize(
    "fields,status_code",
    [
        ({"status": ContentStatus.REJECTED}, 403),
        ({"status": ContentStatus.APPROVED, "days_ahead": -1}, 400),
    ],
)
def test_closed_events_refuse_rsvp(user_client, db, fields, status_code):
    event = make_event(db, **fields)

    resp = user_client.post(f"/api/v1/events/{event.id}/rsvp")

    assert resp.status_code == status_code
    assert db.query(RSVP).count() == 0


def test_missing_event_is_404(user_client):
    assert user_client.post(f"/api/v1/events/{uuid.uuid4()}/rsvp").status_code == 404


def test_anonymous_is_401(client, db):
    event = make_event(db, status=ContentStatus.APPROVED)

    assert client.post(f"/api/v1/events/{event.id}/rsvp").status_code == 401
    assert client.delete(f"/api/v1/events/{event.id}/rsvp").status_code == 401
    assert client.get("/api/v1/rsvps").status_code == 401


def test_cancel_rsvp(user_client, db):
    event = make_event(db, status=ContentStatus.APPROVED)
    user_client.post(f"/api/v1/events/{event.id}/rsvp")

    resp = user_client.delete(f"/api/v1/events/{event.id}/rsvp")

    assert resp.status_code == 204
    assert db.query(RSVP).count() == 0
    assert user_client.delete(f"/api/v1/events/{event.id}/rsvp").status_code == 404


def test_my_rsvps_soonest_first(user_client, db):
    later = make_event(db, "Later", ContentStatus.APPROVED, days_ahead=10)
    sooner = make_event(db, "Sooner", ContentStatus.APPROVED, days_ahead=2)
    make_event(db, "Not attending", ContentStatus.APPROVED)
    for event in (later, sooner):
        user_client.post(f"/api/v1/events/{event.id}/rsvp")

    resp = user_client.get("/api/v1/rsvps")

    assert resp.status_code == 200
    assert [e["title"] for e in resp.json()] == ["Sooner", "Later"]
