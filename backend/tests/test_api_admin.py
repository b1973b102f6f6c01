"""API tests for admin moderation, the job dashboard and role changes."""

import uuid

import pytest
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from compass.models.category import Category
from compass.models.club import Club
from compass.models.enums import ContentStatus, JobStatus, JobType
from compass.models.event import Event
from compass.models.job import Job
from compass.models.user import User
from compass.services.job_scheduler import schedule_all_jobs
from tests.factories import make_club, make_event

ADMIN_ROUTES = [
    ("post", "/api/v1/admin/approve-all/clubs", None),
    ("post", "/api/v1/admin/approve-all/events", None),
    ("post", "/api/v1/admin/approve-all", {"type": "clubs"}),
    ("patch", f"/api/v1/admin/clubs/{uuid.uuid4()}/status", {"status": "APPROVED"}),
    ("patch", f"/api/v1/admin/events/{uuid.uuid4()}/status", {"status": "APPROVED"}),
    ("get", "/api/v1/admin/jobs/status", None),
    ("get", "/api/v1/admin/content/events/stats", None),
    ("get", "/api/v1/admin/clubs", None),
    ("get", "/api/v1/admin/events", None),
    ("post", "/api/v1/admin/import/events", None),
    ("post", "/api/v1/admin/categories", {"name": "Academic"}),
    ("delete", f"/api/v1/admin/categories/{uuid.uuid4()}", None),
    ("get", "/api/v1/admin/users", None),
]


class TestAdminGuard:
    @pytest.mark.parametrize("method,url,body", ADMIN_ROUTES)
    def test_anonymous_gets_401(self, client, method, url, body):
        resp = client.request(method.upper(), url, json=body)
        assert resp.status_code == 401

    @pytest.mark.parametrize("method,url,body", ADMIN_ROUTES)
    def test_non_admin_gets_403(self, user_client, method, url, body):
        resp = user_client.request(method.upper(), url, json=body)
        assert resp.status_code == 403

    def test_rejected_call_changes_nothing(self, user_client, db):
        make_club(db)

        user_client.post("/api/v1/admin/approve-all/clubs")

        db.expire_all()
        assert db.query(Club).one().status == ContentStatus.PENDING


class TestApproveAll:
    def test_nothing_to_approve(self, admin_client):
        resp = admin_client.post("/api/v1/admin/approve-all/clubs")

        assert resp.status_code == 200
        assert resp.json() == {"message": "No pending clubs found to approve.", "count": 0}

    def test_approves_pending_clubs(self, admin_client, db):
        make_club(db, "A")
        make_club(db, "B")
        make_club(db, "C", ContentStatus.REJECTED)

        resp = admin_client.post("/api/v1/admin/approve-all/clubs")

        assert resp.status_code == 200
        assert resp.json() == {"message": "Successfully approved 2 clubs.", "count": 2}
        db.expire_all()
        assert db.query(Club).filter(Club.status == ContentStatus.APPROVED).count() == 2
        assert db.query(Club).filter(Club.status == ContentStatus.REJECTED).count() == 1

    def test_approves_pending_events(self, admin_client, db):
        make_event(db)

        resp = admin_client.post("/api/v1/admin/approve-all/events")

        assert resp.json() == {"message": "Successfully approved 1 events.", "count": 1}

    def test_by_type_in_body(self, admin_client, db):
        make_event(db)

        resp = admin_client.post("/api/v1/admin/approve-all", json={"type": "events"})

        assert resp.status_code == 200
        assert resp.json()["count"] == 1

    @pytest.mark.parametrize("body", [{"type": "users"}, {"type": None}, {}])
    def test_by_type_rejects_unknown_type(self, admin_client, db, body):
        make_event(db)

        resp = admin_client.post("/api/v1/admin/approve-all", json=body)

        assert resp.status_code == 400
        db.expire_all()
        assert db.query(Event).one().status == ContentStatus.PENDING


class TestSetStatus:
    def test_updates_club(self, admin_client, db):
        club = make_club(db)

        resp = admin_client.patch(f"/api/v1/admin/clubs/{club.id}/status", json={"status": "REJECTED"})

        assert resp.status_code == 200
        assert resp.json()["status"] == "REJECTED"
        assert resp.json()["name"] == "Hiking Club"

    def test_updates_event(self, admin_client, db):
        event = make_event(db)

        resp = admin_client.patch(f"/api/v1/admin/events/{event.id}/status", json={"status": "APPROVED"})

        assert resp.status_code == 200
        assert resp.json()["status"] == "APPROVED"

    @pytest.mark.parametrize("body", [{"status": "DONE"}, {"status": None}, {}])
    def test_invalid_status_is_400(self, admin_client, db, body):
        club = make_club(db)

        resp = admin_client.patch(f"/api/v1/admin/clubs/{club.id}/status", json=body)

        assert resp.status_code == 400
        assert "Must be one of" in resp.json()["detail"]
        db.expire_all()
        assert db.query(Club).one().status == ContentStatus.PENDING

    def test_missing_row_is_404(self, admin_client):
        resp = admin_client.patch(f"/api/v1/admin/events/{uuid.uuid4()}/status", json={"status": "APPROVED"})

        assert resp.status_code == 404
        assert resp.json()["detail"] == "Event not found"

    def test_malformed_id_is_422(self, admin_client):
        resp = admin_client.patch("/api/v1/admin/clubs/not-a-uuid/status", json={"status": "APPROVED"})
        assert resp.status_code == 422


class TestDashboard:
    def test_jobs_status_newest_first(self, admin_client, db):
        schedule_all_jobs(db)

        resp = admin_client.get("/api/v1/admin/jobs/status")

        assert resp.status_code == 200
        jobs = resp.json()
        assert len(jobs) == 2
        assert {j["type"] for j in jobs} == {"EVENT_SCRAPE", "CLUB_SCRAPE"}
        assert all(j["status"] == "PENDING" for j in jobs)
        assert jobs[0]["created_at"] >= jobs[1]["created_at"]

    def test_jobs_status_limit(self, admin_client, db):
        for _ in range(3):
            db.add(Job(type=JobType.EVENT_SCRAPE, status=JobStatus.COMPLETED))
        db.commit()

        resp = admin_client.get("/api/v1/admin/jobs/status", params={"limit": 2})

        assert len(resp.json()) == 2

    def test_content_stats(self, admin_client, db):
        make_club(db, "A")
        make_club(db, "B", ContentStatus.APPROVED)

        resp = admin_client.get("/api/v1/admin/content/clubs/stats")

        assert resp.status_code == 200
        assert resp.json()["counts"] == {"PENDING": 1, "APPROVED": 1, "REJECTED": 0}

    def test_unknown_content_kind(self, admin_client):
        assert admin_client.get("/api/v1/admin/content/users/stats").status_code == 422


class TestRoles:
    def test_promote_user(self, admin_client, regular_user, db):
        resp = admin_client.post(f"/api/v1/admin/users/{regular_user.id}/role", json={"is_admin": True})

        assert resp.status_code == 200
        assert resp.json()["is_admin"] is True
        db.expire_all()
        assert db.get(User, regular_user.id).is_admin is True

    def test_unknown_user(self, admin_client):
        resp = admin_client.post(f"/api/v1/admin/users/{uuid.uuid4()}/role", json={"is_admin": True})
        assert resp.status_code == 404

    def test_promoted_user_gains_access(self, client, admin_user, regular_user, db):
        client.post("/api/v1/auth/login", json={"email": "admin@hawaii.edu", "password": "admin-password"})
        client.post(f"/api/v1/admin/users/{regular_user.id}/role", json={"is_admin": True})
        client.post("/api/v1/auth/logout")

        client.post("/api/v1/auth/login", json={"email": "student@hawaii.edu", "password": "student-password"})

        assert client.get("/api/v1/admin/jobs/status").status_code == 200

    def test_cannot_demote_self(self, admin_client, admin_user, db):
        resp = admin_client.post(f"/api/v1/admin/users/{admin_user.id}/role", json={"is_admin": False})

        assert resp.status_code == 400
        assert resp.json()["detail"] == "You cannot remove your own admin access"
        db.expire_all()
        assert db.get(User, admin_user.id).is_admin is True

    def test_demote_other_admin(self, admin_client, db):
        other = User(email="other@hawaii.edu", display_name="Other", hashed_password="x", is_admin=True)
        db.add(other)
        db.commit()

        resp = admin_client.post(f"/api/v1/admin/users/{other.id}/role", json={"is_admin": False})

        assert resp.status_code == 200
        assert resp.json()["is_admin"] is False


class TestImport:
    def test_schedules_job(self, admin_client, db):
        resp = admin_client.post("/api/v1/admin/import/events")

        assert resp.status_code == 202
        body = resp.json()
        assert body["created"] is True
        job = db.query(Job).one()
        assert job.type == JobType.EVENT_SCRAPE
        assert job.status == JobStatus.PENDING
        assert body["job_id"] == str(job.id)

    def test_open_job_is_reported_not_duplicated(self, admin_client, db):
        running = Job(type=JobType.CLUB_SCRAPE, status=JobStatus.RUNNING)
        db.add(running)
        db.commit()

        resp = admin_client.post("/api/v1/admin/import/clubs")

        assert resp.status_code == 200
        body = resp.json()
        assert body["created"] is False
        assert body["job_id"] == str(running.id)
        assert "already running" in body["message"]
        assert db.query(Job).count() == 1

    def test_kinds_are_independent(self, admin_client, db):
        admin_client.post("/api/v1/admin/import/events")

        resp = admin_client.post("/api/v1/admin/import/clubs")

        assert resp.status_code == 202
        assert {j.type for j in db.query(Job).all()} == {JobType.EVENT_SCRAPE, JobType.CLUB_SCRAPE}

    def test_unknown_kind(self, admin_client, db):
        assert admin_client.post("/api/v1/admin/import/users").status_code == 422
        assert db.query(Job).count() == 0

    def test_non_admin_schedules_nothing(self, user_client, db):
        assert user_client.post("/api/v1/admin/import/events").status_code == 403
        assert db.query(Job).count() == 0


class TestModerationQueues:
    def test_defaults_to_all_statuses(self, admin_client, db):
        make_club(db, "A")
        make_club(db, "B", ContentStatus.APPROVED)
        make_club(db, "C", ContentStatus.REJECTED)

        resp = admin_client.get("/api/v1/admin/clubs")

        assert resp.status_code == 200
        body = resp.json()
        assert [c["name"] for c in body["data"]] == ["C", "B", "A"]
        assert body["pagination"] == {"page": 1, "limit": 10, "total_items": 3, "total_pages": 1}

    @pytest.mark.parametrize("status,expected", [("PENDING", ["A"]), ("REJECTED", ["C"]), ("ALL", ["C", "B", "A"])])
    def test_status_filter(self, admin_client, db, status, expected):
        make_club(db, "A")
        make_club(db, "B", ContentStatus.APPROVED)
        make_club(db, "C", ContentStatus.REJECTED)

        resp = admin_client.get("/api/v1/admin/clubs", params={"status": status})

        assert [c["name"] for c in resp.json()["data"]] == expected

    def test_bad_filter_is_400(self, admin_client):
        resp = admin_client.get("/api/v1/admin/events", params={"status": "DONE"})

        assert resp.status_code == 400
        assert resp.json()["detail"] == "Invalid status filter value."

    def test_events_paging(self, admin_client, db):
        for i in range(5):
            make_event(db, f"Talk {i}")

        resp = admin_client.get("/api/v1/admin/events", params={"status": "PENDING", "page": 2, "limit": 2})

        body = resp.json()
        assert [e["title"] for e in body["data"]] == ["Talk 2", "Talk 1"]
        assert body["pagination"] == {"page": 2, "limit": 2, "total_items": 5, "total_pages": 3}

    @pytest.mark.parametrize("params", [{"page": 0}, {"limit": 0}, {"limit": 101}])
    def test_paging_bounds(self, admin_client, params):
        assert admin_client.get("/api/v1/admin/events", params=params).status_code == 422


class TestCategories:
    def test_create(self, admin_client, db):
        resp = admin_client.post("/api/v1/admin/categories", json={"name": "  Academic  "})

        assert resp.status_code == 201
        assert resp.json()["name"] == "Academic"
        assert db.query(Category).one().name == "Academic"

    def test_duplicate_is_409(self, admin_client, db):
        db.add(Category(name="Academic"))
        db.commit()

        resp = admin_client.post("/api/v1/admin/categories", json={"name": "Academic"})

        assert resp.status_code == 409
        assert db.query(Category).count() == 1

    @pytest.mark.parametrize("body", [{"name": "   "}, {}])
    def test_blank_name_is_400(self, admin_client, body):
        assert admin_client.post("/api/v1/admin/categories", json=body).status_code == 400

    def test_delete_unused(self, admin_client, db):
        category = Category(name="Academic")
        db.add(category)
        db.commit()

        resp = admin_client.delete(f"/api/v1/admin/categories/{category.id}")

        assert resp.status_code == 204
        db.expire_all()
        assert db.query(Category).count() == 0

    def test_delete_missing_is_404(self, admin_client):
        assert admin_client.delete(f"/api/v1/admin/categories/{uuid.uuid4()}").status_code == 404

    def test_delete_in_use_is_409(self, admin_client, db):
        category = Category(name="Academic")
        make_club(db, categories=[category])

        resp = admin_client.delete(f"/api/v1/admin/categories/{category.id}")

        assert resp.status_code == 409
        assert "1 clubs" in resp.json()["detail"]
        db.expire_all()
        assert db.query(Category).count() == 1


class TestUsers:
    def test_lists_users(self, admin_client, regular_user):
        resp = admin_client.get("/api/v1/admin/users")

        assert resp.status_code == 200
        body = resp.json()
        assert {u["email"] for u in body["data"]} == {"admin@hawaii.edu", "student@hawaii.edu"}
        assert "hashed_password" not in body["data"][0]
        assert body["pagination"]["total_items"] == 2

    def test_search(self, admin_client, regular_user):
        resp = admin_client.get("/api/v1/admin/users", params={"search": "STUDENT"})

        assert [u["email"] for u in resp.json()["data"]] == ["student@hawaii.edu"]

    def test_limit(self, admin_client, regular_user):
        body = admin_client.get("/api/v1/admin/users", params={"limit": 1}).json()

        assert len(body["data"]) == 1
        assert body["pagination"]["total_pages"] == 2


class TestStoreFailures:
    def test_jobs_status_failure_is_500(self, admin_client, monkeypatch):
        def broken(db, limit):
            raise OperationalError("SELECT", {}, Exception("database is locked"))

        monkeypatch.setattr("compass.api.v1.admin.list_recent_jobs", broken)

        resp = admin_client.get("/api/v1/admin/jobs/status")

        assert resp.status_code == 500
        assert resp.json()["detail"] == "Failed to fetch job status"

    def test_content_stats_failure_is_500(self, admin_client, monkeypatch):
        def broken(db, kind):
            raise OperationalError("SELECT", {}, Exception("database is locked"))

        monkeypatch.setattr("compass.api.v1.admin.content_status_counts", broken)

        resp = admin_client.get("/api/v1/admin/content/clubs/stats")

        assert resp.status_code == 500
        assert resp.json()["detail"] == "Failed to count clubs"

    def test_role_update_failure_is_500(self, admin_client, regular_user, monkeypatch, db):
        async def broken(self, *args, **kwargs):
            raise OperationalError("UPDATE", {}, Exception("database is locked"))

        monkeypatch.setattr(AsyncSession, "flush", broken)

        resp = admin_client.post(f"/api/v1/admin/users/{regular_user.id}/role", json={"is_admin": True})

        assert resp.status_code == 500
        assert resp.json()["detail"] == "Failed to update user role"
        db.expire_all()
        assert db.get(User, regular_user.id).is_admin is False
