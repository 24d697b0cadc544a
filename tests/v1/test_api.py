"""Tests for the public, auth, dashboard and admin routes."""

from fastapi import status


def test_health_reports_fixture_backend(client) -> None:
    r = client.get("/health")

    assert r.status_code == status.HTTP_200_OK
    assert r.json() == {"status": "ok", "backend": "fixture"}


def test_root_describes_api(client) -> None:
    r = client.get("/")

    assert r.status_code == status.HTTP_200_OK
    assert r.json()["docs"] == "/docs"


def test_public_events(client) -> None:
    upcoming = client.get("/api/v1/events")
    past = client.get("/api/v1/events", params={"timeframe": "past", "page_size": 2})

    assert [e["id"] for e in upcoming.json()["items"]] == ["3", "4", "5"]
    assert past.json()["total_count"] == 3
    assert len(past.json()["items"]) == 2


def test_unpublished_event_is_hidden(client) -> None:
    r = client.get("/api/v1/events/7")

    assert r.status_code == status.HTTP_404_NOT_FOUND
    assert r.json()["detail"] == "Event not found"


def test_projects_and_categories(client) -> None:
    r = client.get("/api/v1/projects", params={"category": "Healthcare"})

    assert [p["id"] for p in r.json()["items"]] == ["1"]
    assert r.json()["items"][0]["team"][0]["initials"] == "DA"


def test_article_by_slug(client) -> None:
    found = client.get("/api/v1/articles/getting-started-with-claude-api")
    missing = client.get("/api/v1/articles/does-not-exist")

    assert found.json()["author"]["full_name"] == "Kaio Mugisha"
    assert missing.status_code == status.HTTP_404_NOT_FOUND
    assert missing.json()["detail"] == "Article not found"


def test_subscribe_is_idempotent(client) -> None:
    first = client.post("/api/v1/subscribe", json={"email": "reader@example.com"})
    second = client.post("/api/v1/subscribe", json={"email": "reader@example.com"})
    invalid = client.post("/api/v1/subscribe", json={"email": "nope"})

    assert first.status_code == second.status_code == status.HTTP_200_OK
    assert second.json()["success"] is True
    assert invalid.status_code == status.HTTP_400_BAD_REQUEST


def test_join_creates_pending_member(client) -> None:
    payload = {"email": "alice@example.edu", "full_name": "Alice Mukamana"}

    created = client.post("/api/v1/join", json=payload)
    duplicate = client.post("/api/v1/join", json=payload)

    assert created.status_code == status.HTTP_201_CREATED
    assert (created.json()["status"], created.json()["role"]) == ("pending", "member")
    assert duplicate.status_code == status.HTTP_409_CONFLICT


def test_locale_round_trip(client) -> None:
    assert client.get("/api/v1/locale").json() == {"locale": "en"}

    changed = client.put("/api/v1/locale", json={"locale": "rw"})
    rejected = client.put("/api/v1/locale", json={"locale": "fr"})

    assert changed.json() == {"locale": "rw"}
    assert rejected.status_code == status.HTTP_400_BAD_REQUEST
    assert client.get("/api/v1/locale").json() == {"locale": "rw"}


def test_session_reflects_startup_restore(client) -> None:
    r = client.get("/api/v1/auth/session")

    body = r.json()
    assert body["state"] == "authenticated"
    assert body["can_administer"] is True
    assert body["member"]["email"] == "demo@ur.ac.rw"


def test_sign_out_then_sign_in(client) -> None:
    signed_out = client.post("/api/v1/auth/sign-out")
    session = client.get("/api/v1/auth/session").json()
    blank = client.post("/api/v1/auth/sign-in", json={"email": "", "password": ""})
    signed_in = client.post("/api/v1/auth/sign-in", json={"email": "demo@ur.ac.rw", "password": "x"})

    assert signed_out.status_code == status.HTTP_204_NO_CONTENT
    assert session["state"] == "anonymous"
    assert blank.status_code == status.HTTP_401_UNAUTHORIZED
    assert blank.json()["detail"] == "Email and password are required."
    assert signed_in.json()["state"] == "authenticated"


def test_anonymous_users_cannot_reach_member_pages(anonymous_client) -> None:
    assert anonymous_client.get("/api/v1/dashboard/overview").status_code == status.HTTP_401_UNAUTHORIZED
    assert anonymous_client.get("/api/v1/admin/overview").status_code == status.HTTP_401_UNAUTHORIZED
    assert anonymous_client.get("/api/v1/events").status_code == status.HTTP_200_OK


def test_regular_members_cannot_reach_admin(client, portal) -> None:
    portal.identity.member = portal.identity.member.model_copy(update={"role": "member"})

    r = client.get("/api/v1/admin/members")

    assert r.status_code == status.HTTP_403_FORBIDDEN


def test_pending_members_cannot_rsvp(client, portal) -> None:
    portal.identity.member = portal.identity.member.model_copy(update={"status": "pending"})

    r = client.post("/api/v1/dashboard/events/3/rsvp")

    assert r.status_code == status.HTTP_403_FORBIDDEN


def test_dashboard_overview(client) -> None:
    body = client.get("/api/v1/dashboard/overview").json()

    assert [e["id"] for e in body["upcoming_events"]] == ["4", "5"]
    assert body["stats"] == {"events_attended": 2, "projects_count": 2, "member_since": "Jan 2026"}


def test_rsvp_lifecycle(client) -> None:
    created = client.post("/api/v1/dashboard/events/3/rsvp")
    duplicate = client.post("/api/v1/dashboard/events/3/rsvp")
    mine = client.get("/api/v1/dashboard/events").json()
    cancelled = client.delete("/api/v1/dashboard/events/3/rsvp")
    missing = client.delete("/api/v1/dashboard/events/2/rsvp")

    assert created.status_code == status.HTTP_201_CREATED
    assert duplicate.status_code == status.HTTP_409_CONFLICT
    assert duplicate.json()["detail"] == "You have already registered for this event."
    assert [item["event"]["id"] for item in mine["items"]] == ["3", "4", "5"]
    assert cancelled.json()["status"] == "cancelled"
    assert missing.status_code == status.HTTP_404_NOT_FOUND


def test_member_articles(client) -> None:
    created = client.post(
        "/api/v1/dashboard/articles",
        json={"title": "Agents 101", "content": "Hello", "published": True},
    )
    duplicate = client.post("/api/v1/dashboard/articles", json={"title": "Agents 101!", "content": "Again"})
    article_id = created.json()["id"]
    edited = client.patch(f"/api/v1/dashboard/articles/{article_id}", json={"title": "Agents 102"})

    assert created.status_code == status.HTTP_201_CREATED
    assert duplicate.status_code == status.HTTP_409_CONFLICT
    assert edited.json()["slug"] == "agents-101"
    assert client.get("/api/v1/articles/agents-101").status_code == status.HTTP_200_OK
    assert client.delete(f"/api/v1/dashboard/articles/{article_id}").status_code == status.HTTP_204_NO_CONTENT


def test_member_projects(client) -> None:
    created = client.post("/api/v1/dashboard/projects", json={"title": "Swahili Tutor"})
    listed = client.get("/api/v1/dashboard/projects").json()

    assert created.status_code == status.HTTP_201_CREATED
    assert listed["items"][0]["id"] == created.json()["id"]
    assert client.delete("/api/v1/dashboard/projects/missing").status_code == status.HTTP_404_NOT_FOUND


def test_profile_edit_and_delete(client) -> None:
    updated = client.patch("/api/v1/dashboard/profile", json={"bio": "Builder"})
    deleted = client.delete("/api/v1/dashboard/profile")

    assert updated.json()["bio"] == "Builder"
    assert deleted.status_code == status.HTTP_204_NO_CONTENT
    assert client.get("/api/v1/auth/session").json()["state"] == "anonymous"


def test_admin_bulk_approve(client) -> None:
    before = client.get("/api/v1/admin/overview").json()
    approved = client.post(
        "/api/v1/admin/members/bulk-status", json={"member_ids": ["3", "4"], "status": "approved"}
    )
    after = client.get("/api/v1/admin/overview").json()

    assert before["stats"]["pending_members"] == 2
    assert [m["id"] for m in before["recent_pending"]] == ["4", "3"]
    assert approved.status_code == status.HTTP_200_OK
    assert after["stats"]["pending_members"] == 0


def test_admin_bulk_partial_failure(client) -> None:
    r = client.post(
        "/api/v1/admin/members/bulk-status", json={"member_ids": ["3", "ghost"], "status": "rejected"}
    )

    assert r.status_code == status.HTTP_207_MULTI_STATUS
    assert r.json()["success"] is False
    assert [m["id"] for m in r.json()["entity"]] == ["3"]


def test_admin_member_filters(client) -> None:
    pending = client.get("/api/v1/admin/members", params={"status": "pending"}).json()
    role = client.patch("/api/v1/admin/members/5/role", json={"role": "lead"})
    missing = client.patch("/api/v1/admin/members/ghost/status", json={"status": "approved"})

    assert pending["total_count"] == 2
    assert role.json()["role"] == "lead"
    assert missing.status_code == status.HTTP_404_NOT_FOUND


def test_admin_event_management(client) -> None:
    backwards = client.post(
        "/api/v1/admin/events",
        json={"title": "Panel", "date": "2026-05-02T10:00:00Z", "end_date": "2026-05-01T10:00:00Z"},
    )
    created = client.post(
        "/api/v1/admin/events",
        json={"title": "Panel", "date": "2026-05-02T10:00:00Z", "is_published": True},
    )
    event_id = created.json()["id"]
    renamed = client.patch(f"/api/v1/admin/events/{event_id}", json={"title": "AI Ethics Panel"})
    listed = client.get("/api/v1/admin/events").json()

    assert backwards.status_code == status.HTTP_400_BAD_REQUEST
    assert backwards.json()["detail"] == "End date cannot be before the start date."
    assert created.status_code == status.HTTP_201_CREATED
    assert renamed.json()["title"] == "AI Ethics Panel"
    assert listed["total_count"] == 8
    assert client.delete(f"/api/v1/admin/events/{event_id}").status_code == status.HTTP_204_NO_CONTENT


def test_admin_projects_and_subscribers(client) -> None:
    featured = client.patch("/api/v1/admin/projects/3/featured", json={"is_featured": True})
    subscribers = client.get("/api/v1/admin/subscribers").json()

    assert featured.json()["is_featured"] is True
    assert subscribers["total_count"] == 3
    assert client.delete("/api/v1/admin/projects/3").status_code == status.HTTP_204_NO_CONTENT
    assert client.get("/api/v1/projects/3").status_code == status.HTTP_404_NOT_FOUND


def test_project_delete_requires_ownership(client, portal) -> None:
    foreign = client.delete("/api/v1/dashboard/projects/2")
    portal.identity.user = portal.identity.user.model_copy(update={"id": "2"})
    not_owner = client.delete("/api/v1/dashboard/projects/1")

    assert foreign.status_code == status.HTTP_404_NOT_FOUND
    assert not_owner.status_code == status.HTTP_403_FORBIDDEN
    assert client.get("/api/v1/projects/1").status_code == status.HTTP_200_OK
