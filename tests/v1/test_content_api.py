"""Tests for the site content readers and the admin content editor."""

from fastapi import status


def _ids(response) -> list[str]:
    return [item["id"] for item in response.json()["items"]]


def test_public_content_lists(client) -> None:
    features = client.get("/api/v1/content/features")
    partners = client.get("/api/v1/content/partners")
    milestones = client.get("/api/v1/content/milestones")
    stats = client.get("/api/v1/content/stats")

    assert _ids(features) == ["1", "2", "3", "4"]
    assert features.json()["items"][0]["title"] == "Learn AI Development"
    assert _ids(partners) == ["1", "2", "3", "4"]
    assert milestones.json()["items"][0]["title"] == "Club Founded"
    assert stats.json()["total_count"] == 4


def test_content_follows_stored_language(client) -> None:
    client.put("/api/v1/locale", json={"locale": "rw"})

    team = client.get("/api/v1/content/team").json()
    english = client.get("/api/v1/content/team", params={"locale": "en"}).json()
    unsupported = client.get("/api/v1/content/team", params={"locale": "fr"})

    assert team["items"][0]["role"] == "Perezida w'Ishyirahamwe"
    assert english["items"][0]["role"] == "Club President"
    assert unsupported.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


def test_page_copy_by_category(anonymous_client) -> None:
    r = anonymous_client.get("/api/v1/content/copy", params={"category": "home", "locale": "rw"})

    body = r.json()
    assert body["locale"] == "rw"
    assert body["texts"]["hero.title"] == "Twubake ejo hazaza ha AI mu Rwanda"
    assert body["texts"]["hero.subtitle"] == "The Claude Builder Club at the University of Rwanda."
    assert "footer.tagline" not in body["texts"]


def test_content_editor_requires_admin(anonymous_client) -> None:
    assert anonymous_client.get("/api/v1/admin/content/features").status_code == status.HTTP_401_UNAUTHORIZED
    assert anonymous_client.put("/api/v1/admin/content/copy", json={"key": "x"}).status_code == (
        status.HTTP_401_UNAUTHORIZED
    )


def test_members_cannot_edit_content(client, portal) -> None:
    portal.identity.member = portal.identity.member.model_copy(update={"role": "member"})

    r = client.post("/api/v1/admin/content/partners", json={"name": "Acme"})

    assert r.status_code == status.HTTP_403_FORBIDDEN


def test_admin_feature_lifecycle(client) -> None:
    listed = client.get("/api/v1/admin/content/features")
    created = client.post(
        "/api/v1/admin/content/features",
        json={"title_en": "Mentorship", "description_en": "Pair with senior builders.", "sort_order": 9},
    )
    invalid = client.post("/api/v1/admin/content/features", json={"title_en": "No description"})
    feature_id = created.json()["id"]
    edited = client.patch(f"/api/v1/admin/content/features/{feature_id}", json={"title_rw": "Ubujyanama"})
    missing = client.patch("/api/v1/admin/content/features/ghost", json={"icon": "star"})
    deleted = client.delete(f"/api/v1/admin/content/features/{feature_id}")
    gone = client.delete(f"/api/v1/admin/content/features/{feature_id}")

    assert listed.json()["total_count"] == 5
    assert created.status_code == status.HTTP_201_CREATED
    assert invalid.status_code == status.HTTP_400_BAD_REQUEST
    assert invalid.json()["detail"] == "Title and description are required"
    assert edited.json()["title_rw"] == "Ubujyanama"
    assert missing.status_code == status.HTTP_404_NOT_FOUND
    assert missing.json()["detail"] == "Feature not found"
    assert deleted.status_code == status.HTTP_204_NO_CONTENT
    assert gone.status_code == status.HTTP_404_NOT_FOUND


def test_admin_team_and_milestones(client) -> None:
    member = client.post("/api/v1/admin/content/team", json={"name": "Grace Uwase", "role_en": "Treasurer"})
    nameless = client.post("/api/v1/admin/content/team", json={"role_en": "Treasurer"})
    milestone = client.post(
        "/api/v1/admin/content/milestones", json={"date": "2024-10-01", "title_en": "Partnership"}
    )
    timeline = client.get("/api/v1/content/milestones")

    assert member.status_code == status.HTTP_201_CREATED
    assert nameless.json()["detail"] == "Name and role are required"
    assert milestone.json()["date"] == "2024-10-01"
    assert _ids(timeline)[:3] == ["1", milestone.json()["id"], "2"]


def test_admin_stats_are_edit_only(client) -> None:
    updated = client.patch("/api/v1/admin/content/stats/1", json={"value": 150})
    created = client.post("/api/v1/admin/content/stats", json={"key": "x", "label_en": "X"})

    assert updated.json()["value"] == 150
    assert client.get("/api/v1/content/stats").json()["items"][0]["value"] == 150
    assert created.status_code == status.HTTP_405_METHOD_NOT_ALLOWED


def test_admin_copy_save_and_delete(client) -> None:
    saved = client.put(
        "/api/v1/admin/content/copy",
        json={"key": "hero.subtitle", "language": "rw", "value": "Ishyirahamwe rya Claude", "category": "home"},
    )
    copy = client.get("/api/v1/content/copy", params={"category": "home", "locale": "rw"}).json()
    deleted = client.delete(f"/api/v1/admin/content/copy/{saved.json()['id']}")
    missing = client.delete("/api/v1/admin/content/copy/ghost")

    assert saved.status_code == status.HTTP_200_OK
    assert copy["texts"]["hero.subtitle"] == "Ishyirahamwe rya Claude"
    assert deleted.status_code == status.HTTP_204_NO_CONTENT
    assert missing.status_code == status.HTTP_404_NOT_FOUND
    assert client.get("/api/v1/admin/content/copy").json()["total_count"] == 4
