"""Tests for the project, feedback and collaborator request API endpoints."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from gamesocio.api.main import app

ALICE = {"X-User-Id": "uid-alice"}
BOB = {"X-User-Id": "uid-bob"}


@pytest.fixture
def client() -> TestClient:
    client = TestClient(app)
    client.post("/api/profiles", json={"username": "alice"}, headers=ALICE)
    client.post("/api/profiles", json={"username": "bob"}, headers=BOB)
    return client


@pytest.fixture
def project(client: TestClient) -> dict:
    response = client.post(
        "/api/projects",
        json={"title": "Skyforge", "description": "Sky RPG", "stage": "Prototype"},
        headers=ALICE,
    )
    assert response.status_code == 201
    return response.json()


class TestProjects:
    def test_new_project_is_unrated(self, project: dict) -> None:
        assert project["rating_sum"] == 0
        assert project["rating_count"] == 0
        assert project["average_rating"] == 0
        assert project["stage"] == "Prototype"

    def test_rating_aggregate_cannot_be_patched(self, client: TestClient, project: dict) -> None:
        client.patch(f"/api/projects/{project['id']}", json={"rating_sum": 50}, headers=ALICE)
        assert client.get(f"/api/projects/{project['id']}").json()["rating_sum"] == 0

    def test_only_owner_can_delete(self, client: TestClient, project: dict) -> None:
        assert client.delete(f"/api/projects/{project['id']}", headers=BOB).status_code == 403
        assert client.delete(f"/api/projects/{project['id']}", headers=ALICE).status_code == 200
        assert client.get(f"/api/projects/{project['id']}").status_code == 404


class TestFeedback:
    def test_ratings_update_average(self, client: TestClient, project: dict) -> None:
        url = f"/api/projects/{project['id']}/feedback"
        client.post(url, json={"rating": 5, "content": "Loved it"}, headers=BOB)
        client.post(url, json={"rating": 3, "content": "Okay"}, headers=ALICE)
        response = client.post(url, json={"rating": 4, "content": "Nice"}, headers=BOB)

        assert response.status_code == 201
        data = response.json()
        assert (data["rating_sum"], data["rating_count"]) == (12, 3)
        assert data["average_rating"] == 4.0

        listed = client.get(url).json()
        assert len(listed) == 3
        assert {f["profile"]["username"] for f in listed} == {"alice", "bob"}

        fetched = client.get(f"/api/projects/{project['id']}").json()
        assert fetched["average_rating"] == 4.0

    @pytest.mark.parametrize("rating", [0, 6])
    def test_out_of_range_rating_is_rejected(
        self, client: TestClient, project: dict, rating: int
    ) -> None:
        url = f"/api/projects/{project['id']}/feedback"

        response = client.post(url, json={"rating": rating, "content": "x"}, headers=BOB)

        assert response.status_code == 422
        assert client.get(f"/api/projects/{project['id']}").json()["rating_count"] == 0
        assert client.get(url).json() == []

    def test_feedback_on_missing_project(self, client: TestClient) -> None:
        response = client.post(
            "/api/projects/missing/feedback", json={"rating": 4, "content": "x"}, headers=BOB
        )
        assert response.status_code == 404
        assert client.get("/api/projects/missing/feedback").status_code == 404


class TestCollaboratorRequests:
    def test_owner_opens_roles(self, client: TestClient, project: dict) -> None:
        url = f"/api/projects/{project['id']}/collaborator-requests"

        denied = client.post(url, json={"role_type": "Coder", "description": "x"}, headers=BOB)
        created = client.post(
            url, json={"role_type": "Artist", "description": "Sprites"}, headers=ALICE
        )

        assert denied.status_code == 403
        assert created.status_code == 201
        assert [r["role_type"] for r in client.get(url).json()] == ["Artist"]

    def test_list_filter_and_counts(self, client: TestClient, project: dict) -> None:
        url = f"/api/projects/{project['id']}/collaborator-requests"
        for role in ("Artist", "Artist", "Sound Designer"):
            client.post(url, json={"role_type": role, "description": "Help"}, headers=ALICE)

        artists = client.get(
            "/api/projects/collaborator-requests", params={"role_type": "Artist"}
        ).json()
        counts = client.get("/api/projects/collaborator-requests/role-counts").json()

        assert len(artists) == 2
        assert artists[0]["project"] == {"title": "Skyforge"}
        assert counts == {"Artist": 2, "Sound Designer": 1}

    def test_update_and_delete_request(self, client: TestClient, project: dict) -> None:
        url = f"/api/projects/{project['id']}/collaborator-requests"
        request = client.post(
            url, json={"role_type": "Writer", "description": "Lore"}, headers=ALICE
        ).json()
        request_url = f"/api/projects/collaborator-requests/{request['id']}"

        assert client.patch(request_url, json={"description": "x"}, headers=BOB).status_code == 403
        updated = client.patch(request_url, json={"description": "Quests"}, headers=ALICE)
        deleted = client.delete(request_url, headers=ALICE)

        assert updated.json()["description"] == "Quests"
        assert deleted.status_code == 200
        assert client.get(url).json() == []
