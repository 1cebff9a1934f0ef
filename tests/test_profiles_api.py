"""Tests for the profile API endpoints."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from gamesocio.api.main import app

HEADERS = {"X-User-Id": "uid-1"}


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)


def test_sign_up_creates_profile(client: TestClient) -> None:
    response = client.post(
        "/api/profiles", json={"username": "pixelqueen", "bio": "Artist"}, headers=HEADERS
    )

    assert response.status_code == 201
    data = response.json()
    assert data["id"] == "uid-1"
    assert data["username"] == "pixelqueen"

    me = client.get("/api/profiles/me", headers=HEADERS)
    assert me.status_code == 200
    assert me.json()["bio"] == "Artist"


def test_duplicate_sign_up_conflicts(client: TestClient) -> None:
    client.post("/api/profiles", json={"username": "pixelqueen"}, headers=HEADERS)

    again = client.post("/api/profiles", json={"username": "other"}, headers=HEADERS)
    taken = client.post(
        "/api/profiles", json={"username": "pixelqueen"}, headers={"X-User-Id": "uid-2"}
    )

    assert again.status_code == 409
    assert taken.status_code == 409


def test_update_my_profile(client: TestClient) -> None:
    client.post("/api/profiles", json={"username": "pixelqueen"}, headers=HEADERS)

    response = client.patch("/api/profiles/me", json={"bio": "Now coding"}, headers=HEADERS)

    assert response.status_code == 200
    assert response.json()["bio"] == "Now coding"
    assert client.get("/api/profiles/uid-1").json()["bio"] == "Now coding"


def test_unknown_profile_returns_404(client: TestClient) -> None:
    assert client.get("/api/profiles/missing").status_code == 404
