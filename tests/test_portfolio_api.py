"""Tests for the portfolio API endpoints."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from gamesocio.api.main import app
from gamesocio.services.object_storage import get_object_storage

ALICE = {"X-User-Id": "uid-alice"}
BOB = {"X-User-Id": "uid-bob"}


@pytest.fixture
def client() -> TestClient:
    client = TestClient(app)
    client.post("/api/profiles", json={"username": "alice"}, headers=ALICE)
    client.post("/api/profiles", json={"username": "bob"}, headers=BOB)
    return client


@pytest.fixture
def item(client: TestClient) -> dict:
    response = client.post(
        "/api/portfolio",
        json={"title": "Level Pack", "description": "Ten levels", "tags": ["lvl", "lvl"]},
        headers=ALICE,
    )
    assert response.status_code == 201
    return response.json()


def _upload(client: TestClient, item_id: str, name: str, data: bytes, headers=ALICE):
    return client.post(
        f"/api/portfolio/{item_id}/attachment/file",
        files={"file": (name, data, "application/octet-stream")},
        headers=headers,
    )


def test_create_and_list(client: TestClient, item: dict) -> None:
    assert item["attachment"] is None
    assert item["tags"] == ["lvl"]

    listed = client.get("/api/portfolio/user/uid-alice").json()
    assert [i["id"] for i in listed] == [item["id"]]


def test_upload_is_served_back(client: TestClient, item: dict) -> None:
    response = _upload(client, item["id"], "cover.png", b"\x89PNG-data")

    assert response.status_code == 200
    attachment = response.json()["attachment"]
    assert attachment["kind"] == "image"
    assert attachment["display_name"] == "cover.png"
    assert attachment["url"].startswith(
        "http://testserver/storage/portfolio_uploads/uid-alice/uid-alice-"
    )

    served = client.get(attachment["url"].removeprefix("http://testserver"))
    assert served.status_code == 200
    assert served.content == b"\x89PNG-data"


def test_unsupported_or_empty_upload(client: TestClient, item: dict) -> None:
    assert _upload(client, item["id"], "bundle.zip", b"zip").status_code == 400
    assert _upload(client, item["id"], "cover.png", b"").status_code == 400


def test_second_attachment_conflicts(client: TestClient, item: dict) -> None:
    _upload(client, item["id"], "doc.pdf", b"%PDF")

    response = client.post(
        f"/api/portfolio/{item['id']}/attachment/link",
        json={"url": "https://itch.io/levels"},
        headers=ALICE,
    )

    assert response.status_code == 409


def test_other_users_cannot_attach(client: TestClient, item: dict) -> None:
    assert _upload(client, item["id"], "cover.png", b"img", headers=BOB).status_code == 403


def test_clear_then_link(client: TestClient, item: dict) -> None:
    uploaded = _upload(client, item["id"], "doc.pdf", b"%PDF").json()
    key = uploaded["attachment"]["url"].split("/portfolio_uploads/", 1)[1]

    cleared = client.delete(f"/api/portfolio/{item['id']}/attachment", headers=ALICE)
    linked = client.post(
        f"/api/portfolio/{item['id']}/attachment/link",
        json={"url": "https://itch.io/levels"},
        headers=ALICE,
    )

    assert cleared.json()["attachment"] is None
    assert not get_object_storage().exists("portfolio_uploads", key)
    assert linked.json()["attachment"] == {
        "kind": "link",
        "url": "https://itch.io/levels",
        "display_name": "https://itch.io/levels",
    }


def test_delete_item_removes_upload(client: TestClient, item: dict) -> None:
    uploaded = _upload(client, item["id"], "cover.png", b"img").json()
    path = uploaded["attachment"]["url"].removeprefix("http://testserver")

    response = client.delete(f"/api/portfolio/{item['id']}", headers=ALICE)

    assert response.status_code == 200
    assert client.get(f"/api/portfolio/{item['id']}").status_code == 404
    assert client.get(path).status_code == 404


def test_purge_orphans(client: TestClient) -> None:
    response = client.post("/api/portfolio/orphans/purge", headers=ALICE)

    assert response.status_code == 200
    assert response.json() == {"purged": 0}
    assert client.post("/api/portfolio/orphans/purge").status_code == 401


def test_storage_rejects_traversal(client: TestClient) -> None:
    assert client.get("/storage/portfolio_uploads/..%2F..%2Fapi.db").status_code == 404
