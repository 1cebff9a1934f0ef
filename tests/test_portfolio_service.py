"""Tests for portfolio items and their persisted attachments."""

from __future__ import annotations

from unittest.mock import Mock

import pytest

from gamesocio.models import (
    AttachmentKind,
    AttachmentStateError,
    NotFoundError,
    PermissionDeniedError,
    StorageError,
    ValidationError,
)
from gamesocio.services import portfolio
from gamesocio.services.attachments import attach_file, attach_link
from gamesocio.services.object_storage import LocalObjectStorage

BUCKET = "portfolio_uploads"


@pytest.fixture
def item(alice):
    return portfolio.create_portfolio_item(
        alice, {"title": "Level Pack", "description": "Ten handmade levels", "tags": ["lvl"]}
    )


def test_create_without_attachment(item, alice):
    assert item["user_id"] == alice.id
    assert item["attachment"] is None
    assert item["file_type"] is None
    assert portfolio.list_portfolio_items(alice.id)[0]["id"] == item["id"]


def test_create_with_uploaded_attachment(alice, storage):
    attachment = attach_file(b"img", "cover.png", alice.id, storage=storage, now_ms=11)

    record = portfolio.create_portfolio_item(
        alice, {"title": "Art", "description": "Concept art"}, attachment, storage=storage
    )

    assert record["file_type"] == "image"
    assert record["file_name"] == "cover.png"
    assert record["file_key"] == f"{alice.id}/{alice.id}-11.png"
    assert record["attachment"] == attachment


def test_failed_create_detaches_uploaded_object(alice, storage):
    attachment = attach_file(b"img", "cover.png", alice.id, storage=storage, now_ms=12)

    with pytest.raises(ValidationError):
        portfolio.create_portfolio_item(
            alice, {"title": "Art"}, attachment, storage=storage
        )

    assert not storage.exists(BUCKET, attachment.storage_key)
    assert portfolio.list_portfolio_items(alice.id) == []


def test_attach_file_to_item(item, alice, storage):
    record = portfolio.attach_portfolio_file(
        alice, item["id"], b"%PDF-1.7", "design.pdf", storage=storage
    )

    assert record["attachment"].kind is AttachmentKind.PDF
    assert storage.exists(BUCKET, record["file_key"])
    assert portfolio.get_portfolio_item(item["id"])["file_url"] == record["file_url"]


def test_attach_requires_empty_item(item, alice, storage):
    portfolio.attach_portfolio_link(alice, item["id"], "https://itch.io/levels")

    with pytest.raises(AttachmentStateError):
        portfolio.attach_portfolio_file(alice, item["id"], b"img", "a.png", storage=storage)
    with pytest.raises(AttachmentStateError):
        portfolio.attach_portfolio_link(alice, item["id"], "https://example.com")

    assert not (storage.root / BUCKET).exists()


def test_only_owner_can_attach(item, bob, storage):
    with pytest.raises(PermissionDeniedError):
        portfolio.attach_portfolio_file(bob, item["id"], b"img", "a.png", storage=storage)
    with pytest.raises(NotFoundError):
        portfolio.attach_portfolio_link(bob, "missing", "https://example.com")


def test_failed_persist_rolls_back_upload(item, alice, storage, monkeypatch):
    def fail_store(*args, **kwargs):
        raise StorageError("database is locked")

    monkeypatch.setattr(portfolio, "_store_attachment", fail_store)

    with pytest.raises(StorageError):
        portfolio.attach_portfolio_file(alice, item["id"], b"img", "a.png", storage=storage)

    assert list((storage.root / BUCKET).rglob("*.png")) == []


def test_attach_after_concurrent_attach_is_rejected(item, alice, storage, monkeypatch):
    stale = portfolio.get_portfolio_item(item["id"])
    first = portfolio.attach_portfolio_file(alice, item["id"], b"one", "a.png", storage=storage)
    monkeypatch.setattr(portfolio, "_load_owned", lambda actor, item_id: stale)

    with pytest.raises(AttachmentStateError):
        portfolio.attach_portfolio_file(alice, item["id"], b"two", "b.gif", storage=storage)

    current = portfolio.get_portfolio_item(item["id"])
    assert current["file_key"] == first["file_key"]
    stored = [p for p in (storage.root / BUCKET).rglob("*") if p.is_file()]
    assert [p.name for p in stored] == [first["file_key"].rsplit("/", 1)[1]]


def test_clear_attachment_deletes_stored_object(item, alice, storage):
    record = portfolio.attach_portfolio_file(
        alice, item["id"], b"img", "shot.png", storage=storage
    )

    cleared = portfolio.clear_portfolio_attachment(alice, item["id"], storage=storage)

    assert cleared["attachment"] is None
    assert cleared["file_key"] is None
    assert not storage.exists(BUCKET, record["file_key"])


def test_clear_link_touches_no_storage(item, alice):
    storage = Mock(spec=LocalObjectStorage)
    portfolio.attach_portfolio_link(alice, item["id"], "https://itch.io/levels")

    cleared = portfolio.clear_portfolio_attachment(alice, item["id"], storage=storage)

    assert cleared["attachment"] is None
    storage.remove.assert_not_called()


def test_replace_attachment_after_clear(item, alice, storage):
    portfolio.attach_portfolio_link(alice, item["id"], "https://itch.io/levels")
    portfolio.clear_portfolio_attachment(alice, item["id"], storage=storage)

    record = portfolio.attach_portfolio_file(alice, item["id"], b"img", "a.gif", storage=storage)

    assert record["attachment"].kind is AttachmentKind.IMAGE


def test_delete_item_detaches_after_row_is_gone(item, alice, storage):
    record = portfolio.attach_portfolio_file(alice, item["id"], b"img", "a.png", storage=storage)

    snapshot = portfolio.delete_portfolio_item(alice, item["id"], storage=storage)

    assert snapshot["id"] == item["id"]
    assert portfolio.get_portfolio_item(item["id"]) is None
    assert not storage.exists(BUCKET, record["file_key"])


def test_delete_by_non_owner_keeps_item_and_file(item, alice, bob, storage):
    record = portfolio.attach_portfolio_file(alice, item["id"], b"img", "a.png", storage=storage)

    with pytest.raises(PermissionDeniedError):
        portfolio.delete_portfolio_item(bob, item["id"], storage=storage)

    assert portfolio.get_portfolio_item(item["id"]) is not None
    assert storage.exists(BUCKET, record["file_key"])


def test_update_item_leaves_attachment_alone(item, alice):
    portfolio.attach_portfolio_link(alice, item["id"], "https://itch.io/levels")

    updated = portfolio.update_portfolio_item(alice, item["id"], {"title": "Level Pack II"})

    assert updated["title"] == "Level Pack II"
    assert updated["attachment"] == attach_link("https://itch.io/levels")
    with pytest.raises(ValidationError):
        portfolio.update_portfolio_item(alice, item["id"], {"file_url": "http://evil"})


def test_writes_without_actor_are_no_ops(item, storage):
    assert portfolio.create_portfolio_item(None, {"title": "t", "description": "d"}) is None
    assert portfolio.attach_portfolio_file(None, item["id"], b"x", "a.png", storage=storage) is None
    assert portfolio.attach_portfolio_link(None, item["id"], "https://x") is None
    assert portfolio.clear_portfolio_attachment(None, item["id"]) is None
    assert portfolio.delete_portfolio_item(None, item["id"]) is None
    assert portfolio.get_portfolio_item(item["id"]) is not None
