"""Tests for the local-disk object store."""

from __future__ import annotations

import pytest

from gamesocio.models import ConflictError, ValidationError
from gamesocio.services.object_storage import (
    DEFAULT_PUBLIC_URL,
    get_object_storage,
    get_public_base_url,
    get_storage_root,
    reset_object_storage,
)


def test_put_writes_bytes_under_bucket(storage):
    storage.put("portfolio_uploads", "u1/u1-1.png", b"png-bytes")

    path = storage.path_for("portfolio_uploads", "u1/u1-1.png")
    assert path.read_bytes() == b"png-bytes"
    assert storage.exists("portfolio_uploads", "u1/u1-1.png")


def test_put_refuses_to_overwrite(storage):
    storage.put("portfolio_uploads", "u1/a.png", b"first")

    with pytest.raises(ConflictError):
        storage.put("portfolio_uploads", "u1/a.png", b"second")

    assert storage.path_for("portfolio_uploads", "u1/a.png").read_bytes() == b"first"


def test_put_overwrite_replaces(storage):
    storage.put("portfolio_uploads", "u1/a.png", b"first")
    storage.put("portfolio_uploads", "u1/a.png", b"second", overwrite=True)
    assert storage.path_for("portfolio_uploads", "u1/a.png").read_bytes() == b"second"


def test_remove_ignores_missing_keys(storage):
    storage.put("portfolio_uploads", "u1/a.png", b"x")

    removed = storage.remove("portfolio_uploads", ["u1/a.png", "u1/missing.png"])

    assert removed == ["u1/a.png"]
    assert not storage.exists("portfolio_uploads", "u1/a.png")


def test_public_url(storage):
    assert storage.public_url("portfolio_uploads", "u1/a.png") == (
        "http://testserver/storage/portfolio_uploads/u1/a.png"
    )


@pytest.mark.parametrize("key", ["../escape.png", "/abs.png", "u1/../../x", "u1\\x.png", ""])
def test_unsafe_keys_are_rejected(storage, key):
    with pytest.raises(ValidationError):
        storage.path_for("portfolio_uploads", key)


def test_nested_bucket_is_rejected(storage):
    with pytest.raises(ValidationError):
        storage.path_for("a/b", "x.png")


def test_environment_configures_store(monkeypatch, tmp_path):
    monkeypatch.setenv("GAMESOCIO_STORAGE_DIR", str(tmp_path / "objects"))
    monkeypatch.setenv("GAMESOCIO_PUBLIC_URL", "https://cdn.example.com/files/")
    reset_object_storage()
    try:
        store = get_object_storage()
        assert store.root == (tmp_path / "objects").resolve()
        assert store.public_base_url == "https://cdn.example.com/files"
        assert get_object_storage() is store
    finally:
        reset_object_storage()


def test_defaults_without_environment(monkeypatch):
    monkeypatch.delenv("GAMESOCIO_STORAGE_DIR", raising=False)
    monkeypatch.delenv("GAMESOCIO_PUBLIC_URL", raising=False)
    assert get_storage_root().name == ".gamesocio_storage"
    assert get_public_base_url() == DEFAULT_PUBLIC_URL
