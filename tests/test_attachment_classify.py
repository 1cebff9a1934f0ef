"""Tests for attachment classification and storage key naming."""

from __future__ import annotations

import re

import pytest

from gamesocio.models import AttachmentKind, ValidationError
from gamesocio.services.attachments import build_storage_key, classify, extension_of


@pytest.mark.parametrize(
    ("file_name", "expected"),
    [
        ("cover.png", AttachmentKind.IMAGE),
        ("photo.JPG", AttachmentKind.IMAGE),
        ("shot.jpeg", AttachmentKind.IMAGE),
        ("anim.gif", AttachmentKind.IMAGE),
        ("art.webp", AttachmentKind.IMAGE),
        ("design-doc.pdf", AttachmentKind.PDF),
        ("DESIGN.PDF", AttachmentKind.PDF),
        ("archive.zip", AttachmentKind.LINK),
        ("README", AttachmentKind.LINK),
        ("https://example.com/game", AttachmentKind.LINK),
        ("", AttachmentKind.LINK),
        (None, AttachmentKind.LINK),
    ],
)
def test_classify(file_name, expected):
    assert classify(file_name) is expected


def test_extension_uses_last_dot_of_base_name():
    assert extension_of("my.game.v2.tar.gz") == "gz"
    assert extension_of("folder.d/notes") == ""
    assert extension_of("trailing.") == ""


def test_storage_key_is_namespaced_by_owner():
    assert build_storage_key("u1", "art.png", now_ms=1731000000000) == (
        "u1/u1-1731000000000.png"
    )


def test_storage_key_keeps_extension_case():
    assert build_storage_key("u1", "Scan.PDF", now_ms=5) == "u1/u1-5.PDF"


def test_storage_key_without_extension_has_no_suffix():
    assert build_storage_key("u1", "README", now_ms=5) == "u1/u1-5"


def test_storage_key_defaults_to_current_time():
    key = build_storage_key("u1", "art.png")
    assert re.fullmatch(r"u1/u1-\d+\.png", key)


@pytest.mark.parametrize("owner_id", ["", "a/b", "..", "."])
def test_storage_key_rejects_unsafe_owner(owner_id):
    with pytest.raises(ValidationError):
        build_storage_key(owner_id, "art.png")
