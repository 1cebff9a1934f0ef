"""Tests for the profile service."""

from __future__ import annotations

import pytest

from gamesocio.models import ConflictError, CurrentUser, ValidationError
from gamesocio.services.profiles import (
    create_profile,
    get_current_user,
    get_profile,
    update_profile,
)

pytestmark = pytest.mark.usefixtures("api_db")


def test_create_and_get_profile():
    profile = create_profile("uid-1", "  pixelqueen ", bio="Pixel artist")

    assert profile["id"] == "uid-1"
    assert profile["username"] == "pixelqueen"
    assert profile["badges"] == []
    assert get_profile("uid-1")["bio"] == "Pixel artist"
    assert get_profile("uid-2") is None


def test_duplicate_profile_or_username_conflicts():
    create_profile("uid-1", "pixelqueen")

    with pytest.raises(ConflictError):
        create_profile("uid-1", "another")
    with pytest.raises(ConflictError):
        create_profile("uid-2", "pixelqueen")


@pytest.mark.parametrize(("user_id", "username"), [("", "name"), ("uid", "  ")])
def test_blank_identity_is_rejected(user_id, username):
    with pytest.raises(ValidationError):
        create_profile(user_id, username)


def test_current_user_requires_a_profile():
    assert get_current_user("uid-1") is None

    create_profile("uid-1", "pixelqueen")

    assert get_current_user("uid-1") == CurrentUser(id="uid-1", username="pixelqueen")


def test_update_profile_changes_only_given_fields():
    create_profile("uid-1", "pixelqueen", bio="Pixel artist", avatar_url="http://a/1.png")
    actor = CurrentUser(id="uid-1", username="pixelqueen")

    updated = update_profile(actor, {"bio": "Now also coding"})

    assert updated["bio"] == "Now also coding"
    assert updated["avatar_url"] == "http://a/1.png"


def test_update_username_must_stay_unique():
    create_profile("uid-1", "pixelqueen")
    create_profile("uid-2", "chipbard")
    actor = CurrentUser(id="uid-2", username="chipbard")

    with pytest.raises(ConflictError):
        update_profile(actor, {"username": "pixelqueen"})
    assert update_profile(actor, {"username": "chipbard"})["username"] == "chipbard"


def test_update_without_actor_is_a_no_op():
    assert update_profile(None, {"bio": "x"}) is None
