"""Profile service: the sign-up hook and profile editing.

A profile is created by the user it belongs to right after they first
authenticate; its id is the identity-provider user id.
"""

from __future__ import annotations

import logging
from typing import TypedDict

from sqlalchemy.exc import SQLAlchemyError

from gamesocio.data.db import get_session
from gamesocio.data.models import Profile
from gamesocio.models import ConflictError, CurrentUser, StorageError, ValidationError
from gamesocio.services import content_repository

logger = logging.getLogger(__name__)

__all__ = [
    "ProfileData",
    "create_profile",
    "get_current_user",
    "get_profile",
    "update_profile",
]

_EDITABLE_FIELDS = ("username", "avatar_url", "bio")


class ProfileData(TypedDict, total=False):
    """TypedDict for editable profile fields."""

    username: str
    avatar_url: str | None
    bio: str | None


def _username_taken(username: str, exclude_id: str | None = None) -> bool:
    try:
        with get_session() as session:
            query = session.query(Profile.id).filter(Profile.username == username)
            if exclude_id is not None:
                query = query.filter(Profile.id != exclude_id)
            return query.first() is not None
    except SQLAlchemyError as exc:
        logger.exception("Failed to check username %s", username)
        raise StorageError("Failed to load profiles.") from exc


def _clean_username(username: str | None) -> str:
    cleaned = (username or "").strip()
    if not cleaned:
        raise ValidationError("Username cannot be empty.")
    return cleaned


def get_profile(user_id: str) -> dict | None:
    """Return the profile for ``user_id``, or None if the user has none yet."""
    return content_repository.get("profiles", user_id)


def get_current_user(user_id: str) -> CurrentUser | None:
    """Resolve an identity-provider user id to the acting user, if it has a profile."""
    profile = get_profile(user_id)
    if profile is None:
        return None
    return CurrentUser(id=profile["id"], username=profile["username"])


def create_profile(
    user_id: str, username: str, *, avatar_url: str | None = None, bio: str | None = None
) -> dict:
    """Create the profile of a newly authenticated user.

    Raises:
        ValidationError: Blank user id or username.
        ConflictError: The user already has a profile or the username is taken.
    """
    if not user_id or not user_id.strip():
        raise ValidationError("User id cannot be empty.")
    username_clean = _clean_username(username)

    if get_profile(user_id) is not None:
        raise ConflictError("Profile already exists.")
    if _username_taken(username_clean):
        raise ConflictError(f"Username '{username_clean}' is already taken.")

    actor = CurrentUser(id=user_id, username=username_clean)
    profile = content_repository.insert(
        "profiles",
        actor,
        {"username": username_clean, "avatar_url": avatar_url, "bio": bio},
    )
    logger.info("Created profile for %s", user_id)
    return profile


def update_profile(actor: CurrentUser | None, profile_data: ProfileData) -> dict | None:
    """Update the acting user's own profile; only provided fields change.

    Returns:
        The updated profile, or None when no user is signed in.
    """
    if actor is None:
        logger.warning("Ignoring profile update without a signed-in user")
        return None

    changes = {key: profile_data[key] for key in _EDITABLE_FIELDS if key in profile_data}
    if "username" in changes:
        changes["username"] = _clean_username(changes["username"])
        if _username_taken(changes["username"], exclude_id=actor.id):
            raise ConflictError(f"Username '{changes['username']}' is already taken.")

    return content_repository.update("profiles", actor, actor.id, changes)
