"""Shared dependencies for API routes."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Header, HTTPException, status

from gamesocio.models import CurrentUser
from gamesocio.services.profiles import get_current_user as resolve_current_user


def get_current_user_id(
    x_user_id: Annotated[
        str | None,
        Header(description="Identity-provider user id of the signed-in user."),
    ] = None,
) -> str:
    """Get the signed-in user id from the request.

    Args:
        x_user_id: User id from the X-User-Id header.

    Returns:
        str: Authenticated user id.

    Raises:
        HTTPException: If authentication is missing (401).
    """
    if not x_user_id or not x_user_id.strip():
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing authentication. Please provide X-User-Id header.",
        )
    return x_user_id.strip()


def get_current_user(
    user_id: Annotated[str, Depends(get_current_user_id)],
) -> CurrentUser:
    """Resolve the signed-in user to the profile they act as.

    Raises:
        HTTPException: 401 if the user has not created a profile yet.
    """
    user = resolve_current_user(user_id)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="No profile for this user. Create one with POST /api/profiles.",
        )
    return user
