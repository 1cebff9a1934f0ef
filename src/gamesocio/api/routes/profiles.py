"""Profile routes for the API."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Path, status

from gamesocio.api.dependencies import get_current_user, get_current_user_id
from gamesocio.api.errors import to_http_error
from gamesocio.api.schemas.profiles import (
    ProfileCreateRequest,
    ProfileResponse,
    ProfileUpdateRequest,
)
from gamesocio.models import CurrentUser, GameSocioError
from gamesocio.services.profiles import create_profile, get_profile, update_profile

router = APIRouter(prefix="/profiles", tags=["profiles"])


@router.post(
    "",
    response_model=ProfileResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create your profile",
    description="Create the profile of the signed-in user. Called once after sign-up.",
    responses={409: {"description": "Profile exists or username taken"}},
)
def create_profile_endpoint(
    data: ProfileCreateRequest,
    user_id: Annotated[str, Depends(get_current_user_id)],
) -> ProfileResponse:
    try:
        result = create_profile(user_id, data.username, avatar_url=data.avatar_url, bio=data.bio)
    except GameSocioError as exc:
        raise to_http_error(exc) from exc
    return ProfileResponse(**result)


@router.get("/me", response_model=ProfileResponse)
def get_my_profile(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> ProfileResponse:
    """Return the signed-in user's profile."""
    return get_profile_by_id(current_user.id)


@router.patch("/me", response_model=ProfileResponse)
def update_my_profile(
    data: ProfileUpdateRequest,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> ProfileResponse:
    """Update the signed-in user's profile. Only provided fields are updated."""
    try:
        result = update_profile(current_user, data.model_dump(exclude_unset=True))
    except GameSocioError as exc:
        raise to_http_error(exc) from exc
    return ProfileResponse(**result)


@router.get("/{user_id}", response_model=ProfileResponse)
def get_profile_by_id(
    user_id: Annotated[str, Path(description="Profile id")],
) -> ProfileResponse:
    """Get a public profile."""
    try:
        result = get_profile(user_id)
    except GameSocioError as exc:
        raise to_http_error(exc) from exc
    if result is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Profile '{user_id}' not found",
        )
    return ProfileResponse(**result)
