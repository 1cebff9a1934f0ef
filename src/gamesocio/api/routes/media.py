"""Media post routes for the API."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Path, Query, status

from gamesocio.api.dependencies import get_current_user
from gamesocio.api.errors import to_http_error
from gamesocio.api.schemas.common import UpvoteRequest, UpvoteResponse
from gamesocio.api.schemas.media import (
    MediaPostCreateRequest,
    MediaPostResponse,
    MediaPostUpdateRequest,
)
from gamesocio.constants import MediaCategory
from gamesocio.models import CurrentUser, GameSocioError
from gamesocio.services import content_repository
from gamesocio.services.counters import add_upvote, increment_upvote

router = APIRouter(prefix="/media", tags=["media"])

TABLE = "media_posts"


@router.get(
    "",
    response_model=list[MediaPostResponse],
    summary="List media posts",
    description="Return media posts newest first, optionally filtered by category or text.",
)
def list_media_posts(
    category: Annotated[MediaCategory | None, Query(description="Media category")] = None,
    q: Annotated[str | None, Query(description="Search title and content")] = None,
) -> list[MediaPostResponse]:
    filters = {"category": category} if category is not None else None
    try:
        results = content_repository.select(TABLE, filters, joins=("profile",), search=q)
    except GameSocioError as exc:
        raise to_http_error(exc) from exc
    return [MediaPostResponse(**r) for r in results]


@router.get("/{post_id}", response_model=MediaPostResponse)
def get_media_post(
    post_id: Annotated[str, Path(description="Media post ID")],
) -> MediaPostResponse:
    try:
        result = content_repository.get(TABLE, post_id, joins=("profile",))
    except GameSocioError as exc:
        raise to_http_error(exc) from exc
    if result is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Media post {post_id} not found",
        )
    return MediaPostResponse(**result)


@router.post("", response_model=MediaPostResponse, status_code=status.HTTP_201_CREATED)
def create_media_post(
    data: MediaPostCreateRequest,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> MediaPostResponse:
    """Publish a media post as the signed-in user."""
    try:
        result = content_repository.insert(TABLE, current_user, data.model_dump())
    except GameSocioError as exc:
        raise to_http_error(exc) from exc
    return MediaPostResponse(**result)


@router.patch("/{post_id}", response_model=MediaPostResponse)
def update_media_post(
    post_id: Annotated[str, Path(description="Media post ID")],
    data: MediaPostUpdateRequest,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> MediaPostResponse:
    """Update one of your media posts. Only provided fields are updated."""
    try:
        result = content_repository.update(
            TABLE, current_user, post_id, data.model_dump(exclude_unset=True)
        )
    except GameSocioError as exc:
        raise to_http_error(exc) from exc
    return MediaPostResponse(**result)


@router.delete("/{post_id}", response_model=MediaPostResponse)
def delete_media_post(
    post_id: Annotated[str, Path(description="Media post ID")],
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> MediaPostResponse:
    try:
        result = content_repository.delete(TABLE, current_user, post_id)
    except GameSocioError as exc:
        raise to_http_error(exc) from exc
    return MediaPostResponse(**result)


@router.post(
    "/{post_id}/upvote",
    response_model=UpvoteResponse,
    summary="Upvote a media post",
    description=(
        "Any signed-in user may upvote. With ``current_upvotes`` the stored count "
        "becomes that value plus one; without it the stored count is incremented."
    ),
)
def upvote_media_post(
    post_id: Annotated[str, Path(description="Media post ID")],
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    data: UpvoteRequest | None = None,
) -> UpvoteResponse:
    try:
        if data is not None and data.current_upvotes is not None:
            upvotes = increment_upvote(TABLE, post_id, data.current_upvotes, actor=current_user)
        else:
            upvotes = add_upvote(TABLE, post_id, actor=current_user)
    except GameSocioError as exc:
        raise to_http_error(exc) from exc
    return UpvoteResponse(id=post_id, upvotes=upvotes)
