"""Game idea routes for the API."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Path, Query, status

from gamesocio.api.dependencies import get_current_user
from gamesocio.api.errors import to_http_error
from gamesocio.api.schemas.common import UpvoteRequest, UpvoteResponse
from gamesocio.api.schemas.ideas import IdeaCreateRequest, IdeaResponse, IdeaUpdateRequest
from gamesocio.constants import IdeaCategory
from gamesocio.models import CurrentUser, GameSocioError
from gamesocio.services import content_repository
from gamesocio.services.counters import add_upvote, increment_upvote

router = APIRouter(prefix="/ideas", tags=["ideas"])

TABLE = "game_ideas"


@router.get(
    "",
    response_model=list[IdeaResponse],
    summary="List game ideas",
    description="Return game ideas newest first, optionally filtered by category or text.",
)
def list_ideas(
    category: Annotated[IdeaCategory | None, Query(description="Idea category")] = None,
    q: Annotated[str | None, Query(description="Search title, summary and genre")] = None,
) -> list[IdeaResponse]:
    filters = {"category": category} if category is not None else None
    try:
        results = content_repository.select(TABLE, filters, joins=("profile",), search=q)
    except GameSocioError as exc:
        raise to_http_error(exc) from exc
    return [IdeaResponse(**r) for r in results]


@router.get("/{idea_id}", response_model=IdeaResponse)
def get_idea(
    idea_id: Annotated[str, Path(description="Idea ID")],
) -> IdeaResponse:
    try:
        result = content_repository.get(TABLE, idea_id, joins=("profile",))
    except GameSocioError as exc:
        raise to_http_error(exc) from exc
    if result is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Idea {idea_id} not found",
        )
    return IdeaResponse(**result)


@router.post("", response_model=IdeaResponse, status_code=status.HTTP_201_CREATED)
def create_idea(
    data: IdeaCreateRequest,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> IdeaResponse:
    """Post a new game idea as the signed-in user."""
    try:
        result = content_repository.insert(TABLE, current_user, data.model_dump())
    except GameSocioError as exc:
        raise to_http_error(exc) from exc
    return IdeaResponse(**result)


@router.patch("/{idea_id}", response_model=IdeaResponse)
def update_idea(
    idea_id: Annotated[str, Path(description="Idea ID")],
    data: IdeaUpdateRequest,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> IdeaResponse:
    """Update one of your ideas. Only provided fields are updated."""
    try:
        result = content_repository.update(
            TABLE, current_user, idea_id, data.model_dump(exclude_unset=True)
        )
    except GameSocioError as exc:
        raise to_http_error(exc) from exc
    return IdeaResponse(**result)


@router.delete("/{idea_id}", response_model=IdeaResponse)
def delete_idea(
    idea_id: Annotated[str, Path(description="Idea ID")],
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> IdeaResponse:
    try:
        result = content_repository.delete(TABLE, current_user, idea_id)
    except GameSocioError as exc:
        raise to_http_error(exc) from exc
    return IdeaResponse(**result)


@router.post(
    "/{idea_id}/upvote",
    response_model=UpvoteResponse,
    summary="Upvote a game idea",
    description=(
        "Any signed-in user may upvote. With ``current_upvotes`` the stored count "
        "becomes that value plus one; without it the stored count is incremented."
    ),
)
def upvote_idea(
    idea_id: Annotated[str, Path(description="Idea ID")],
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    data: UpvoteRequest | None = None,
) -> UpvoteResponse:
    try:
        if data is not None and data.current_upvotes is not None:
            upvotes = increment_upvote(TABLE, idea_id, data.current_upvotes, actor=current_user)
        else:
            upvotes = add_upvote(TABLE, idea_id, actor=current_user)
    except GameSocioError as exc:
        raise to_http_error(exc) from exc
    return UpvoteResponse(id=idea_id, upvotes=upvotes)
