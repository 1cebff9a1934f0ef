"""Event routes for the API."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Path, Query, status

from gamesocio.api.dependencies import get_current_user
from gamesocio.api.errors import to_http_error
from gamesocio.api.schemas.events import EventCreateRequest, EventResponse, EventUpdateRequest
from gamesocio.constants import EventType
from gamesocio.models import CurrentUser, GameSocioError
from gamesocio.services import content_repository

router = APIRouter(prefix="/events", tags=["events"])

TABLE = "events"


@router.get(
    "",
    response_model=list[EventResponse],
    summary="List events",
    description=(
        "Return community events soonest first, optionally filtered by type and "
        "a case-insensitive search of title and description."
    ),
)
def list_events(
    event_type: Annotated[EventType | None, Query(description="Kind of event")] = None,
    q: Annotated[str | None, Query(description="Search title and description")] = None,
) -> list[EventResponse]:
    filters = {"event_type": event_type} if event_type is not None else None
    try:
        results = content_repository.select(
            TABLE,
            filters,
            order_by="event_date",
            descending=False,
            joins=("profile",),
            search=q,
        )
    except GameSocioError as exc:
        raise to_http_error(exc) from exc
    return [EventResponse(**r) for r in results]


@router.get("/{event_id}", response_model=EventResponse)
def get_event(
    event_id: Annotated[str, Path(description="Event ID")],
) -> EventResponse:
    try:
        result = content_repository.get(TABLE, event_id, joins=("profile",))
    except GameSocioError as exc:
        raise to_http_error(exc) from exc
    if result is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Event {event_id} not found",
        )
    return EventResponse(**result)


@router.post("", response_model=EventResponse, status_code=status.HTTP_201_CREATED)
def create_event(
    data: EventCreateRequest,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> EventResponse:
    """Organise a new event as the signed-in user."""
    try:
        result = content_repository.insert(TABLE, current_user, data.model_dump())
    except GameSocioError as exc:
        raise to_http_error(exc) from exc
    return EventResponse(**result)


@router.patch("/{event_id}", response_model=EventResponse)
def update_event(
    event_id: Annotated[str, Path(description="Event ID")],
    data: EventUpdateRequest,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> EventResponse:
    """Update one of your events. Only provided fields are updated."""
    try:
        result = content_repository.update(
            TABLE, current_user, event_id, data.model_dump(exclude_unset=True)
        )
    except GameSocioError as exc:
        raise to_http_error(exc) from exc
    return EventResponse(**result)


@router.delete("/{event_id}", response_model=EventResponse)
def delete_event(
    event_id: Annotated[str, Path(description="Event ID")],
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> EventResponse:
    try:
        result = content_repository.delete(TABLE, current_user, event_id)
    except GameSocioError as exc:
        raise to_http_error(exc) from exc
    return EventResponse(**result)
