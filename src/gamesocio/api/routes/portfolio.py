"""Portfolio routes for the API."""

from __future__ import annotations

from dataclasses import asdict
from typing import Annotated

from fastapi import APIRouter, Depends, File, Form, HTTPException, Path, UploadFile, status

from gamesocio.api.dependencies import get_current_user
from gamesocio.api.errors import to_http_error
from gamesocio.api.schemas.common import PurgeResponse
from gamesocio.api.schemas.portfolio import (
    PortfolioItemCreateRequest,
    PortfolioItemResponse,
    PortfolioItemUpdateRequest,
    PortfolioLinkRequest,
)
from gamesocio.models import AttachmentKind, CurrentUser, GameSocioError
from gamesocio.services import portfolio as portfolio_service
from gamesocio.services.attachments import purge_orphaned_objects

router = APIRouter(prefix="/portfolio", tags=["portfolio"])


def _item_response(record: dict) -> PortfolioItemResponse:
    attachment = record.get("attachment")
    payload = {**record, "attachment": asdict(attachment) if attachment else None}
    return PortfolioItemResponse(**payload)


@router.post(
    "/orphans/purge",
    response_model=PurgeResponse,
    summary="Purge orphaned uploads",
    description="Retry deletion of stored files whose detach failed earlier.",
)
def purge_orphans(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> PurgeResponse:
    try:
        purged = purge_orphaned_objects()
    except GameSocioError as exc:
        raise to_http_error(exc) from exc
    return PurgeResponse(purged=purged)


@router.get(
    "/user/{user_id}",
    response_model=list[PortfolioItemResponse],
    summary="List portfolio items for a user",
    description="Return all portfolio items belonging to the given user, newest first.",
)
def list_items(
    user_id: Annotated[str, Path(description="Profile id")],
) -> list[PortfolioItemResponse]:
    try:
        results = portfolio_service.list_portfolio_items(user_id)
    except GameSocioError as exc:
        raise to_http_error(exc) from exc
    return [_item_response(r) for r in results]


@router.get("/{item_id}", response_model=PortfolioItemResponse)
def get_item(
    item_id: Annotated[str, Path(description="Portfolio item ID")],
) -> PortfolioItemResponse:
    try:
        result = portfolio_service.get_portfolio_item(item_id)
    except GameSocioError as exc:
        raise to_http_error(exc) from exc
    if result is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Portfolio item {item_id} not found",
        )
    return _item_response(result)


@router.post("", response_model=PortfolioItemResponse, status_code=status.HTTP_201_CREATED)
def create_item(
    data: PortfolioItemCreateRequest,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> PortfolioItemResponse:
    """Create a portfolio item without an attachment."""
    try:
        result = portfolio_service.create_portfolio_item(current_user, data.model_dump())
    except GameSocioError as exc:
        raise to_http_error(exc) from exc
    return _item_response(result)


@router.patch("/{item_id}", response_model=PortfolioItemResponse)
def update_item(
    item_id: Annotated[str, Path(description="Portfolio item ID")],
    data: PortfolioItemUpdateRequest,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> PortfolioItemResponse:
    try:
        result = portfolio_service.update_portfolio_item(
            current_user, item_id, data.model_dump(exclude_unset=True)
        )
    except GameSocioError as exc:
        raise to_http_error(exc) from exc
    return _item_response(result)


@router.delete("/{item_id}", response_model=PortfolioItemResponse)
def delete_item(
    item_id: Annotated[str, Path(description="Portfolio item ID")],
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> PortfolioItemResponse:
    """Delete a portfolio item and its uploaded file, if any."""
    try:
        result = portfolio_service.delete_portfolio_item(current_user, item_id)
    except GameSocioError as exc:
        raise to_http_error(exc) from exc
    return _item_response(result)


@router.post(
    "/{item_id}/attachment/file",
    response_model=PortfolioItemResponse,
    summary="Upload a portfolio attachment",
    description=(
        "Upload an image or PDF to an item with no attachment. The kind is inferred "
        "from the file extension unless given."
    ),
    responses={
        400: {"description": "Empty or unsupported file"},
        409: {"description": "Item already has an attachment"},
    },
)
async def upload_attachment(
    item_id: Annotated[str, Path(description="Portfolio item ID")],
    file: Annotated[UploadFile, File(description="Image or PDF file")],
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    kind: Annotated[AttachmentKind | None, Form(description="image or pdf")] = None,
) -> PortfolioItemResponse:
    data = await file.read()
    try:
        result = portfolio_service.attach_portfolio_file(
            current_user, item_id, data, file.filename or "", kind
        )
    except GameSocioError as exc:
        raise to_http_error(exc) from exc
    return _item_response(result)


@router.post(
    "/{item_id}/attachment/link",
    response_model=PortfolioItemResponse,
    responses={409: {"description": "Item already has an attachment"}},
)
def attach_link(
    item_id: Annotated[str, Path(description="Portfolio item ID")],
    data: PortfolioLinkRequest,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> PortfolioItemResponse:
    """Attach an external link to an item with no attachment."""
    try:
        result = portfolio_service.attach_portfolio_link(current_user, item_id, data.url)
    except GameSocioError as exc:
        raise to_http_error(exc) from exc
    return _item_response(result)


@router.delete("/{item_id}/attachment", response_model=PortfolioItemResponse)
def clear_attachment(
    item_id: Annotated[str, Path(description="Portfolio item ID")],
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> PortfolioItemResponse:
    """Remove an item's attachment, deleting its uploaded file if it has one."""
    try:
        result = portfolio_service.clear_portfolio_attachment(current_user, item_id)
    except GameSocioError as exc:
        raise to_http_error(exc) from exc
    return _item_response(result)
