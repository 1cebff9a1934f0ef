"""Portfolio items and their persisted attachments.

The attachment of an item is stored across the ``file_type``, ``file_url``,
``file_name`` and ``file_key`` columns. Uploads always happen before the row
is written; when the row write fails the uploaded object is detached again
so no stored object is left without a row pointing at it.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, TypedDict

from sqlalchemy import update
from sqlalchemy.exc import SQLAlchemyError

from gamesocio.data.db import get_session
from gamesocio.data.models import PortfolioItem
from gamesocio.models import (
    Attachment,
    AttachmentKind,
    AttachmentStateError,
    CurrentUser,
    GameSocioError,
    NotFoundError,
    PermissionDeniedError,
    StorageError,
    ValidationError,
)
from gamesocio.services import attachments, content_repository
from gamesocio.services.object_storage import LocalObjectStorage

logger = logging.getLogger(__name__)

__all__ = [
    "PortfolioItemData",
    "attach_portfolio_file",
    "attach_portfolio_link",
    "attachment_columns",
    "attachment_from_record",
    "clear_portfolio_attachment",
    "create_portfolio_item",
    "delete_portfolio_item",
    "get_portfolio_item",
    "list_portfolio_items",
    "update_portfolio_item",
]

TABLE = "portfolio_items"
_ATTACHMENT_COLUMNS = ("file_type", "file_url", "file_name", "file_key")
_EDITABLE_FIELDS = ("title", "description", "image_url", "tags")


class PortfolioItemData(TypedDict, total=False):
    """TypedDict for editable portfolio item fields."""

    title: str
    description: str
    image_url: str | None
    tags: list[str]


def attachment_from_record(record: Mapping[str, Any]) -> Attachment | None:
    """Rebuild the attachment held by a portfolio item record, if any."""
    file_type = record.get("file_type")
    file_url = record.get("file_url")
    if not file_type or not file_url:
        return None
    return Attachment(
        kind=AttachmentKind(file_type),
        url=file_url,
        display_name=record.get("file_name") or file_url,
        storage_key=record.get("file_key"),
    )


def attachment_columns(attachment: Attachment | None) -> dict[str, str | None]:
    """Return the column values that persist ``attachment`` (all None when empty)."""
    if attachment is None:
        return dict.fromkeys(_ATTACHMENT_COLUMNS)
    return {
        "file_type": attachment.kind.value,
        "file_url": attachment.url,
        "file_name": attachment.display_name,
        "file_key": attachment.storage_key,
    }


def _with_attachment(record: dict) -> dict:
    record["attachment"] = attachment_from_record(record)
    return record


def _item_data(data: Mapping[str, Any]) -> dict:
    unknown = set(data) - set(_EDITABLE_FIELDS)
    if unknown:
        raise ValidationError(f"Unknown portfolio fields: {', '.join(sorted(unknown))}")
    values = dict(data)
    for key in ("title", "description"):
        if key in values:
            if not values[key] or not str(values[key]).strip():
                raise ValidationError(f"Portfolio {key} cannot be empty.")
            values[key] = str(values[key]).strip()
    return values


def _load_owned(actor: CurrentUser, item_id: str) -> dict:
    record = content_repository.get(TABLE, item_id)
    if record is None:
        raise NotFoundError(f"Portfolio item {item_id} not found.")
    if record["user_id"] != actor.id:
        raise PermissionDeniedError("You can only modify your own portfolio items.")
    return record


def _store_attachment(actor: CurrentUser, item_id: str, attachment: Attachment) -> dict:
    """Set the attachment columns only while the item still has no attachment."""
    try:
        with get_session() as session:
            result = session.execute(
                update(PortfolioItem)
                .where(
                    PortfolioItem.id == item_id,
                    PortfolioItem.user_id == actor.id,
                    PortfolioItem.file_type.is_(None),
                )
                .values(**attachment_columns(attachment))
            )
            if result.rowcount == 0:
                raise AttachmentStateError(
                    "Portfolio item already has an attachment; clear it first."
                )
    except SQLAlchemyError as exc:
        logger.exception("Failed to attach to portfolio item %s", item_id)
        raise StorageError("Failed to save portfolio_items record.") from exc

    record = content_repository.get(TABLE, item_id)
    if record is None:
        raise NotFoundError(f"Portfolio item {item_id} not found.")
    return record


def _persist_attachment(
    actor: CurrentUser,
    item_id: str,
    attachment: Attachment,
    storage: LocalObjectStorage | None,
) -> dict:
    """Write ``attachment`` onto the item, detaching it again if the write fails."""
    try:
        record = _store_attachment(actor, item_id, attachment)
    except GameSocioError:
        logger.warning("Rolling back upload of %s for item %s", attachment.url, item_id)
        attachments.detach_current(actor.id, attachment, storage=storage)
        raise
    return _with_attachment(record)


def list_portfolio_items(user_id: str) -> list[dict]:
    """Return a user's portfolio items, newest first."""
    records = content_repository.select(TABLE, {"user_id": user_id})
    return [_with_attachment(record) for record in records]


def get_portfolio_item(item_id: str) -> dict | None:
    record = content_repository.get(TABLE, item_id)
    if record is None:
        return None
    return _with_attachment(record)


def create_portfolio_item(
    actor: CurrentUser | None,
    data: PortfolioItemData,
    attachment: Attachment | None = None,
    *,
    storage: LocalObjectStorage | None = None,
) -> dict | None:
    """Create a portfolio item owned by the acting user.

    Args:
        actor: Acting user; nothing is written when None.
        data: Title and description (required), image URL and tags.
        attachment: Attachment produced by ``attach_file``/``attach_link``
            beforehand. Its stored object is detached if the item cannot be
            saved.
        storage: Object store the attachment lives in.

    Returns:
        The created item, with its ``attachment`` rebuilt from the row.
    """
    if actor is None:
        logger.warning("Ignoring portfolio item creation without a signed-in user")
        return None

    try:
        values = _item_data(data)
        for key in ("title", "description"):
            if key not in values:
                raise ValidationError(f"Portfolio {key} is required.")
        values.update(attachment_columns(attachment))
        record = content_repository.insert(TABLE, actor, values)
    except GameSocioError:
        attachments.detach_current(actor.id, attachment, storage=storage)
        raise

    logger.info("Created portfolio item %s for %s", record["id"], actor.id)
    return _with_attachment(record)


def update_portfolio_item(
    actor: CurrentUser | None, item_id: str, changes: PortfolioItemData
) -> dict | None:
    """Update the descriptive fields of an item; the attachment is left alone."""
    if actor is None:
        logger.warning("Ignoring update of portfolio item %s without a signed-in user", item_id)
        return None
    record = content_repository.update(TABLE, actor, item_id, _item_data(changes))
    return _with_attachment(record)


def attach_portfolio_file(
    actor: CurrentUser | None,
    item_id: str,
    data: bytes,
    file_name: str,
    kind: AttachmentKind | str | None = None,
    *,
    storage: LocalObjectStorage | None = None,
) -> dict | None:
    """Upload a file and attach it to an item that has no attachment.

    Raises:
        NotFoundError: The item does not exist.
        PermissionDeniedError: The item belongs to someone else.
        AttachmentStateError: The item already has an attachment.
        ValidationError: Empty file or unsupported type.
        UploadError: The upload failed; the item is unchanged.
    """
    if actor is None:
        logger.warning("Ignoring upload to portfolio item %s without a signed-in user", item_id)
        return None

    record = _load_owned(actor, item_id)
    if attachment_from_record(record) is not None:
        raise AttachmentStateError("Portfolio item already has an attachment; clear it first.")

    attachment = attachments.attach_file(data, file_name, actor.id, kind, storage=storage)
    return _persist_attachment(actor, item_id, attachment, storage)


def attach_portfolio_link(actor: CurrentUser | None, item_id: str, url: str) -> dict | None:
    """Attach an external link to an item that has no attachment."""
    if actor is None:
        logger.warning("Ignoring link on portfolio item %s without a signed-in user", item_id)
        return None

    record = _load_owned(actor, item_id)
    if attachment_from_record(record) is not None:
        raise AttachmentStateError("Portfolio item already has an attachment; clear it first.")

    attachment = attachments.attach_link(url)
    return _persist_attachment(actor, item_id, attachment, None)


def clear_portfolio_attachment(
    actor: CurrentUser | None, item_id: str, *, storage: LocalObjectStorage | None = None
) -> dict | None:
    """Remove the item's attachment, deleting its stored object if it has one."""
    if actor is None:
        logger.warning("Ignoring detach on portfolio item %s without a signed-in user", item_id)
        return None

    record = _load_owned(actor, item_id)
    previous = attachment_from_record(record)
    if previous is None:
        return _with_attachment(record)

    updated = content_repository.update(TABLE, actor, item_id, attachment_columns(None))
    attachments.detach_current(actor.id, previous, storage=storage)
    return _with_attachment(updated)


def delete_portfolio_item(
    actor: CurrentUser | None, item_id: str, *, storage: LocalObjectStorage | None = None
) -> dict | None:
    """Delete an item and then the stored object of its attachment.

    Returns:
        The deleted item as it was, or None when no user is signed in.
    """
    snapshot = content_repository.delete(TABLE, actor, item_id)
    if snapshot is None:
        return None

    attachments.detach_current(actor.id, attachment_from_record(snapshot), storage=storage)
    logger.info("Deleted portfolio item %s for %s", item_id, actor.id)
    return _with_attachment(snapshot)
