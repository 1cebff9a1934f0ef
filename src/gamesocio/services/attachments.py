"""Attachment lifecycle for portfolio items.

An attachment is either an uploaded file (image or PDF) stored in the
portfolio bucket, or an external link with no stored object. This module
keeps the stored bytes and the URL/name/kind that describe them in step:

- ``attach_file`` uploads under a per-user, timestamped key and returns the
  attachment only once the bytes are stored.
- ``attach_link`` builds a link attachment without touching storage.
- ``detach_current`` deletes the stored object of a file attachment. A failed
  delete never blocks the detach; the key is recorded in
  ``orphaned_objects`` and retried later by ``purge_orphaned_objects``.
"""

from __future__ import annotations

import logging
import time
from pathlib import PurePosixPath

from sqlalchemy.exc import SQLAlchemyError

from gamesocio.constants import IMAGE_EXTENSIONS, PDF_EXTENSION, PORTFOLIO_BUCKET
from gamesocio.data.db import get_session
from gamesocio.data.models import OrphanedObject
from gamesocio.models import (
    Attachment,
    AttachmentDraft,
    AttachmentKind,
    GameSocioError,
    StorageError,
    ValidationError,
)
from gamesocio.services.object_storage import LocalObjectStorage, get_object_storage

logger = logging.getLogger(__name__)

__all__ = [
    "attach_file",
    "attach_link",
    "build_storage_key",
    "classify",
    "detach_current",
    "draft_attach_file",
    "draft_attach_link",
    "draft_clear",
    "extension_of",
    "purge_orphaned_objects",
]


def extension_of(file_name: str | None) -> str:
    """Return the text after the last dot of the file's base name ("" if none)."""
    if not file_name:
        return ""
    base = PurePosixPath(file_name.replace("\\", "/")).name
    _, dot, extension = base.rpartition(".")
    if not dot or not extension:
        return ""
    return extension


def classify(file_name: str | None) -> AttachmentKind:
    """Infer the attachment kind from a file name's extension (case-insensitive).

    Image extensions map to IMAGE, ``pdf`` to PDF, and anything else,
    including a missing extension or a URL, to LINK.
    """
    extension = extension_of(file_name).lower()
    if extension in IMAGE_EXTENSIONS:
        return AttachmentKind.IMAGE
    if extension == PDF_EXTENSION:
        return AttachmentKind.PDF
    return AttachmentKind.LINK


def build_storage_key(owner_id: str, file_name: str, now_ms: int | None = None) -> str:
    """Return ``{owner}/{owner}-{epoch millis}.{ext}`` for an upload.

    The extension keeps the case of the original name and is omitted when
    the name has none.
    """
    if not owner_id or "/" in owner_id or owner_id in (".", ".."):
        raise ValidationError(f"Invalid owner id for storage: {owner_id!r}")
    if now_ms is None:
        now_ms = time.time_ns() // 1_000_000

    object_name = f"{owner_id}-{now_ms}"
    extension = extension_of(file_name)
    if extension:
        object_name = f"{object_name}.{extension}"
    return f"{owner_id}/{object_name}"


def attach_file(
    data: bytes,
    file_name: str,
    owner_id: str,
    declared_kind: AttachmentKind | str | None = None,
    *,
    storage: LocalObjectStorage | None = None,
    now_ms: int | None = None,
) -> Attachment:
    """Upload a file to the portfolio bucket and describe it as an attachment.

    Args:
        data: File contents.
        file_name: Original file name; kept as the display name.
        owner_id: Uploading user; namespaces the storage key.
        declared_kind: IMAGE or PDF. Classified from ``file_name`` when omitted.
        storage: Object store to use (the process-wide one by default).
        now_ms: Timestamp for the key, for callers that need a fixed one.

    Returns:
        The attachment for the stored object.

    Raises:
        ValidationError: Empty file, or a kind that is not a file kind.
        ConflictError: The generated key is already taken.
        UploadError: The bytes could not be stored.
    """
    if not data:
        raise ValidationError("Uploaded file is empty.")
    if not file_name or not file_name.strip():
        raise ValidationError("Uploaded file has no name.")

    kind = classify(file_name) if declared_kind is None else AttachmentKind(declared_kind)
    if kind is AttachmentKind.LINK:
        raise ValidationError(f"Unsupported file type for upload: {file_name}")

    store = storage or get_object_storage()
    key = build_storage_key(owner_id, file_name, now_ms)
    store.put(PORTFOLIO_BUCKET, key, data, overwrite=False)

    logger.info("Attached %s %s for user %s as %s", kind.value, file_name, owner_id, key)
    return Attachment(
        kind=kind,
        url=store.public_url(PORTFOLIO_BUCKET, key),
        display_name=file_name,
        storage_key=key,
    )


def attach_link(url: str) -> Attachment:
    """Describe an external link as an attachment. No storage is involved."""
    if not url or not url.strip():
        raise ValidationError("Link URL cannot be empty.")
    cleaned = url.strip()
    return Attachment(kind=AttachmentKind.LINK, url=cleaned, display_name=cleaned)


def _storage_key_for(owner_id: str, attachment: Attachment) -> str:
    # Rows written before keys were persisted only know the display name.
    if attachment.storage_key:
        return attachment.storage_key
    return f"{owner_id}/{attachment.display_name}"


def detach_current(
    owner_id: str, attachment: Attachment | None, *, storage: LocalObjectStorage | None = None
) -> None:
    """Delete the stored object behind ``attachment``, if it has one.

    Link attachments issue no storage call; file attachments issue exactly
    one delete. A failed delete is logged and queued for a later purge
    instead of being raised.
    """
    if attachment is None or not attachment.has_stored_object:
        return

    store = storage or get_object_storage()
    key = _storage_key_for(owner_id, attachment)
    try:
        store.remove(PORTFOLIO_BUCKET, [key])
    except (GameSocioError, OSError) as exc:
        logger.warning("Could not delete %s/%s, queued for purge: %s", PORTFOLIO_BUCKET, key, exc)
        _record_orphan(PORTFOLIO_BUCKET, key, owner_id, str(exc))


def _record_orphan(bucket: str, key: str, owner_id: str, error: str) -> None:
    try:
        with get_session() as session:
            orphan = (
                session.query(OrphanedObject)
                .filter(OrphanedObject.bucket == bucket, OrphanedObject.key == key)
                .first()
            )
            if orphan is None:
                session.add(
                    OrphanedObject(bucket=bucket, key=key, owner_id=owner_id, last_error=error)
                )
            else:
                orphan.attempts += 1
                orphan.last_error = error
    except SQLAlchemyError:
        logger.exception("Failed to queue orphaned object %s/%s", bucket, key)


def purge_orphaned_objects(*, storage: LocalObjectStorage | None = None) -> int:
    """Retry deletion of every queued orphaned object.

    Returns:
        Number of objects purged (removed, or found already gone).

    Raises:
        StorageError: The orphan queue could not be read or updated.
    """
    store = storage or get_object_storage()
    purged = 0
    try:
        with get_session() as session:
            for orphan in session.query(OrphanedObject).order_by(OrphanedObject.id).all():
                try:
                    store.remove(orphan.bucket, [orphan.key])
                except GameSocioError as exc:
                    orphan.attempts += 1
                    orphan.last_error = str(exc)
                    logger.warning(
                        "Purge of %s/%s failed (attempt %d): %s",
                        orphan.bucket,
                        orphan.key,
                        orphan.attempts,
                        exc,
                    )
                    continue
                session.delete(orphan)
                purged += 1
    except SQLAlchemyError as exc:
        logger.exception("Failed to purge orphaned objects")
        raise StorageError("Failed to purge orphaned objects.") from exc

    if purged:
        logger.info("Purged %d orphaned objects", purged)
    return purged


def draft_attach_file(
    draft: AttachmentDraft,
    data: bytes,
    file_name: str,
    declared_kind: AttachmentKind | str | None = None,
    *,
    storage: LocalObjectStorage | None = None,
) -> Attachment:
    """Upload a file into an empty draft (EMPTY -> ATTACHED)."""
    draft.ensure_empty()
    attachment = attach_file(data, file_name, draft.owner_id, declared_kind, storage=storage)
    draft.attach(attachment)
    return attachment


def draft_attach_link(draft: AttachmentDraft, url: str) -> Attachment:
    """Put an external link into an empty draft (EMPTY -> ATTACHED)."""
    draft.ensure_empty()
    attachment = attach_link(url)
    draft.attach(attachment)
    return attachment


def draft_clear(draft: AttachmentDraft, *, storage: LocalObjectStorage | None = None) -> None:
    """Clear the draft (ATTACHED -> EMPTY), deleting any stored object."""
    previous = draft.clear()
    detach_current(draft.owner_id, previous, storage=storage)
