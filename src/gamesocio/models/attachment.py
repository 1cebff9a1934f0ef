"""Data models for portfolio attachments."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from gamesocio.models.errors import AttachmentStateError


class AttachmentKind(StrEnum):
    """Kind of file or link held by a portfolio item."""

    IMAGE = "image"
    PDF = "pdf"
    LINK = "link"


class AttachmentState(StrEnum):
    EMPTY = "empty"
    ATTACHED = "attached"


@dataclass(frozen=True, slots=True)
class Attachment:
    """The single optional file-or-link reference of a portfolio item.

    Attributes:
        kind: Image, PDF or external link.
        url: Public URL of the stored object, or the external link itself.
        display_name: Original file name (or the URL for links).
        storage_key: Object-store key of the uploaded bytes; ``None`` for links.
    """

    kind: AttachmentKind
    url: str
    display_name: str
    storage_key: str | None = None

    @property
    def has_stored_object(self) -> bool:
        return self.kind is not AttachmentKind.LINK


@dataclass(slots=True)
class AttachmentDraft:
    """Attachment field of a portfolio item while it is being edited.

    Transitions are ``EMPTY -> ATTACHED`` (upload or link) and
    ``ATTACHED -> EMPTY`` (clear). Replacing an attachment requires a clear
    first.
    """

    owner_id: str
    attachment: Attachment | None = None

    @property
    def state(self) -> AttachmentState:
        if self.attachment is None:
            return AttachmentState.EMPTY
        return AttachmentState.ATTACHED

    def ensure_empty(self) -> None:
        """Raise if the draft already holds an attachment."""
        if self.attachment is not None:
            raise AttachmentStateError(
                "Draft already has an attachment; clear it before adding another."
            )

    def attach(self, attachment: Attachment) -> None:
        self.ensure_empty()
        self.attachment = attachment

    def clear(self) -> Attachment | None:
        """Empty the draft and return the attachment it held, if any."""
        previous = self.attachment
        self.attachment = None
        return previous
