"""Domain types shared by the services and the API."""

from gamesocio.models.attachment import (
    Attachment,
    AttachmentDraft,
    AttachmentKind,
    AttachmentState,
)
from gamesocio.models.errors import (
    AttachmentStateError,
    ConflictError,
    GameSocioError,
    NotFoundError,
    PermissionDeniedError,
    StorageError,
    UploadError,
    ValidationError,
)
from gamesocio.models.identity import CurrentUser

__all__ = [
    "Attachment",
    "AttachmentDraft",
    "AttachmentKind",
    "AttachmentState",
    "AttachmentStateError",
    "ConflictError",
    "CurrentUser",
    "GameSocioError",
    "NotFoundError",
    "PermissionDeniedError",
    "StorageError",
    "UploadError",
    "ValidationError",
]
