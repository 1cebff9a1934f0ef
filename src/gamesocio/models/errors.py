"""Error taxonomy for GameSocio services.

Services raise these at the point a check or a round trip fails; the API
routes translate them into HTTP responses.
"""

from __future__ import annotations


class GameSocioError(Exception):
    """Base class for all errors raised by the service layer."""


class ValidationError(GameSocioError):
    """Raised when input is rejected before any write is attempted."""


class NotFoundError(GameSocioError):
    """Raised when a referenced record does not exist."""


class PermissionDeniedError(GameSocioError):
    """Raised when the acting user does not own the record being written."""


class StorageError(GameSocioError):
    """Raised when a database or object-store round trip fails."""


class UploadError(StorageError):
    """Raised when storing an uploaded file fails."""


class ConflictError(GameSocioError):
    """Raised when an object-store key or a unique name is already taken."""


class AttachmentStateError(GameSocioError):
    """Raised when an attachment transition is not allowed (e.g. attach while attached)."""
