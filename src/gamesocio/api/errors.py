"""Translation of service errors into HTTP errors."""

from __future__ import annotations

from fastapi import HTTPException, status

from gamesocio.models import (
    AttachmentStateError,
    ConflictError,
    GameSocioError,
    NotFoundError,
    PermissionDeniedError,
    StorageError,
    ValidationError,
)

_STATUS_BY_ERROR: tuple[tuple[type[GameSocioError], int], ...] = (
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (PermissionDeniedError, status.HTTP_403_FORBIDDEN),
    (ConflictError, status.HTTP_409_CONFLICT),
    (AttachmentStateError, status.HTTP_409_CONFLICT),
    (StorageError, status.HTTP_500_INTERNAL_SERVER_ERROR),
)


def to_http_error(exc: GameSocioError) -> HTTPException:
    """Return the HTTPException a route should raise for ``exc``."""
    for error_type, status_code in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return HTTPException(status_code=status_code, detail=str(exc))
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc))
