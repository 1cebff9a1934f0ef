"""Serves stored objects at their public URLs."""

from __future__ import annotations

import mimetypes
from typing import Annotated

from fastapi import APIRouter, HTTPException, Path, status
from fastapi.responses import FileResponse

from gamesocio.models import ValidationError
from gamesocio.services.object_storage import get_object_storage

router = APIRouter(prefix="/storage", tags=["storage"])


@router.get(
    "/{bucket}/{key:path}",
    summary="Download a stored object",
    responses={404: {"description": "Object not found"}},
)
def get_object(
    bucket: Annotated[str, Path(description="Bucket name")],
    key: str,
) -> FileResponse:
    storage = get_object_storage()
    try:
        path = storage.path_for(bucket, key)
    except ValidationError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Object not found.",
        ) from exc
    if not path.is_file():
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Object not found.",
        )
    media_type = mimetypes.guess_type(path.name)[0] or "application/octet-stream"
    return FileResponse(path, media_type=media_type)
