"""Local-disk object store for uploaded portfolio files.

Objects live under ``<storage root>/<bucket>/<key>`` and are served back at
``<public base url>/<bucket>/<key>``. Keys are relative POSIX paths such as
``u1/u1-1731000000000.png``.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable
from pathlib import Path, PurePosixPath

from gamesocio.models import ConflictError, StorageError, UploadError, ValidationError

logger = logging.getLogger(__name__)

DEFAULT_PUBLIC_URL = "http://localhost:8000/storage"

_storage: LocalObjectStorage | None = None


def get_storage_root() -> Path:
    """Return the root directory for stored objects."""
    env_root = os.getenv("GAMESOCIO_STORAGE_DIR")
    if env_root:
        return Path(env_root).expanduser().resolve()

    project_root = Path(__file__).resolve().parents[3]
    return project_root / ".gamesocio_storage"


def get_public_base_url() -> str:
    """Return the base URL public object links are built from."""
    return os.getenv("GAMESOCIO_PUBLIC_URL", DEFAULT_PUBLIC_URL).rstrip("/")


def _validate_name(value: str, what: str) -> PurePosixPath:
    path = PurePosixPath(value)
    if not value or path.is_absolute() or any(part in ("", ".", "..") for part in path.parts):
        raise ValidationError(f"Invalid storage {what}: {value!r}")
    if "\\" in value:
        raise ValidationError(f"Invalid storage {what}: {value!r}")
    return path


class LocalObjectStorage:
    """Bucketed object store backed by a directory tree."""

    def __init__(self, root: Path, public_base_url: str) -> None:
        self.root = root
        self.public_base_url = public_base_url.rstrip("/")

    def path_for(self, bucket: str, key: str) -> Path:
        """Return the filesystem path of an object (which may not exist)."""
        bucket_path = _validate_name(bucket, "bucket")
        if len(bucket_path.parts) != 1:
            raise ValidationError(f"Invalid storage bucket: {bucket!r}")
        key_path = _validate_name(key, "key")
        return self.root / bucket_path / Path(*key_path.parts)

    def exists(self, bucket: str, key: str) -> bool:
        return self.path_for(bucket, key).is_file()

    def put(self, bucket: str, key: str, data: bytes, *, overwrite: bool = False) -> None:
        """Store ``data`` under ``key``.

        Raises:
            ConflictError: ``key`` already exists and ``overwrite`` is False.
            UploadError: The bytes could not be written.
        """
        target = self.path_for(bucket, key)
        mode = "wb" if overwrite else "xb"
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            with target.open(mode) as handle:
                handle.write(data)
        except FileExistsError as exc:
            raise ConflictError(f"Object {bucket}/{key} already exists.") from exc
        except OSError as exc:
            logger.exception("Failed to store object %s/%s", bucket, key)
            target.unlink(missing_ok=True)
            raise UploadError(f"Failed to store {bucket}/{key}.") from exc

        logger.info("Stored object %s/%s (%d bytes)", bucket, key, len(data))

    def public_url(self, bucket: str, key: str) -> str:
        self.path_for(bucket, key)
        return f"{self.public_base_url}/{bucket}/{key}"

    def remove(self, bucket: str, keys: Iterable[str]) -> list[str]:
        """Delete objects, ignoring keys that do not exist.

        Returns:
            The keys that were actually removed.

        Raises:
            StorageError: An existing object could not be deleted.
        """
        removed: list[str] = []
        for key in keys:
            target = self.path_for(bucket, key)
            try:
                target.unlink()
            except FileNotFoundError:
                continue
            except OSError as exc:
                logger.exception("Failed to remove object %s/%s", bucket, key)
                raise StorageError(f"Failed to remove {bucket}/{key}.") from exc
            removed.append(key)
            logger.info("Removed object %s/%s", bucket, key)
        return removed


def get_object_storage() -> LocalObjectStorage:
    """Return the process-wide object store, creating it on first use."""
    global _storage
    if _storage is None:
        _storage = LocalObjectStorage(get_storage_root(), get_public_base_url())
    return _storage


def reset_object_storage() -> None:
    """Forget the cached store so the next access re-reads the environment."""
    global _storage
    _storage = None
