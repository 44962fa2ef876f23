"""Local object storage for uploaded post images."""

from __future__ import annotations

import logging
import secrets
from pathlib import Path, PurePosixPath

from vibe_feed.core.settings import settings

logger = logging.getLogger(__name__)


class StorageError(RuntimeError):
    """Base exception raised for storage failures."""


class BucketNotFoundError(StorageError):
    """Raised when an unknown bucket is addressed."""


class InvalidObjectPathError(StorageError):
    """Raised when an object path escapes its bucket or is malformed."""


class ObjectExistsError(StorageError):
    """Raised when an upload would overwrite an existing object."""


class ObjectStorage:
    """Filesystem-backed buckets with public URLs.

    Objects live at ``<root>/<bucket>/<path>`` and are served read-only under
    ``<public_path>/<bucket>/<path>``.
    """

    def __init__(
        self,
        root: str | Path | None = None,
        *,
        public_path: str | None = None,
        buckets: list[str] | None = None,
    ) -> None:
        self.root = Path(root or settings.storage_root).resolve()
        self.public_path = (public_path or settings.storage_public_path).rstrip("/")
        self.buckets = list(buckets if buckets is not None else settings.storage_buckets)

    def _bucket_dir(self, bucket: str) -> Path:
        if bucket not in self.buckets:
            raise BucketNotFoundError(f"Bucket not found: {bucket}")
        return self.root / bucket

    def _resolve(self, bucket: str, path: str) -> Path:
        bucket_dir = self._bucket_dir(bucket)
        relative = PurePosixPath(path)
        if not path or relative.is_absolute() or ".." in relative.parts:
            raise InvalidObjectPathError(f"Invalid object path: {path!r}")
        return bucket_dir.joinpath(*relative.parts)

    @staticmethod
    def object_name(owner_id: str, filename: str | None) -> str:
        """Return a fresh object path ``<owner>/<random>.<ext>`` for an upload."""
        suffix = PurePosixPath(filename or "").suffix.lower()
        return f"{owner_id}/{secrets.token_hex(12)}{suffix}"

    def upload(self, bucket: str, path: str, data: bytes) -> str:
        """Store bytes under a new object path.

        Returns:
            The stored object path

        Raises:
            StorageError: If the bucket is unknown, the path invalid or taken
        """
        target = self._resolve(bucket, path)
        if target.exists():
            raise ObjectExistsError(f"Object already exists: {path}")
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(data)
        logger.info("Stored %d bytes at %s/%s", len(data), bucket, path)
        return path

    def get_public_url(self, bucket: str, path: str) -> str:
        """Return the URL an object is (or would be) served from."""
        self._resolve(bucket, path)
        return f"{self.public_path}/{bucket}/{path}"


_storage: ObjectStorage | None = None


def get_object_storage() -> ObjectStorage:
    """Return the shared storage instance built from global settings."""
    global _storage
    if _storage is None:
        _storage = ObjectStorage()
    return _storage
