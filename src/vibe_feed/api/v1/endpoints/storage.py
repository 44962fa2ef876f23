# src/vibe_feed/api/v1/endpoints/storage.py
"""Image upload endpoints for the Vibe Feed API."""

from typing import Annotated

from fastapi import APIRouter, Depends, File, HTTPException, Query, UploadFile, status

from vibe_feed.api.v1.dependencies import CurrentUserDep
from vibe_feed.core.settings import settings
from vibe_feed.schemas.storage import PublicUrlResponse, UploadResponse
from vibe_feed.services.storage import (
    BucketNotFoundError,
    InvalidObjectPathError,
    ObjectStorage,
    StorageError,
    get_object_storage,
)

router = APIRouter(prefix="/storage", tags=["storage"])


def get_object_storage_dep() -> ObjectStorage:
    """Return the shared object storage."""
    return get_object_storage()


StorageDep = Annotated[ObjectStorage, Depends(get_object_storage_dep)]


def _storage_http_error(err: StorageError) -> HTTPException:
    if isinstance(err, BucketNotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(err))
    if isinstance(err, InvalidObjectPathError):
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(err))
    return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(err))


@router.post(
    "/{bucket}",
    response_model=UploadResponse,
    status_code=status.HTTP_201_CREATED,
)
async def upload_object(
    bucket: str,
    current_user: CurrentUserDep,
    storage: StorageDep,
    file: Annotated[UploadFile, File(description="Image to attach to a post")],
) -> UploadResponse:
    """Store an image under ``<user_id>/<random>.<ext>`` and return its public URL.

    Raises:
        HTTPException: 404 unknown bucket, 413 too large, 415 not an image
    """
    if bucket not in storage.buckets:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Bucket not found: {bucket}")
    if not (file.content_type or "").startswith("image/"):
        raise HTTPException(
            status_code=status.HTTP_415_UNSUPPORTED_MEDIA_TYPE,
            detail="Only image uploads are supported",
        )

    data = await file.read(settings.max_upload_bytes + 1)
    if len(data) > settings.max_upload_bytes:
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail=f"File exceeds {settings.max_upload_bytes} bytes",
        )

    path = storage.object_name(current_user.id, file.filename)
    try:
        storage.upload(bucket, path, data)
        public_url = storage.get_public_url(bucket, path)
    except StorageError as err:
        raise _storage_http_error(err) from err
    return UploadResponse(path=path, public_url=public_url)


@router.get("/{bucket}/public-url", response_model=PublicUrlResponse)
async def get_public_url(
    bucket: str,
    storage: StorageDep,
    path: str = Query(..., description="Object path inside the bucket"),
) -> PublicUrlResponse:
    """Return the public URL for an object path."""
    try:
        return PublicUrlResponse(public_url=storage.get_public_url(bucket, path))
    except StorageError as err:
        raise _storage_http_error(err) from err
