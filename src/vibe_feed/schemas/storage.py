"""Object storage Pydantic schemas."""

from pydantic import BaseModel, Field


class UploadResponse(BaseModel):
    """Location of a freshly stored object."""

    path: str = Field(..., description="Object path inside the bucket")
    public_url: str = Field(..., description="URL the object is served from")


class PublicUrlResponse(BaseModel):
    """Public URL for an object path."""

    public_url: str
