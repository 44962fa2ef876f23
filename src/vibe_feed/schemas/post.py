"""Post and comment Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _require_text(v: str) -> str:
    cleaned = v.strip()
    if not cleaned:
        raise ValueError("Content must not be empty")
    return cleaned


class PostCreate(BaseModel):
    """Schema for creating a new post."""

    content: str = Field(..., max_length=10000, description="Post text")
    image_url: str | None = Field(None, description="Public URL returned by an earlier upload")

    @field_validator("content")
    @classmethod
    def validate_content(cls, v: str) -> str:
        """Trim the text and reject blank posts."""
        return _require_text(v)


class PostResponse(BaseModel):
    """Schema for post information returned by the API."""

    id: str
    user_id: str
    content: str
    image_url: str | None
    sentiment_label: str | None
    sentiment_score: float | None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class CommentCreate(BaseModel):
    """Schema for creating a comment."""

    content: str = Field(..., max_length=2000, description="Comment text")

    @field_validator("content")
    @classmethod
    def validate_content(cls, v: str) -> str:
        """Trim the text and reject blank comments."""
        return _require_text(v)


class CommentResponse(BaseModel):
    """Schema for comment information returned by the API."""

    id: str
    post_id: str
    user_id: str
    content: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
