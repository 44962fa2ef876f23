"""Sentiment relay request/response schemas."""

from __future__ import annotations

from typing import Literal, get_args

from pydantic import BaseModel, ConfigDict, Field

SentimentLabel = Literal[
    "happy",
    "sad",
    "excited",
    "angry",
    "neutral",
    "thoughtful",
    "anxious",
    "peaceful",
]
SENTIMENT_LABELS: tuple[str, ...] = get_args(SentimentLabel)


class SentimentRequest(BaseModel):
    """Body accepted by the relay; at least one field must be non-empty."""

    content: str | None = Field(None, description="Post text to classify")
    image_url: str | None = Field(
        None,
        alias="imageUrl",
        description="Public URL of an image to include in the analysis",
    )

    model_config = ConfigDict(populate_by_name=True)


class SentimentResult(BaseModel):
    """Classification returned by the relay and stored on a post."""

    label: SentimentLabel
    score: float = Field(..., ge=-1.0, le=1.0, description="-1 most negative, 1 most positive")


class ErrorResponse(BaseModel):
    """Error body produced by the relay."""

    error: str
