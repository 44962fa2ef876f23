"""Sentiment dashboard response schemas."""
from __future__ import annotations

from pydantic import BaseModel, Field


class LabelShare(BaseModel):
    """Number of posts carrying a label and their share of the total."""

    label: str
    count: int
    percentage: int = Field(..., description="Rounded share of all labelled posts, 0-100")


class TrendPoint(BaseModel):
    """Per-day post counts grouped by polarity."""

    date: str = Field(..., description="Short day label, e.g. 'Oct 18'")
    positive: int = 0
    negative: int = 0
    neutral: int = 0


class DashboardStats(BaseModel):
    """Headline numbers shown above the charts."""

    total_posts: int
    avg_sentiment: float
    most_common: str


class DashboardResponse(BaseModel):
    """Aggregate sentiment view over all labelled posts."""

    stats: DashboardStats
    distribution: list[LabelShare]
    trends: list[TrendPoint]
