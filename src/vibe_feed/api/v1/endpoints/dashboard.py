# src/vibe_feed/api/v1/endpoints/dashboard.py
"""Sentiment dashboard endpoints."""

from __future__ import annotations

from fastapi import APIRouter

from vibe_feed.api.v1.dependencies import SessionDep
from vibe_feed.core.settings import settings
from vibe_feed.schemas.dashboard import DashboardResponse
from vibe_feed.services.dashboard import load_sentiment_rows, summarize

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("/sentiment", response_model=DashboardResponse)
async def get_sentiment_dashboard(db: SessionDep) -> DashboardResponse:
    """Return label distribution, daily polarity trends and summary stats.

    Only posts with a sentiment label are counted.
    """
    return summarize(load_sentiment_rows(db), days=settings.dashboard_trend_days)
