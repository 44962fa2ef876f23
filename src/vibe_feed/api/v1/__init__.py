# src/vibe_feed/api/v1/__init__.py
"""Version 1 API endpoints."""

from .endpoints import (
    auth_router,
    comments_router,
    dashboard_router,
    posts_router,
    sentiment_router,
    storage_router,
)

__all__ = [
    "auth_router",
    "comments_router",
    "dashboard_router",
    "posts_router",
    "sentiment_router",
    "storage_router",
]
