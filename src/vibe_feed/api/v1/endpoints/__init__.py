# src/vibe_feed/api/v1/endpoints/__init__.py
"""API endpoint modules for version 1."""

from .auth import router as auth_router
from .comments import router as comments_router
from .dashboard import router as dashboard_router
from .posts import router as posts_router
from .sentiment import router as sentiment_router
from .storage import router as storage_router

__all__ = [
    "auth_router",
    "comments_router",
    "dashboard_router",
    "posts_router",
    "sentiment_router",
    "storage_router",
]
