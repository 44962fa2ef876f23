# src/vibe_feed/models/__init__.py
"""SQLAlchemy models for the Vibe Feed application."""

from .comment import Comment
from .post import Post
from .revoked_token import RevokedToken
from .user import User

__all__ = [
    "Comment",
    "Post",
    "RevokedToken",
    "User",
]
