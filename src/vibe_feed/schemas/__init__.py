# src/vibe_feed/schemas/__init__.py
"""
Pydantic schemas for API request/response models.

These schemas define the structure of API data for serialization and validation.
"""

from .auth import SessionResponse, SignInRequest, SignInResponse, SignUpRequest, UserResponse
from .dashboard import DashboardResponse, DashboardStats, LabelShare, TrendPoint
from .post import CommentCreate, CommentResponse, PostCreate, PostResponse
from .sentiment import SENTIMENT_LABELS, SentimentRequest, SentimentResult
from .storage import PublicUrlResponse, UploadResponse

__all__ = [
    "SessionResponse", "SignInRequest", "SignInResponse", "SignUpRequest", "UserResponse",
    "DashboardResponse", "DashboardStats", "LabelShare", "TrendPoint",
    "CommentCreate", "CommentResponse", "PostCreate", "PostResponse",
    "SENTIMENT_LABELS", "SentimentRequest", "SentimentResult",
    "PublicUrlResponse", "UploadResponse",
]
