# src/vibe_feed/services/__init__.py
"""Business logic services for the Vibe Feed application."""

from .auth_events import AuthEvent, AuthEvents
from .sentiment import SentimentAnalyzer, SentimentError
from .storage import ObjectStorage, StorageError

__all__ = [
    "AuthEvent",
    "AuthEvents",
    "SentimentAnalyzer",
    "SentimentError",
    "ObjectStorage",
    "StorageError",
]
