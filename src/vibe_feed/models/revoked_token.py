# src/vibe_feed/models/revoked_token.py
"""Models supporting access-token revocation on sign-out."""

from datetime import datetime

from sqlalchemy import DateTime, String
from sqlalchemy.orm import Mapped, mapped_column

from vibe_feed.db.session import Base


class RevokedToken(Base):
    """Record indicating that an access token was signed out."""

    __tablename__ = "revoked_token"

    # Existence of the jti means "no longer valid".
    jti: Mapped[str] = mapped_column(String(64), primary_key=True)
    user_id: Mapped[str] = mapped_column(String(36), nullable=False)
    # Rows past expiry can be purged; the token would be rejected anyway.
    expires_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
