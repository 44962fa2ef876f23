"""SQLAlchemy models for posts and their denormalized sentiment."""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, Float, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from vibe_feed.db.session import Base
from vibe_feed.db.time import utcnow

if TYPE_CHECKING:  # pragma: no cover - typing helper
    from vibe_feed.models.comment import Comment
    from vibe_feed.models.user import User


class Post(Base):
    """Primary content entity produced by users.

    Sentiment is computed once when the post is created and stored alongside
    the content; posts are never updated in place.
    """

    __tablename__ = "post"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("app_user.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    content: Mapped[str] = mapped_column(Text, nullable=False)
    image_url: Mapped[str | None] = mapped_column(Text, nullable=True)

    # One of SENTIMENT_LABELS; null only for rows created without analysis.
    sentiment_label: Mapped[str | None] = mapped_column(String(16), nullable=True)
    # Range [-1, 1], -1 most negative.
    sentiment_score: Mapped[float | None] = mapped_column(Float, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        index=True,
    )

    author: Mapped[User] = relationship("User", back_populates="posts")
    comments: Mapped[list[Comment]] = relationship(
        "Comment",
        back_populates="post",
        cascade="all, delete-orphan",
        order_by="Comment.created_at",
    )
