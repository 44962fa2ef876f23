# src/vibe_feed/api/v1/endpoints/posts.py
"""Post-related endpoints for the Vibe Feed API."""

import logging
from datetime import datetime
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import desc

from vibe_feed.api.v1.dependencies import CurrentUserDep, SessionDep
from vibe_feed.db.time import as_utc
from vibe_feed.models import Post
from vibe_feed.schemas.post import PostCreate, PostResponse
from vibe_feed.services.sentiment import SentimentAnalyzer, get_sentiment_analyzer

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/posts", tags=["posts"])


def get_sentiment_analyzer_dep() -> SentimentAnalyzer:
    """Return the shared sentiment analyzer."""
    return get_sentiment_analyzer()


AnalyzerDep = Annotated[SentimentAnalyzer, Depends(get_sentiment_analyzer_dep)]


@router.get("/", response_model=list[PostResponse])
async def list_posts(
    db: SessionDep,
    limit: int = Query(50, ge=1, le=100, description="Maximum number of posts to return"),
    before: datetime | None = Query(None, description="Return posts created before this time"),
) -> list[Post]:
    """List posts newest first.

    Args:
        db: Database session
        limit: Maximum number of posts to return (max 100)
        before: Return posts created before this timestamp for pagination;
            offsets are converted to UTC and naive values are taken as UTC

    Returns:
        List of Post objects in descending creation order
    """
    query = db.query(Post)
    if before is not None:
        query = query.filter(Post.created_at < as_utc(before))
    return query.order_by(desc(Post.created_at), desc(Post.id)).limit(limit).all()


@router.get("/{post_id}", response_model=PostResponse)
async def get_post(post_id: str, db: SessionDep) -> Post:
    """Get a specific post by ID.

    Raises:
        HTTPException: If post not found
    """
    post = db.get(Post, post_id)
    if post is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Post not found"
        )
    return post


@router.post("/", response_model=PostResponse, status_code=status.HTTP_201_CREATED)
async def create_post(
    post_data: PostCreate,
    current_user: CurrentUserDep,
    db: SessionDep,
    analyzer: AnalyzerDep,
) -> Post:
    """Create a post after classifying its sentiment.

    The sentiment is computed exactly once here and stored on the row.
    Analyzer failures propagate as relay errors and nothing is stored.

    Args:
        post_data: Post text and optional image URL
        current_user: Authenticated author
        db: Database session
        analyzer: Sentiment relay client

    Returns:
        Created Post object
    """
    sentiment = await analyzer.analyze(post_data.content, post_data.image_url)

    new_post = Post(
        user_id=current_user.id,
        content=post_data.content,
        image_url=post_data.image_url,
        sentiment_label=sentiment.label,
        sentiment_score=sentiment.score,
    )
    db.add(new_post)
    db.commit()
    db.refresh(new_post)

    logger.info("Post %s created with sentiment %s", new_post.id, sentiment.label)
    return new_post


@router.delete("/{post_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_post(post_id: str, current_user: CurrentUserDep, db: SessionDep) -> None:
    """Delete a post and its comments.

    Raises:
        HTTPException: If post not found or user is not the author
    """
    post = db.get(Post, post_id)
    if post is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Post not found"
        )

    # Only the author can delete their own posts
    if post.user_id != current_user.id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You can only delete your own posts"
        )

    db.delete(post)
    db.commit()
