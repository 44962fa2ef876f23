# src/vibe_feed/api/v1/endpoints/comments.py
"""Comment endpoints for the Vibe Feed API."""

from fastapi import APIRouter, HTTPException, status
from sqlalchemy import asc
from sqlalchemy.orm import Session

from vibe_feed.api.v1.dependencies import CurrentUserDep, SessionDep
from vibe_feed.models import Comment, Post
from vibe_feed.schemas.post import CommentCreate, CommentResponse

router = APIRouter(tags=["comments"])


def _get_post_or_404(db: Session, post_id: str) -> Post:
    post = db.get(Post, post_id)
    if post is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Post not found")
    return post


@router.get("/posts/{post_id}/comments", response_model=list[CommentResponse])
async def list_comments(post_id: str, db: SessionDep) -> list[Comment]:
    """List a post's comments oldest first."""
    _get_post_or_404(db, post_id)
    return (
        db.query(Comment)
        .filter(Comment.post_id == post_id)
        .order_by(asc(Comment.created_at), asc(Comment.id))
        .all()
    )


@router.post(
    "/posts/{post_id}/comments",
    response_model=CommentResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_comment(
    post_id: str,
    payload: CommentCreate,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> Comment:
    """Add a comment to a post."""
    _get_post_or_404(db, post_id)
    comment = Comment(post_id=post_id, user_id=current_user.id, content=payload.content)
    db.add(comment)
    db.commit()
    db.refresh(comment)
    return comment


@router.delete("/comments/{comment_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_comment(comment_id: str, current_user: CurrentUserDep, db: SessionDep) -> None:
    """Delete one of the caller's comments.

    Raises:
        HTTPException: If comment not found or user is not the author
    """
    comment = db.get(Comment, comment_id)
    if comment is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Comment not found")
    if comment.user_id != current_user.id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You can only delete your own comments",
        )
    db.delete(comment)
    db.commit()
