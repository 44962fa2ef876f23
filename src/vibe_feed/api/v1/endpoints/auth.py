# src/vibe_feed/api/v1/endpoints/auth.py
"""Authentication endpoints for the Vibe Feed API."""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from vibe_feed.api.v1.dependencies import CurrentSessionDep, CurrentUserDep, SessionDep
from vibe_feed.core.security import create_access_token, hash_password, verify_password
from vibe_feed.models import RevokedToken, User
from vibe_feed.schemas.auth import (
    SessionResponse,
    SignInRequest,
    SignInResponse,
    SignUpRequest,
    UserResponse,
)
from vibe_feed.services.auth_events import AuthEvent, AuthEvents, get_auth_events

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["authentication"])


def get_auth_events_dep() -> AuthEvents:
    """Return the shared auth event registry."""
    return get_auth_events()


AuthEventsDep = Annotated[AuthEvents, Depends(get_auth_events_dep)]


@router.post(
    "/sign-up",
    summary="Create an email/password account",
    status_code=status.HTTP_201_CREATED,
    response_model=UserResponse,
)
async def sign_up(payload: SignUpRequest, db: SessionDep, events: AuthEventsDep) -> User:
    """Register a new account.

    Raises:
        HTTPException: 409 if the email is already registered
    """
    if db.query(User).filter(User.email == payload.email).first() is not None:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="User already registered",
        )

    user = User(email=payload.email, password_hash=hash_password(payload.password))
    db.add(user)
    db.commit()
    db.refresh(user)

    events.publish(AuthEvent.SIGNED_UP, user.id)
    return user


@router.post(
    "/sign-in",
    summary="Exchange email and password for an access token",
    response_model=SignInResponse,
)
async def sign_in(payload: SignInRequest, db: SessionDep, events: AuthEventsDep) -> SignInResponse:
    """Authenticate with a password and start a session."""
    user = db.query(User).filter(User.email == payload.email).first()
    if user is None or not verify_password(user.password_hash, payload.password):
        logger.info("Failed sign-in attempt for %s", payload.email)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid login credentials",
        )

    access_token, claims = create_access_token(user.id)
    events.publish(AuthEvent.SIGNED_IN, user.id)
    return SignInResponse(
        access_token=access_token,
        token_type="bearer",
        expires_at=claims.expires_at,
        user=UserResponse.model_validate(user),
    )


@router.post(
    "/sign-out",
    summary="Revoke the presented access token",
    status_code=status.HTTP_204_NO_CONTENT,
)
async def sign_out(session: CurrentSessionDep, db: SessionDep, events: AuthEventsDep) -> None:
    """End the current session."""
    user, claims = session
    db.add(RevokedToken(jti=claims.jti, user_id=user.id, expires_at=claims.expires_at))
    db.commit()
    events.publish(AuthEvent.SIGNED_OUT, user.id)


@router.get("/session", response_model=SessionResponse)
async def get_session(session: CurrentSessionDep) -> SessionResponse:
    """Return the user and expiry of the current session."""
    user, claims = session
    return SessionResponse(user=UserResponse.model_validate(user), expires_at=claims.expires_at)


@router.get("/user", response_model=UserResponse)
async def get_user(current_user: CurrentUserDep) -> User:
    """Return the account behind the current session."""
    return current_user
