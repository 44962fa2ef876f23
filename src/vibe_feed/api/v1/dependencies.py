"""Shared API dependencies for authentication and common functionality."""

from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError
from sqlalchemy.orm import Session

from vibe_feed.core.security import TokenClaims, decode_access_token
from vibe_feed.db.session import get_db
from vibe_feed.models import RevokedToken, User
from vibe_feed.services.sentiment import AuthenticationRequiredError

# Missing credentials are reported by the dependencies below, not the scheme.
bearer_scheme = HTTPBearer(auto_error=False)

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]
BearerDep = Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)]


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def resolve_session(token: str, db: Session) -> tuple[User, TokenClaims]:
    """Resolve a bearer token to its user and claims.

    Raises:
        ValueError: If the token is invalid, revoked or its user no longer exists
    """
    try:
        claims = decode_access_token(token)
    except JWTError as err:
        raise ValueError("Could not validate credentials") from err

    if db.get(RevokedToken, claims.jti) is not None:
        raise ValueError("Session has been signed out")

    user = db.get(User, claims.user_id)
    if user is None:
        raise ValueError("User not found")
    return user, claims


def get_current_session(credentials: BearerDep, db: SessionDep) -> tuple[User, TokenClaims]:
    """Get the authenticated user and token claims from the bearer token.

    Raises:
        HTTPException: 401 if the token is missing, invalid or revoked
    """
    if credentials is None:
        raise _unauthorized("Not authenticated")
    try:
        return resolve_session(credentials.credentials, db)
    except ValueError as err:
        raise _unauthorized(str(err)) from err


def get_current_user(
    session: Annotated[tuple[User, TokenClaims], Depends(get_current_session)],
) -> User:
    """Get the current authenticated user."""
    return session[0]


def require_relay_caller(credentials: BearerDep, db: SessionDep) -> User:
    """Gate the sentiment relay on a bearer credential.

    Runs before the request body is read so unauthenticated calls never
    reach the gateway.

    Raises:
        AuthenticationRequiredError: If no valid credential is presented
    """
    if credentials is None or not credentials.credentials:
        raise AuthenticationRequiredError()
    try:
        user, _claims = resolve_session(credentials.credentials, db)
    except ValueError as err:
        raise AuthenticationRequiredError(f"Unauthorized: {err}") from err
    return user


CurrentSessionDep = Annotated[tuple[User, TokenClaims], Depends(get_current_session)]
CurrentUserDep = Annotated[User, Depends(get_current_user)]
RelayCallerDep = Annotated[User, Depends(require_relay_caller)]
