"""Password hashing and access-token helpers."""
from __future__ import annotations

import secrets
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

import nacl.pwhash
from jose import JWTError, jwt
from nacl.exceptions import InvalidkeyError

from vibe_feed.core.settings import settings


@dataclass(frozen=True)
class TokenClaims:
    """Decoded claims of a valid access token."""

    user_id: str
    jti: str
    expires_at: datetime


def hash_password(password: str) -> str:
    """Return an Argon2id hash string for the password."""
    return nacl.pwhash.str(password.encode("utf-8")).decode("ascii")


def verify_password(password_hash: str, password: str) -> bool:
    """Check a password against a stored Argon2id hash.

    Returns:
        True if the password matches; False otherwise.
    """
    try:
        return nacl.pwhash.verify(password_hash.encode("ascii"), password.encode("utf-8"))
    except InvalidkeyError:
        return False


def create_access_token(user_id: str, expires_delta: timedelta | None = None) -> tuple[str, TokenClaims]:
    """Create a signed JWT access token for a user.

    Returns:
        The encoded token and the claims it carries.
    """
    expire = datetime.now(UTC) + (
        expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    )
    # JWT exp has second resolution.
    expire = expire.replace(microsecond=0)
    claims = TokenClaims(user_id=user_id, jti=secrets.token_hex(16), expires_at=expire)
    encoded_jwt: str = jwt.encode(
        {"sub": user_id, "jti": claims.jti, "exp": expire},
        settings.secret_key,
        algorithm=settings.jwt_algorithm,
    )
    return encoded_jwt, claims


def decode_access_token(token: str) -> TokenClaims:
    """Validate a token's signature and expiry and return its claims.

    Raises:
        JWTError: If the token is invalid, expired or missing required claims
    """
    payload = jwt.decode(token, settings.secret_key, algorithms=[settings.jwt_algorithm])
    subject = payload.get("sub")
    jti = payload.get("jti")
    exp = payload.get("exp")
    if not subject or not jti or exp is None:
        raise JWTError("Token is missing required claims")
    return TokenClaims(
        user_id=str(subject),
        jti=str(jti),
        expires_at=datetime.fromtimestamp(int(exp), UTC),
    )
