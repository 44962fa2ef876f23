"""Authentication-related Pydantic schemas."""

import re
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from vibe_feed.core.settings import settings

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


class Credentials(BaseModel):
    """Email and password submitted for sign-up or sign-in."""

    email: str = Field(..., max_length=320, description="Account email address")
    password: str = Field(..., min_length=1, max_length=256, description="Account password")

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        """Lower-case the address and reject obviously malformed values."""
        cleaned = v.strip().lower()
        if not EMAIL_PATTERN.match(cleaned):
            raise ValueError("Email address is not valid")
        return cleaned


class SignUpRequest(Credentials):
    """Schema for account creation."""

    @field_validator("password")
    @classmethod
    def validate_password_length(cls, v: str) -> str:
        """Enforce the configured minimum password length."""
        if len(v) < settings.password_min_length:
            raise ValueError(
                f"Password should be at least {settings.password_min_length} characters"
            )
        return v


class SignInRequest(Credentials):
    """Schema for password sign-in."""


class UserResponse(BaseModel):
    """Public account information."""

    id: str
    email: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class SessionResponse(BaseModel):
    """Active session derived from the presented access token."""

    user: UserResponse
    expires_at: datetime


class SignInResponse(SessionResponse):
    """Response returned after successful sign-in."""

    access_token: str = Field(..., description="JWT access token")
    token_type: str = Field("bearer", description="Token type (always 'bearer')")
