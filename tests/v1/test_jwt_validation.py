# tests/v1/test_jwt_validation.py
"""Tests for access token and password helpers."""

from datetime import timedelta

import pytest
from fastapi import status
from jose import JWTError, jwt

from vibe_feed.core.security import (
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)
from vibe_feed.core.settings import settings


class TestPasswordHashing:
    def test_hash_round_trip(self):
        stored = hash_password("hunter22")
        assert stored != "hunter22"
        assert verify_password(stored, "hunter22")

    def test_wrong_password(self):
        assert not verify_password(hash_password("hunter22"), "hunter23")


class TestAccessTokens:
    """Token issuing and validation edge cases."""

    def test_claims_round_trip(self):
        token, claims = create_access_token("user-1")
        decoded = decode_access_token(token)
        assert decoded == claims

    def test_each_token_has_unique_id(self):
        _, first = create_access_token("user-1")
        _, second = create_access_token("user-1")
        assert first.jti != second.jti

    def test_expired_token_is_rejected(self):
        token, _ = create_access_token("user-1", expires_delta=timedelta(seconds=-5))
        with pytest.raises(JWTError):
            decode_access_token(token)

    def test_token_without_jti_is_rejected(self):
        token = jwt.encode({"sub": "user-1", "exp": 4102444800}, settings.secret_key, algorithm=settings.jwt_algorithm)
        with pytest.raises(JWTError, match="missing required claims"):
            decode_access_token(token)

    def test_token_with_wrong_secret_is_rejected(self, client, test_user):
        token = jwt.encode(
            {"sub": test_user.id, "jti": "abc", "exp": 4102444800},
            "not-the-secret",
            algorithm=settings.jwt_algorithm,
        )
        response = client.get("/api/v1/auth/user", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_token_for_deleted_user_is_rejected(self, client):
        token, _ = create_access_token("ghost")
        response = client.get("/api/v1/auth/user", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json()["detail"] == "User not found"

    def test_non_bearer_scheme_is_rejected(self, client):
        response = client.get("/api/v1/auth/user", headers={"Authorization": "Basic abc"})
        assert response.status_code == status.HTTP_401_UNAUTHORIZED
