# tests/conftest.py
from __future__ import annotations

import json
import os
import tempfile
from collections.abc import Callable, Generator, Iterator
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

import httpx
import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("AI_GATEWAY_API_KEY", "test-gateway-key")
os.environ.setdefault("STORAGE_ROOT", tempfile.mkdtemp(prefix="vibe-feed-storage-"))

from vibe_feed.api.v1.endpoints import posts as posts_endpoints
from vibe_feed.api.v1.endpoints import storage as storage_endpoints
from vibe_feed.core.security import create_access_token, hash_password
from vibe_feed.db.session import Base
from vibe_feed.db.session import get_db as app_get_session
from vibe_feed.main import app as fastapi_app
from vibe_feed.models import Comment, Post, User
from vibe_feed.services.sentiment import GatewayConfig, SentimentAnalyzer
from vibe_feed.services.storage import ObjectStorage

TEST_DB_URL = "sqlite://"
TEST_PASSWORD = "correct horse battery"
GATEWAY_URL = "https://gateway.test/v1/chat/completions"


@pytest.fixture()
def engine() -> Generator[Engine, None, None]:
    engine = create_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def db_session(engine: Engine) -> Iterator[Session]:
    SessionLocal = sessionmaker(
        bind=engine,
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
    )
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture(autouse=True)
def override_session_dependency(app: FastAPI, db_session: Session) -> Iterator[None]:
    def _get_session_override() -> Generator[Session, None, None]:
        yield db_session

    app.dependency_overrides[app_get_session] = _get_session_override
    try:
        yield
    finally:
        app.dependency_overrides.pop(app_get_session, None)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


@dataclass
class GatewayStub:
    """Scripted stand-in for the AI gateway."""

    status_code: int = 200
    reply: str = '{"label": "happy", "score": 0.8}'
    body: Any = None
    requests: list[httpx.Request] = field(default_factory=list)

    @property
    def calls(self) -> int:
        return len(self.requests)

    def last_json(self) -> dict[str, Any]:
        return json.loads(self.requests[-1].content)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.status_code != 200:
            return httpx.Response(self.status_code, json={"error": "upstream"})
        body = self.body
        if body is None:
            body = {"choices": [{"message": {"role": "assistant", "content": self.reply}}]}
        return httpx.Response(200, json=body)


def build_analyzer(
    handler: Callable[[httpx.Request], httpx.Response],
    *,
    api_key: str | None = "test-gateway-key",
) -> SentimentAnalyzer:
    config = GatewayConfig(
        url=GATEWAY_URL,
        api_key=api_key,
        model="test/model",
        timeout_seconds=5.0,
    )
    return SentimentAnalyzer(config, transport=httpx.MockTransport(handler))


@pytest.fixture()
def gateway(app: FastAPI) -> Iterator[GatewayStub]:
    """Route sentiment analysis through a scripted gateway stub."""
    stub = GatewayStub()
    analyzer = build_analyzer(stub)
    app.dependency_overrides[posts_endpoints.get_sentiment_analyzer_dep] = lambda: analyzer
    try:
        yield stub
    finally:
        app.dependency_overrides.pop(posts_endpoints.get_sentiment_analyzer_dep, None)


@pytest.fixture()
def object_storage(app: FastAPI, tmp_path) -> Iterator[ObjectStorage]:
    """Point uploads at a per-test directory."""
    storage = ObjectStorage(
        tmp_path,
        public_path="/storage/v1/object/public",
        buckets=["post-images"],
    )
    app.dependency_overrides[storage_endpoints.get_object_storage_dep] = lambda: storage
    try:
        yield storage
    finally:
        app.dependency_overrides.pop(storage_endpoints.get_object_storage_dep, None)


def make_user(db_session: Session, email: str) -> User:
    user = User(email=email, password_hash=hash_password(TEST_PASSWORD))
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


def bearer(user: User) -> dict[str, str]:
    token, _claims = create_access_token(user.id)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def test_user(db_session: Session) -> User:
    """Create and return a persisted test user."""
    return make_user(db_session, "alice@example.com")


@pytest.fixture()
def other_user(db_session: Session) -> User:
    """Create and return a second persisted user."""
    return make_user(db_session, "bob@example.com")


@pytest.fixture()
def auth_token(test_user: User) -> dict[str, str]:
    """Return authorization headers for the primary test user."""
    return bearer(test_user)


@pytest.fixture()
def other_auth_token(other_user: User) -> dict[str, str]:
    """Return authorization headers for the secondary test user."""
    return bearer(other_user)


@pytest.fixture()
def make_post(db_session: Session) -> Callable[..., Post]:
    """Factory persisting posts with explicit sentiment and timestamps."""

    def _make_post(
        author: User,
        content: str = "Test post content",
        *,
        label: str | None = "happy",
        score: float | None = 0.5,
        created_at: datetime | None = None,
        image_url: str | None = None,
    ) -> Post:
        post = Post(
            user_id=author.id,
            content=content,
            image_url=image_url,
            sentiment_label=label,
            sentiment_score=score,
        )
        if created_at is not None:
            post.created_at = created_at
        db_session.add(post)
        db_session.commit()
        db_session.refresh(post)
        return post

    return _make_post


@pytest.fixture()
def test_post(make_post: Callable[..., Post], test_user: User) -> Post:
    """Create a baseline post for tests."""
    return make_post(test_user)


@pytest.fixture()
def make_comment(db_session: Session) -> Callable[..., Comment]:
    def _make_comment(post: Post, author: User, content: str, created_at: datetime | None = None) -> Comment:
        comment = Comment(post_id=post.id, user_id=author.id, content=content)
        if created_at is not None:
            comment.created_at = created_at
        db_session.add(comment)
        db_session.commit()
        db_session.refresh(comment)
        return comment

    return _make_comment


@pytest.fixture()
def analyzer_factory() -> Callable[..., SentimentAnalyzer]:
    """Build analyzers over arbitrary gateway handlers."""
    return build_analyzer


@pytest.fixture()
def gateway_stub() -> GatewayStub:
    """A fresh gateway stub that is not wired into the app."""
    return GatewayStub()
