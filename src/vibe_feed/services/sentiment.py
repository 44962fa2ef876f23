"""Sentiment relay to the external AI gateway.

The analyzer turns a post's text and/or image URL into a ``{label, score}``
classification by sending a single chat-completions request to the
configured gateway. It performs:

- one outbound call per invocation, with no retry, backoff or caching
- markdown fence stripping of the model's reply before JSON parsing
- translation of gateway failures into typed errors carrying an HTTP status
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any

import httpx
from pydantic import ValidationError

from vibe_feed.core.settings import settings
from vibe_feed.schemas.sentiment import SENTIMENT_LABELS, SentimentResult

# Configure logger for this module
logger = logging.getLogger(__name__)

HTTP_PAYMENT_REQUIRED = 402
HTTP_TOO_MANY_REQUESTS = 429

SYSTEM_PROMPT = (
    "You are a sentiment analysis expert. Analyze the emotional tone of the given content "
    "(text and/or image) and respond with ONLY a JSON object in this exact format:\n"
    "{\n"
    f'  "label": "one of: {", ".join(SENTIMENT_LABELS)}",\n'
    '  "score": a number between -1 and 1 (-1 most negative, 1 most positive)\n'
    "}\n"
    "Consider both the text content and visual elements in the image. "
    "Do not include any other text or explanation."
)


class SentimentError(RuntimeError):
    """Base exception for relay failures; carries the HTTP status to respond with."""

    status_code: int = 500


class AuthenticationRequiredError(SentimentError):
    """Raised when the caller presents no usable bearer credential."""

    status_code = 401

    def __init__(self, message: str = "Unauthorized: Authentication required") -> None:
        super().__init__(message)


class EmptyInputError(SentimentError):
    """Raised when neither text nor an image was supplied."""

    status_code = 400

    def __init__(self, message: str = "Content or image is required") -> None:
        super().__init__(message)


class InvalidRequestError(SentimentError):
    """Raised when the relay body is not JSON or has the wrong shape."""

    status_code = 400


class GatewayNotConfiguredError(SentimentError):
    """Raised when no gateway API key is configured."""


class RateLimitedError(SentimentError):
    """Raised when the gateway answers 429."""

    status_code = 429

    def __init__(self, message: str = "Rate limit exceeded. Please try again later.") -> None:
        super().__init__(message)


class QuotaExceededError(SentimentError):
    """Raised when the gateway answers 402."""

    status_code = 402

    def __init__(
        self, message: str = "AI credits exceeded. Please add credits to continue."
    ) -> None:
        super().__init__(message)


class UpstreamError(SentimentError):
    """Raised for any other gateway or transport failure."""


class ReplyParseError(SentimentError):
    """Raised when the model's reply is not a usable sentiment object."""


@dataclass(frozen=True)
class GatewayConfig:
    """Immutable configuration for gateway calls."""

    url: str
    api_key: str | None
    model: str
    timeout_seconds: float


def load_gateway_config() -> GatewayConfig:
    """Build configuration object from global settings."""

    return GatewayConfig(
        url=settings.ai_gateway_url,
        api_key=settings.ai_gateway_api_key,
        model=settings.ai_model,
        timeout_seconds=float(settings.ai_timeout_seconds),
    )


def strip_code_fences(reply: str) -> str:
    """Remove optional markdown fence wrapping from a model reply.

    A leading "```json" (or bare "```") and a trailing "```" are removed;
    surrounding whitespace is trimmed before and after.
    """
    cleaned = reply.strip()
    if cleaned.startswith("```json"):
        cleaned = cleaned[7:]
    elif cleaned.startswith("```"):
        cleaned = cleaned[3:]
    if cleaned.endswith("```"):
        cleaned = cleaned[:-3]
    return cleaned.strip()


def parse_sentiment_reply(reply: str) -> SentimentResult:
    """Parse the model's textual reply into a sentiment result.

    Args:
        reply: Raw assistant message content

    Returns:
        Validated sentiment with a known label and a score clamped to [-1, 1]

    Raises:
        ReplyParseError: If the reply is not JSON or lacks a usable label/score
    """
    try:
        payload = json.loads(strip_code_fences(reply))
    except json.JSONDecodeError as exc:
        raise ReplyParseError(str(exc)) from exc

    if not isinstance(payload, dict):
        raise ReplyParseError("Sentiment reply is not a JSON object")

    label = payload.get("label")
    if isinstance(label, str):
        label = label.strip().lower()
    if label not in SENTIMENT_LABELS:
        raise ReplyParseError(f"Unrecognized sentiment label: {payload.get('label')!r}")

    score = payload.get("score")
    if isinstance(score, bool) or not isinstance(score, int | float | str):
        raise ReplyParseError(f"Invalid sentiment score: {score!r}")
    try:
        numeric = float(score)
    except ValueError as exc:
        raise ReplyParseError(f"Invalid sentiment score: {score!r}") from exc

    try:
        return SentimentResult(label=label, score=max(-1.0, min(1.0, numeric)))
    except ValidationError as exc:  # pragma: no cover - guarded above
        raise ReplyParseError(str(exc)) from exc


def build_user_content(content: str | None, image_url: str | None) -> list[dict[str, Any]]:
    """Assemble the multimodal user message parts."""
    parts: list[dict[str, Any]] = []
    if content:
        parts.append({"type": "text", "text": content})
    if image_url:
        parts.append({"type": "image_url", "image_url": {"url": image_url}})
    return parts


class SentimentAnalyzer:
    """Stateless client for the AI gateway's chat-completions endpoint."""

    def __init__(
        self,
        config: GatewayConfig | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.config = config or load_gateway_config()
        self._transport = transport

    def build_payload(self, content: str | None, image_url: str | None) -> dict[str, Any]:
        """Return the JSON body sent to the gateway."""
        return {
            "model": self.config.model,
            "messages": [
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": build_user_content(content, image_url)},
            ],
        }

    async def analyze(self, content: str | None, image_url: str | None = None) -> SentimentResult:
        """Classify the emotional tone of a post.

        Args:
            content: Post text, may be empty when an image is given
            image_url: Optional public image URL

        Returns:
            Parsed sentiment result

        Raises:
            SentimentError: A subclass describing the failure and its HTTP status
        """
        if not content and not image_url:
            raise EmptyInputError()
        if not self.config.api_key:
            raise GatewayNotConfiguredError("AI_GATEWAY_API_KEY is not configured")

        headers = {
            "Authorization": f"Bearer {self.config.api_key}",
            "Content-Type": "application/json",
        }
        try:
            async with httpx.AsyncClient(
                timeout=httpx.Timeout(self.config.timeout_seconds),
                transport=self._transport,
            ) as client:
                response = await client.post(
                    self.config.url,
                    json=self.build_payload(content, image_url),
                    headers=headers,
                )
        except httpx.HTTPError as exc:
            logger.error("AI gateway request failed: %s", exc)
            raise UpstreamError(f"AI gateway request failed: {exc}") from exc

        if response.status_code == HTTP_TOO_MANY_REQUESTS:
            logger.warning("AI gateway rate limited the request")
            raise RateLimitedError()
        if response.status_code == HTTP_PAYMENT_REQUIRED:
            logger.warning("AI gateway reported exhausted credits")
            raise QuotaExceededError()
        if not response.is_success:
            logger.error("AI gateway error: %s", response.status_code)
            raise UpstreamError(f"AI gateway error: {response.status_code}")

        try:
            reply = response.json()["choices"][0]["message"]["content"]
        except (ValueError, KeyError, IndexError, TypeError) as exc:
            logger.error("Unexpected AI gateway response shape: %s", exc)
            raise UpstreamError("AI gateway returned an unexpected response") from exc
        if not isinstance(reply, str):
            raise UpstreamError("AI gateway returned an unexpected response")

        try:
            result = parse_sentiment_reply(reply)
        except ReplyParseError as exc:
            logger.error("Could not parse sentiment reply: %s", exc)
            raise
        logger.debug("Classified post as %s (%.2f)", result.label, result.score)
        return result


_analyzer: SentimentAnalyzer | None = None


def get_sentiment_analyzer() -> SentimentAnalyzer:
    """Return the shared analyzer built from global settings."""
    global _analyzer
    if _analyzer is None:
        _analyzer = SentimentAnalyzer()
    return _analyzer
