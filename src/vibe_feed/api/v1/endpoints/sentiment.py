# src/vibe_feed/api/v1/endpoints/sentiment.py
"""Sentiment relay endpoint."""

from __future__ import annotations

import json

from fastapi import APIRouter, Request
from pydantic import ValidationError

from vibe_feed.api.v1.dependencies import RelayCallerDep
from vibe_feed.api.v1.endpoints.posts import AnalyzerDep
from vibe_feed.schemas.sentiment import ErrorResponse, SentimentRequest, SentimentResult
from vibe_feed.services.sentiment import InvalidRequestError

router = APIRouter(tags=["sentiment"])

_ERROR_RESPONSES: dict[int | str, dict[str, object]] = {
    code: {"model": ErrorResponse} for code in (400, 401, 402, 429, 500)
}


async def read_sentiment_request(request: Request) -> SentimentRequest:
    """Decode and validate the relay body.

    An empty body is treated as ``{}`` so it fails the same way as a body
    without content or image.

    Raises:
        InvalidRequestError: If the body is not JSON or does not match the schema
    """
    raw = await request.body()
    if not raw.strip():
        return SentimentRequest()
    try:
        data = json.loads(raw)
    except ValueError as exc:
        raise InvalidRequestError(f"Invalid JSON body: {exc}") from exc

    try:
        return SentimentRequest.model_validate(data)
    except ValidationError as exc:
        error = exc.errors()[0]
        location = ".".join(str(part) for part in error["loc"]) or "body"
        raise InvalidRequestError(f"Invalid request body: {location}: {error['msg']}") from exc


@router.post(
    "/analyze-sentiment",
    response_model=SentimentResult,
    responses=_ERROR_RESPONSES,
    openapi_extra={
        "requestBody": {
            "required": True,
            "content": {"application/json": {"schema": SentimentRequest.model_json_schema()}},
        }
    },
)
async def analyze_sentiment(
    _caller: RelayCallerDep,
    request: Request,
    analyzer: AnalyzerDep,
) -> SentimentResult:
    """Classify text and/or an image through the AI gateway.

    The body is read only after the caller is authenticated. Errors are
    rendered as ``{"error": message}`` with the status carried by the raised
    `SentimentError`.
    """
    payload = await read_sentiment_request(request)
    return await analyzer.analyze(payload.content, payload.image_url)
