import httpx
import pytest

from vibe_feed.services.sentiment import (
    EmptyInputError,
    GatewayNotConfiguredError,
    QuotaExceededError,
    RateLimitedError,
    ReplyParseError,
    UpstreamError,
    parse_sentiment_reply,
    strip_code_fences,
)


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ('{"label": "happy", "score": 1}', '{"label": "happy", "score": 1}'),
        ('  ```json\n{"a": 1}\n```  ', '{"a": 1}'),
        ('```\n{"a": 1}\n```', '{"a": 1}'),
        ('```json{"a": 1}', '{"a": 1}'),
        ('{"a": 1}```', '{"a": 1}'),
    ],
)
def test_strip_code_fences(raw, expected):
    assert strip_code_fences(raw) == expected


def test_parse_reply_normalizes_label_and_clamps_score():
    result = parse_sentiment_reply('{"label": " Anxious ", "score": -1.7}')
    assert result.label == "anxious"
    assert result.score == -1.0

    result = parse_sentiment_reply('{"label": "thoughtful", "score": "0.25"}')
    assert result.score == 0.25


@pytest.mark.parametrize(
    "reply",
    [
        "not json at all",
        '["happy", 0.5]',
        '{"score": 0.5}',
        '{"label": "joyful", "score": 0.5}',
        '{"label": "happy"}',
        '{"label": "happy", "score": true}',
        '{"label": "happy", "score": "very"}',
    ],
)
def test_parse_reply_rejects_unusable_replies(reply):
    with pytest.raises(ReplyParseError):
        parse_sentiment_reply(reply)


@pytest.mark.asyncio
async def test_analyze_returns_result(analyzer_factory, gateway_stub):
    gateway_stub.reply = '```json\n{"label": "angry", "score": -0.7}\n```'
    analyzer = analyzer_factory(gateway_stub)

    result = await analyzer.analyze("Traffic again", None)

    assert result.label == "angry"
    assert result.score == -0.7
    assert gateway_stub.calls == 1


@pytest.mark.asyncio
async def test_analyze_requires_input(analyzer_factory, gateway_stub):
    analyzer = analyzer_factory(gateway_stub)

    with pytest.raises(EmptyInputError) as exc_info:
        await analyzer.analyze("", None)

    assert exc_info.value.status_code == 400
    assert gateway_stub.calls == 0


@pytest.mark.asyncio
async def test_analyze_without_api_key(analyzer_factory, gateway_stub):
    analyzer = analyzer_factory(gateway_stub, api_key=None)

    with pytest.raises(GatewayNotConfiguredError, match="AI_GATEWAY_API_KEY is not configured"):
        await analyzer.analyze("hello", None)

    assert gateway_stub.calls == 0


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("status_code", "error_type", "http_status"),
    [
        (429, RateLimitedError, 429),
        (402, QuotaExceededError, 402),
        (500, UpstreamError, 500),
        (401, UpstreamError, 500),
    ],
)
async def test_analyze_maps_upstream_status(
    analyzer_factory, gateway_stub, status_code, error_type, http_status
):
    gateway_stub.status_code = status_code
    analyzer = analyzer_factory(gateway_stub)

    with pytest.raises(error_type) as exc_info:
        await analyzer.analyze("hello", None)

    assert exc_info.value.status_code == http_status
    assert gateway_stub.calls == 1


@pytest.mark.asyncio
async def test_analyze_transport_failure(analyzer_factory):
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    analyzer = analyzer_factory(handler)

    with pytest.raises(UpstreamError, match="connection refused"):
        await analyzer.analyze("hello", None)


@pytest.mark.asyncio
async def test_analyze_unexpected_envelope(analyzer_factory, gateway_stub):
    gateway_stub.body = {"choices": []}
    analyzer = analyzer_factory(gateway_stub)

    with pytest.raises(UpstreamError, match="unexpected response"):
        await analyzer.analyze("hello", None)


def test_build_payload_omits_missing_parts(analyzer_factory, gateway_stub):
    analyzer = analyzer_factory(gateway_stub)

    payload = analyzer.build_payload("just text", None)

    assert payload["messages"][1]["content"] == [{"type": "text", "text": "just text"}]
