import logging

import httpx
import pytest

from rentradar.adapters.clients.http_resilience import RSS_ACCEPT, fetch_feed_text, resilient_request


@pytest.mark.asyncio
async def test_fetch_sends_feed_headers_and_returns_body(fast_policy, static_transport):
    transport = static_transport("<rss/>")
    body = await fetch_feed_text("https://feeds.example/rss", "unit", policy=fast_policy, transport=transport)

    assert body == "<rss/>"
    (req,) = transport.seen
    assert req.headers["accept"] == RSS_ACCEPT
    assert req.headers["user-agent"] == "test-agent"


@pytest.mark.asyncio
async def test_non_success_status_degrades_to_empty_text(fast_policy, static_transport, caplog):
    transport = static_transport("nope", status=404)
    with caplog.at_level(logging.ERROR):
        body = await fetch_feed_text("https://feeds.example/rss", "gone", policy=fast_policy, transport=transport)

    assert body == ""
    assert len(transport.seen) == 1  # 4xx is not retried
    assert "[rss:gone] status 404" in caplog.text


@pytest.mark.asyncio
async def test_network_error_degrades_to_empty_text(fast_policy, caplog):
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        raise httpx.ConnectError("connection refused", request=request)

    with caplog.at_level(logging.ERROR):
        body = await fetch_feed_text(
            "https://feeds.example/rss", "down", policy=fast_policy, transport=httpx.MockTransport(handler)
        )

    assert body == ""
    assert len(calls) == fast_policy.max_retries + 1
    assert "[rss:down] ConnectError" in caplog.text


@pytest.mark.asyncio
async def test_retryable_status_is_retried_then_succeeds(fast_policy):
    statuses = [503, 200]

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(statuses.pop(0), text="ok")

    resp = await resilient_request(
        "GET", "https://feeds.example/rss", policy=fast_policy, transport=httpx.MockTransport(handler)
    )
    assert resp.status_code == 200
    assert statuses == []


@pytest.mark.asyncio
async def test_retries_are_bounded(fast_policy):
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(429)

    with pytest.raises(httpx.HTTPStatusError):
        await resilient_request(
            "GET", "https://feeds.example/rss", policy=fast_policy, transport=httpx.MockTransport(handler)
        )
    assert len(calls) == fast_policy.max_retries + 1
