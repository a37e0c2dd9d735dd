import httpx
import pytest

from rentradar.adapters.clients.http_resilience import HttpPolicy


@pytest.fixture
def fast_policy():
    """No backoff, one retry: keeps failure-path tests instant."""
    return HttpPolicy(timeout_s=5.0, max_retries=1, backoff_base_s=0.0, rate_limit_rps=0.0, user_agent="test-agent")


@pytest.fixture
def static_transport():
    def _make(body: str, status: int = 200):
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(status, text=body)

        transport = httpx.MockTransport(handler)
        transport.seen = seen
        return transport

    return _make
