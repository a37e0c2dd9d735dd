# rentradar/adapters/clients/http_resilience.py
from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Any

import httpx

from ...config import Settings, settings

log = logging.getLogger(__name__)

RSS_ACCEPT = "application/rss+xml, application/xml;q=0.9, */*;q=0.8"
RETRYABLE_STATUS = (429, 500, 502, 503, 504)

_RATE_LOCK = asyncio.Lock()
_LAST_TS = 0.0


@dataclass(frozen=True)
class HttpPolicy:
    timeout_s: float = 20.0
    max_retries: int = 2
    backoff_base_s: float = 0.5
    rate_limit_rps: float = 0.0
    user_agent: str = "Mozilla/5.0"

    @classmethod
    def from_settings(cls, s: Settings | None = None) -> "HttpPolicy":
        s = s or settings
        return cls(
            timeout_s=float(s.HTTP_TIMEOUT_S),
            max_retries=max(0, int(s.HTTP_MAX_RETRIES)),
            backoff_base_s=float(s.HTTP_BACKOFF_BASE_S),
            rate_limit_rps=float(s.HTTP_RATE_LIMIT_RPS),
            user_agent=s.HTTP_USER_AGENT,
        )


async def _rate_limit(rps: float) -> None:
    """Very simple per-process limiter."""
    global _LAST_TS
    if rps <= 0:
        return
    min_gap = 1.0 / rps
    async with _RATE_LOCK:
        now = time.time()
        wait = (_LAST_TS + min_gap) - now
        if wait > 0:
            await asyncio.sleep(wait)
        _LAST_TS = time.time()


async def resilient_request(
    method: str,
    url: str,
    *,
    headers: dict[str, str] | None = None,
    params: dict[str, Any] | None = None,
    policy: HttpPolicy | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.Response:
    """
    One request with timeout, bounded retries and capped exponential backoff.

    Retries timeouts, network errors and 429/5xx. Any other non-2xx status
    raises immediately.
    """
    policy = policy or HttpPolicy.from_settings()
    timeout = httpx.Timeout(policy.timeout_s)

    last_exc: Exception | None = None
    for attempt in range(policy.max_retries + 1):
        await _rate_limit(policy.rate_limit_rps)
        try:
            async with httpx.AsyncClient(timeout=timeout, follow_redirects=True, transport=transport) as client:
                resp = await client.request(method, url, headers=headers, params=params)

            if resp.status_code in RETRYABLE_STATUS:
                raise httpx.HTTPStatusError(
                    f"retryable status {resp.status_code}", request=resp.request, response=resp
                )

            resp.raise_for_status()
            return resp
        except (httpx.TimeoutException, httpx.NetworkError, httpx.HTTPStatusError) as e:
            last_exc = e
            status = e.response.status_code if isinstance(e, httpx.HTTPStatusError) else None
            if status is not None and status not in RETRYABLE_STATUS:
                raise
            if attempt >= policy.max_retries:
                break
            await asyncio.sleep(min(5.0, policy.backoff_base_s * (2**attempt)))

    assert last_exc is not None
    raise last_exc


def feed_headers(policy: HttpPolicy) -> dict[str, str]:
    return {
        "Accept": RSS_ACCEPT,
        "User-Agent": policy.user_agent,
        "Accept-Language": "en-CA,en;q=0.9",
    }


async def fetch_feed_text(
    url: str,
    label: str,
    *,
    policy: HttpPolicy | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> str:
    """
    GET a syndication feed. Transport failures and non-2xx responses are
    logged and come back as "" so a dead feed reads as an empty one.
    """
    policy = policy or HttpPolicy.from_settings()
    try:
        resp = await resilient_request("GET", url, headers=feed_headers(policy), policy=policy, transport=transport)
    except httpx.HTTPStatusError as e:
        log.error("[rss:%s] status %s", label, e.response.status_code)
        return ""
    except httpx.HTTPError as e:
        log.error("[rss:%s] %s: %s", label, type(e).__name__, e)
        return ""
    return resp.text
