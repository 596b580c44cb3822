"""httpx wrapper.

Why a wrapper:
- Standardizes timeouts, headers and TLS verification for every request.
- Eases testing: a `httpx.MockTransport` can be passed in place of the network.
"""

from __future__ import annotations

import httpx

from core.config import AppSettings


def build_async_client(
    settings: AppSettings | None = None,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Create an `httpx.AsyncClient` with the configured defaults.

    Redirects are not followed: a signed S3 request is only valid for the
    host it was signed for.
    """

    settings = settings or AppSettings()
    headers: dict[str, str] = {
        "User-Agent": settings.user_agent,
    }
    return httpx.AsyncClient(
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        follow_redirects=False,
        verify=not settings.insecure,
        headers=headers,
        transport=transport,
    )
