"""httpx client factory.

One synchronous client is shared by the whole run: template fetching and
every webhook delivery go through it.
"""

from __future__ import annotations

import httpx

from core.config import AppSettings


def build_client(
    settings: AppSettings | None = None,
    *,
    transport: httpx.BaseTransport | None = None,
) -> httpx.Client:
    """Create an `httpx.Client` from the settings.

    `transport` is injectable so tests can swap the network for
    `httpx.MockTransport`.
    """

    settings = settings or AppSettings()
    return httpx.Client(
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        follow_redirects=settings.follow_redirects,
        headers={"User-Agent": settings.user_agent},
        transport=transport,
    )
