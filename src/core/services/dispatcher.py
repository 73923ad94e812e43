"""Webhook delivery.

URLs are processed one at a time, in the order given. Each iteration builds
its own request over the shared payload bytes, sends it, hands the response
to the reporter hook and closes it before moving on.

With `FailurePolicy.FAIL_FAST` the first failure (bad URL, request build
error, transport error) is raised and the remaining URLs are never tried.
With `FailurePolicy.CONTINUE` the failure becomes an outcome and the loop
goes on.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Callable, Sequence

import httpx

from core.domain.errors import DeliveryTransportError, RequestBuildError, UrlParseError
from core.domain.models import WebhookConfig
from core.domain.outcome import DeliveryOutcome, FailurePolicy
from core.services.reporter import should_report, status_line

logger = logging.getLogger(__name__)

# RFC 7230 token
_METHOD_TOKEN = re.compile(r"[!#$%&'*+\-.^_`|~0-9A-Za-z]+")

ReportHook = Callable[[int, httpx.Request, httpx.Response, str | None], None]


@dataclass
class DispatchHooks:
    """Optional callbacks for the UI layer."""

    report: ReportHook | None = None
    warning: Callable[[str], None] | None = None


def parse_target(raw: str) -> httpx.URL:
    """Parse a target URL; only absolute http(s) URLs are accepted."""

    try:
        url = httpx.URL(raw)
    except (httpx.InvalidURL, TypeError, ValueError) as exc:
        raise UrlParseError(exc, url=raw) from exc
    if url.scheme not in ("http", "https") or not url.host:
        raise UrlParseError(f"{raw!r} is not an absolute http(s) url", url=raw)
    return url


def build_request(
    client: httpx.Client,
    config: WebhookConfig,
    url: httpx.URL,
    payload: bytes,
) -> httpx.Request:
    """Request for one URL. Custom headers overwrite the Content-Type default."""

    if not _METHOD_TOKEN.fullmatch(config.method):
        raise RequestBuildError(f"invalid method {config.method!r}", url=str(url))
    try:
        headers = httpx.Headers({"Content-Type": config.content_type})
        for name, value in config.headers.items():
            headers[name] = value
        request = client.build_request(config.method, url, content=payload, headers=headers)
    except (httpx.HTTPError, httpx.InvalidURL, TypeError, ValueError) as exc:
        raise RequestBuildError(exc, url=str(url)) from exc
    # httpx upper-cases the method; send it as configured
    request.method = config.method
    return request


def _read_body(response: httpx.Response, hooks: DispatchHooks) -> str:
    try:
        response.read()
    except httpx.HTTPError as exc:
        message = f"Error reading http response body. {exc}"
        logger.warning(message)
        if hooks.warning:
            hooks.warning(message)
        return ""
    return response.text


def deliver(
    index: int,
    raw_url: str,
    payload: bytes,
    config: WebhookConfig,
    *,
    client: httpx.Client,
    hooks: DispatchHooks,
) -> DeliveryOutcome:
    """Deliver the payload to a single URL. Raises on any fatal failure."""

    url = parse_target(raw_url)
    request = build_request(client, config, url, payload)

    credentials = config.basic_auth()
    auth = httpx.BasicAuth(*credentials) if credentials else None

    logger.debug("Webhook %d: %s %s", index, request.method, request.url)
    try:
        response = client.send(request, auth=auth, stream=True)
    except httpx.RequestError as exc:
        raise DeliveryTransportError(exc, url=raw_url) from exc

    try:
        body: str | None = None
        if should_report(response, config.debug):
            body = _read_body(response, hooks)
            if hooks.report:
                hooks.report(index, request, response, body)
        return DeliveryOutcome.sent(
            index,
            raw_url,
            status_code=response.status_code,
            status_line=status_line(response),
            body=body,
        )
    finally:
        response.close()


def dispatch(
    targets: Sequence[str],
    payload: bytes,
    config: WebhookConfig,
    *,
    client: httpx.Client,
    policy: FailurePolicy = FailurePolicy.FAIL_FAST,
    hooks: DispatchHooks | None = None,
) -> list[DeliveryOutcome]:
    """Deliver `payload` to every target in order.

    `config` must already carry its defaults (`WebhookConfig.with_defaults`).
    """

    hooks = hooks or DispatchHooks()
    outcomes: list[DeliveryOutcome] = []

    for index, raw_url in enumerate(targets, start=1):
        try:
            outcome = deliver(index, raw_url, payload, config, client=client, hooks=hooks)
        except (UrlParseError, RequestBuildError) as exc:
            if policy is FailurePolicy.FAIL_FAST:
                raise
            outcome = DeliveryOutcome.request_build_failed(index, raw_url, exc)
            if hooks.warning:
                hooks.warning(f"Webhook {index}: {exc}")
        except DeliveryTransportError as exc:
            if policy is FailurePolicy.FAIL_FAST:
                raise
            outcome = DeliveryOutcome.transport_failed(index, raw_url, exc)
            if hooks.warning:
                hooks.warning(f"Webhook {index}: {exc}")
        outcomes.append(outcome)

    return outcomes
