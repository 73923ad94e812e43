"""Per-URL report records.

Debug mode reports every request in full. Otherwise only responses with a
status >= 400 are reported, in summary form. Successful non-debug
deliveries produce no record.
"""

from __future__ import annotations

import httpx


def status_line(response: httpx.Response) -> str:
    """`"404 Not Found"` style status line."""

    return f"{response.status_code} {response.reason_phrase}".strip()


def format_headers(headers: httpx.Headers) -> str:
    items = ", ".join(
        f"{name.decode(headers.encoding)}: {value.decode(headers.encoding)}" for name, value in headers.raw
    )
    return "{" + items + "}"


def should_report(response: httpx.Response, debug: bool) -> bool:
    return debug or response.status_code >= 400


def format_record(
    index: int,
    request: httpx.Request,
    response: httpx.Response,
    body: str | None,
    debug: bool,
) -> str | None:
    """Build the record for one URL, or None when there is nothing to report."""

    if not should_report(response, debug):
        return None

    response_body = body or ""
    if debug:
        request_body = request.content.decode("utf-8", errors="replace")
        return (
            f"[debug] Webhook {index}\n"
            f"  URL: {request.url}\n"
            f"  METHOD: {request.method}\n"
            f"  HEADERS: {format_headers(request.headers)}\n"
            f"  REQUEST BODY: {request_body}\n"
            f"  RESPONSE STATUS: {status_line(response)}\n"
            f"  RESPONSE BODY: {response_body}\n"
        )
    return (
        f"[info] Webhook {index}\n"
        f"  URL: {request.url}\n"
        f"  RESPONSE STATUS: {status_line(response)}\n"
        f"  RESPONSE BODY: {response_body}\n"
    )
