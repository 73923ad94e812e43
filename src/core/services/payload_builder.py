"""Payload construction.

The payload is built once per run and the same bytes are sent to every URL.
"""

from __future__ import annotations

import httpx

from adapters.payload import JsonPayloadEncoder, TemplatePayloadRenderer
from core.domain.models import BuildContext
from core.interfaces.renderer import PayloadRenderer


def select_renderer(template: str, *, client: httpx.Client | None = None) -> PayloadRenderer:
    """JSON encoder when `template` is empty, template renderer otherwise."""

    if not template:
        return JsonPayloadEncoder()
    return TemplatePayloadRenderer.from_source(template, client=client)


def build_payload(
    context: BuildContext,
    template: str = "",
    *,
    client: httpx.Client | None = None,
) -> bytes:
    """Render the request body.

    Raises `PayloadEncodeError` or `TemplateRenderError`.
    """

    renderer = select_renderer(template, client=client)
    return renderer.render(context)
