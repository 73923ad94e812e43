"""User template payloads (Jinja2).

The template sees `Build`, `Repo` and `System` (and the lower-case aliases)
and may reshape them freely. Any undefined reference is an error instead of
an empty string.

Template sources:
- `http://` / `https://` URL: fetched once with the shared client;
- `file://` URL: read from disk;
- anything else: the template text itself.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any
from urllib.parse import unquote, urlsplit

import httpx
from jinja2 import Environment, StrictUndefined, Template, TemplateError

from adapters.payload.helpers import FILTERS, TESTS
from core.domain.errors import TemplateRenderError
from core.domain.models import BuildContext

logger = logging.getLogger(__name__)


def _finalize(value: Any) -> Any:
    return "" if value is None else value


def _get_env() -> Environment:
    env = Environment(
        undefined=StrictUndefined,
        autoescape=False,
        keep_trailing_newline=True,
        finalize=_finalize,
    )
    env.filters.update(FILTERS)
    env.tests.update(TESTS)
    return env


def load_template_source(source: str, *, client: httpx.Client | None = None) -> str:
    """Resolve `source` to template text (see module docstring)."""

    if any(ch.isspace() for ch in source):
        return source

    parts = urlsplit(source)
    scheme = parts.scheme.lower()

    if scheme in ("http", "https") and parts.netloc:
        logger.debug("Fetching template from %s", source)
        try:
            if client is not None:
                response = client.get(source)
            else:
                with httpx.Client() as fallback:
                    response = fallback.get(source)
            response.raise_for_status()
        except httpx.HTTPError as exc:
            raise TemplateRenderError(exc) from exc
        return response.text

    if scheme == "file":
        path = Path(unquote(parts.path))
        logger.debug("Reading template from %s", path)
        try:
            return path.read_text(encoding="utf-8")
        except OSError as exc:
            raise TemplateRenderError(exc) from exc

    return source


def payload_view(context: BuildContext) -> dict[str, Any]:
    return {
        "Build": context.build,
        "Repo": context.repo,
        "System": context.system,
        "build": context.build,
        "repo": context.repo,
        "system": context.system,
    }


class TemplatePayloadRenderer:
    """Renders a compiled Jinja2 template against the build metadata."""

    def __init__(self, template: Template) -> None:
        self._template = template

    @classmethod
    def from_source(cls, source: str, *, client: httpx.Client | None = None) -> "TemplatePayloadRenderer":
        text = load_template_source(source, client=client)
        try:
            return cls(_get_env().from_string(text))
        except TemplateError as exc:
            raise TemplateRenderError(exc) from exc

    def render(self, context: BuildContext) -> bytes:
        try:
            rendered = self._template.render(payload_view(context))
        except Exception as exc:
            # user templates can raise anything: arithmetic, filter overflow
            raise TemplateRenderError(exc) from exc
        return rendered.encode("utf-8")
