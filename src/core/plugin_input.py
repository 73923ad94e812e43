"""Loading of the plugin input document.

The CI runner hands over one JSON document:
`{"system": {...}, "repo": {...}, "build": {...}, "vargs": {...}}`
where `vargs` holds the webhook parameters.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import TextIO

from pydantic import ValidationError

from core.domain.errors import PluginInputError
from core.domain.models import PluginInput


def parse_plugin_input(raw: str) -> PluginInput:
    if not raw.strip():
        raise PluginInputError("empty plugin input")
    try:
        return PluginInput.model_validate_json(raw)
    except ValidationError as exc:
        raise PluginInputError(exc) from exc


def read_plugin_input(
    payload: str | None = None,
    *,
    path: Path | None = None,
    stdin: TextIO | None = None,
) -> PluginInput:
    """Read the document from, in order: `payload`, `path`, stdin."""

    if payload:
        return parse_plugin_input(payload)
    if path is not None:
        try:
            raw = path.read_text(encoding="utf-8")
        except OSError as exc:
            raise PluginInputError(exc) from exc
        return parse_plugin_input(raw)
    return parse_plugin_input((stdin or sys.stdin).read())
