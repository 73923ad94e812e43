"""Default payload: the build metadata as JSON.

Output shape: `{"system": {...}, "repo": {...}, "build": {...}}`, keys in
that order, compact separators, trailing newline. Each block contains only
the fields present in the input.
"""

from __future__ import annotations

import json
from typing import Any

from core.domain.errors import PayloadEncodeError
from core.domain.models import BuildContext, _Metadata


def _verbatim(block: _Metadata) -> dict[str, Any]:
    raw = block.raw_input()
    if raw is not None:
        return raw
    data = block.model_dump(mode="json")
    present = set(block.model_fields_set) | set(block.model_extra or {})
    return {key: value for key, value in data.items() if key in present}


class JsonPayloadEncoder:
    """Encodes the `BuildContext` as a stable JSON document."""

    def render(self, context: BuildContext) -> bytes:
        payload = {
            "system": _verbatim(context.system),
            "repo": _verbatim(context.repo),
            "build": _verbatim(context.build),
        }
        try:
            text = json.dumps(payload, ensure_ascii=False, separators=(",", ":"))
        except (TypeError, ValueError) as exc:
            raise PayloadEncodeError(exc) from exc
        return (text + "\n").encode("utf-8")
