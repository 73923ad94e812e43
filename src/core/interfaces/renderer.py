"""Payload rendering contract.

A run picks one renderer up front: the JSON encoder when no template is
configured, the template renderer otherwise. Both turn a `BuildContext` into
the exact bytes sent to every URL.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from core.domain.models import BuildContext


@runtime_checkable
class PayloadRenderer(Protocol):
    """Minimal contract for a payload renderer.

    Rules:
    - `render` is synchronous and side-effect free.
    - The same context must yield the same bytes.
    """

    def render(self, context: BuildContext) -> bytes:
        """Render `context` into the request body."""

        ...
