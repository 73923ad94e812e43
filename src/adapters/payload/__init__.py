"""Payload renderers (implementations of `core.interfaces.renderer.PayloadRenderer`)."""

from adapters.payload.json_encoder import JsonPayloadEncoder
from adapters.payload.template_renderer import TemplatePayloadRenderer, load_template_source

__all__ = [
    "JsonPayloadEncoder",
    "TemplatePayloadRenderer",
    "load_template_source",
]
