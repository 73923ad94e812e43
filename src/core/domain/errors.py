"""Fatal errors of a notification run.

Every error names the stage it happened in; the CLI prints
`Error <stage>. <cause>` and exits non-zero.
"""

from __future__ import annotations


class WebhookError(Exception):
    """Base class for errors that end the run."""

    stage = "running webhook"

    def __init__(self, cause: object, *, url: str | None = None) -> None:
        self.cause = cause
        self.url = url
        super().__init__(f"Error {self.stage}. {cause}")


class PluginInputError(WebhookError):
    stage = "parsing plugin parameters"


class PayloadEncodeError(WebhookError):
    stage = "encoding json payload"


class TemplateRenderError(WebhookError):
    stage = "executing content template"


class UrlParseError(WebhookError):
    stage = "parsing hook url"


class RequestBuildError(WebhookError):
    stage = "creating http request"


class DeliveryTransportError(WebhookError):
    stage = "executing http request"


class SettingsError(WebhookError):
    stage = "loading settings"
