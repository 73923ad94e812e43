"""Domain models (Pydantic v2).

Two groups live here:
- the CI metadata blocks (`System`, `Repo`, `Build`) handed over by the runner,
  which the notifier passes through without interpreting them;
- the webhook configuration (`WebhookConfig`) and the input document that
  carries both (`PluginInput`).
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, PrivateAttr, field_validator, model_validator
from pydantic.config import ConfigDict

DEFAULT_METHOD = "POST"
DEFAULT_CONTENT_TYPE = "application/json"


class _Metadata(BaseModel):
    """Base for the CI blocks: known fields are optional, unknown ones are kept.

    Typed fields coerce values for templates (`"42"` becomes `42`); the
    input mapping is kept as received so the JSON payload repeats it as is.
    """

    model_config = ConfigDict(extra="allow")

    _raw: dict[str, Any] | None = PrivateAttr(default=None)

    @model_validator(mode="wrap")
    @classmethod
    def _keep_raw(cls, data: Any, handler):
        model = handler(data)
        if isinstance(data, dict):
            model._raw = dict(data)
        return model

    def raw_input(self) -> dict[str, Any] | None:
        """The mapping this block was validated from, if any."""

        return self._raw


class System(_Metadata):
    """CI server information."""

    version: str | None = None
    link_url: str | None = None
    plugins: list[str] | None = None
    globals: list[str] | None = None


class Repo(_Metadata):
    """Repository the build belongs to."""

    id: int | None = None
    owner: str | None = None
    name: str | None = None
    full_name: str | None = None
    avatar_url: str | None = None
    link_url: str | None = None
    scm: str | None = None
    clone_url: str | None = None
    default_branch: str | None = None
    timeout: int | None = None
    private: bool | None = None
    trusted: bool | None = None


class Build(_Metadata):
    """The build that just finished."""

    id: int | None = None
    number: int | None = None
    event: str | None = None
    status: str | None = None
    enqueued_at: int | None = None
    created_at: int | None = None
    started_at: int | None = None
    finished_at: int | None = None
    deploy_to: str | None = None
    commit: str | None = None
    branch: str | None = None
    ref: str | None = None
    refspec: str | None = None
    remote: str | None = None
    title: str | None = None
    message: str | None = None
    timestamp: int | None = None
    author: str | None = None
    author_avatar: str | None = None
    author_email: str | None = None
    link_url: str | None = None


class BuildContext(BaseModel):
    """Aggregate of the three metadata blocks. Read-only input."""

    model_config = ConfigDict(frozen=True)

    system: System = Field(default_factory=System)
    repo: Repo = Field(default_factory=Repo)
    build: Build = Field(default_factory=Build)


class BasicAuth(BaseModel):
    model_config = ConfigDict(frozen=True)

    username: str = ""
    password: str = ""


class WebhookConfig(BaseModel):
    """Webhook parameters, applied identically to every URL."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    urls: list[str] = Field(
        default_factory=list,
        description="Target URLs, delivered to in order.",
    )
    debug: bool = Field(
        default=False,
        description="Print full request/response detail for every URL.",
    )
    auth: BasicAuth = Field(default_factory=BasicAuth)
    headers: dict[str, str] = Field(
        default_factory=dict,
        alias="header",
        description="Extra headers; they win over the Content-Type default.",
    )
    method: str = Field(default="", description="HTTP method, POST when empty.")
    template: str = Field(
        default="",
        description="Template source (inline, file:// or http(s):// URL). JSON when empty.",
    )
    content_type: str = Field(default="", description="Content-Type, application/json when empty.")

    @field_validator("urls", "headers", mode="before")
    @classmethod
    def _null_as_empty(cls, value: Any, info) -> Any:
        if value is None:
            return [] if info.field_name == "urls" else {}
        return value

    @field_validator("auth", mode="before")
    @classmethod
    def _null_auth(cls, value: Any) -> Any:
        return {} if value is None else value

    def with_defaults(self) -> WebhookConfig:
        """Return a copy with the method and content type defaults filled in."""

        return self.model_copy(
            update={
                "method": self.method or DEFAULT_METHOD,
                "content_type": self.content_type or DEFAULT_CONTENT_TYPE,
            }
        )

    def basic_auth(self) -> tuple[str, str] | None:
        """Credentials to send, or None. The password alone never enables auth."""

        if not self.auth.username:
            return None
        return self.auth.username, self.auth.password


class PluginInput(BaseModel):
    """Document handed over by the CI runner."""

    model_config = ConfigDict(extra="ignore")

    system: System = Field(default_factory=System)
    repo: Repo = Field(default_factory=Repo)
    build: Build = Field(default_factory=Build)
    vargs: WebhookConfig = Field(default_factory=WebhookConfig)

    def to_context(self) -> BuildContext:
        return BuildContext(system=self.system, repo=self.repo, build=self.build)
