"""Process-level settings.

Plugin parameters (urls, headers, auth, ...) come from the CI runner in the
input document. This module only covers what the operator tunes through the
environment: HTTP client behaviour and the failure policy.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.domain.errors import SettingsError


def get_user_config_dir() -> Path:
    """Per-user configuration directory (cross-platform, no extra dependencies)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "drone-webhook"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "drone-webhook"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "drone-webhook"
    return Path.home() / ".config" / "drone-webhook"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


class AppSettings(BaseSettings):
    """Central settings for the notifier."""

    model_config = SettingsConfigDict(
        env_prefix="DRONE_WEBHOOK_",
        extra="ignore",
        case_sensitive=False,
        # Project .env first, then the per-user one.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    http_timeout_seconds: float | None = Field(
        default=None,
        gt=0,
        description="Per-request timeout in seconds. Unset means no timeout.",
    )
    user_agent: str = Field(
        default="drone-webhook/0.1",
        min_length=1,
        description="Default User-Agent; a custom header overrides it.",
    )
    follow_redirects: bool = Field(
        default=True,
        description="Follow HTTP redirects when delivering.",
    )
    continue_on_error: bool = Field(
        default=False,
        description="Keep delivering to the remaining URLs after a failed one.",
    )


def load_settings() -> AppSettings:
    """Build `AppSettings` from the environment; invalid values raise `SettingsError`."""

    try:
        return AppSettings()
    except ValidationError as exc:
        raise SettingsError(exc) from exc
