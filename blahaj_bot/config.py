"""Runtime settings shared by every command and event handler."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

DEFAULT_USER_AGENT = "blahaj"


class ConfigError(Exception):
    """Raised when a required setting is missing from the environment."""


@dataclass(frozen=True)
class Settings:
    """Values available to all command invocations."""

    github_token: str
    user_agent: str = DEFAULT_USER_AGENT

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        """Build settings from ``environ`` (the process environment by default)."""
        env = os.environ if environ is None else environ
        try:
            token = env["GITHUB_TOKEN"]
        except KeyError:
            raise ConfigError("GITHUB_TOKEN not set") from None
        return cls(github_token=token)