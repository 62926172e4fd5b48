"""Client configuration — env-driven, fixed at construction.

Centralized settings using pydantic-settings. Values are read from
``MPAK_*`` environment variables or a ``.env`` file and can be overridden
by keyword arguments.  Once a client has been built from a settings object
nothing in it changes.
"""

from __future__ import annotations

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from mpak import __version__

DEFAULT_REGISTRY_URL = "https://api.mpak.dev"
DEFAULT_GITHUB_URL = "https://github.com"
DEFAULT_TIMEOUT_MS = 30_000


class ClientSettings(BaseSettings):
    """Registry client configuration with environment variable overrides.

    Examples
    --------
    Override via environment::

        export MPAK_REGISTRY_URL=https://registry.internal.example
        export MPAK_TIMEOUT_MS=5000
        export MPAK_LOG_LEVEL=DEBUG
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="MPAK_",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    registry_url: str = DEFAULT_REGISTRY_URL
    timeout_ms: int = DEFAULT_TIMEOUT_MS
    github_url: str = DEFAULT_GITHUB_URL
    user_agent: str = f"mpak-client/{__version__}"
    log_level: str = "WARNING"

    @field_validator("registry_url", "github_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @field_validator("timeout_ms")
    @classmethod
    def _positive_timeout(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("timeout_ms must be a positive number of milliseconds")
        return value
