"""CLI defaults loaded from BW_* environment variables."""

from __future__ import annotations

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict

from bun_workspaces.models.enums import LogLevel


class BunWorkspacesSettings(BaseSettings):
    """bun-workspaces settings.

    All fields are read from environment variables with the ``BW_`` prefix.
    For example, ``BW_LOG_LEVEL=debug`` maps to ``log_level``.  Command-line
    options always win over these defaults.
    """

    model_config = SettingsConfigDict(
        env_prefix="BW_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # -- Logging ---------------------------------------------------------------
    log_level: LogLevel = LogLevel.INFO

    # -- Execution -------------------------------------------------------------
    runner: str = "bun"
    """Executable used to run workspace scripts (``<runner> --silent run ...``)."""


def get_settings() -> BunWorkspacesSettings:
    """Return a cached settings instance.

    Reads from environment variables and ``.env`` on first call, then returns
    the same object.  Call ``_get_settings_cached.cache_clear()`` in tests to
    force a re-read after overriding env vars.
    """
    return _get_settings_cached()


@lru_cache(maxsize=1)
def _get_settings_cached() -> BunWorkspacesSettings:
    return BunWorkspacesSettings()
