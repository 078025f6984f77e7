"""CLI configuration loaded from DVM_* environment variables."""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class DvmSettings(BaseSettings):
    """DevOpsMaestro settings.

    All fields are read from environment variables with the ``DVM_`` prefix.
    For example, ``DVM_LOG_LEVEL=DEBUG`` maps to ``log_level``.  Command-line
    options override whatever is loaded here.
    """

    model_config = SettingsConfigDict(
        env_prefix="DVM_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # -- Logging ---------------------------------------------------------------
    log_level: str = "WARNING"

    # -- Storage ---------------------------------------------------------------
    home: Path = Path("~/.devopsmaestro").expanduser()
    """Root directory for the local database and file-backed libraries."""

    database_url: str | None = None
    """SQLAlchemy async URL.  Defaults to a SQLite file under ``home``."""

    config_dir: Path | None = None
    """Directory holding file-backed plugin/theme libraries.  Defaults to ``home``."""

    library_store: Literal["database", "file"] = "database"
    """Where NvimPlugin / NvimTheme documents are persisted."""

    # -- Helpers ---------------------------------------------------------------

    def resolve_database_url(self) -> str:
        if self.database_url:
            return self.database_url
        return f"sqlite+aiosqlite:///{self.home / 'dvm.db'}"

    def resolve_config_dir(self) -> Path:
        return self.config_dir or self.home


def get_settings() -> DvmSettings:
    """Return a cached settings instance.

    Tests clear ``_get_settings_cached`` after overriding env vars.
    """
    return _get_settings_cached()


def _get_settings_cached() -> DvmSettings:
    return DvmSettings()


from functools import lru_cache  # noqa: E402

_get_settings_cached = lru_cache(maxsize=1)(_get_settings_cached)
