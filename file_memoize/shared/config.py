"""Configuration management using Pydantic Settings.

Loads configuration from environment variables with validation. The
environment is consulted when a ``Settings`` object is built; memoizers build
one at construction time and never re-read it afterwards.
"""

import logging
import tempfile
from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_BUILD_ID = "default"

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Settings(BaseSettings):
    """Package settings loaded from environment variables.

    Environment Variables:
        CI_COMMIT_SHA: Build/commit identifier used to namespace cache files
        FILE_MEMOIZE_CACHE_DIR: Directory holding default cache files
        FILE_MEMOIZE_ATOMIC_WRITES: Write cache files via temp file + rename
        FILE_MEMOIZE_LOG_LEVEL: Logging level for configure_logging()
    """

    build_id: str = Field(
        default=DEFAULT_BUILD_ID,
        validation_alias="CI_COMMIT_SHA",
        description="CI build/commit identifier ('default' when unset)",
    )
    cache_dir: str = Field(
        default_factory=tempfile.gettempdir,
        description="Directory for default cache file locations",
    )
    atomic_writes: bool = Field(
        default=False,
        description="Write cache files to a temp file and rename over the target",
    )
    log_level: str = Field(
        default="INFO", description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )

    model_config = SettingsConfigDict(
        env_prefix="FILE_MEMOIZE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    @field_validator("build_id", mode="before")
    @classmethod
    def empty_build_id_is_default(cls, value: object) -> object:
        if value is None or value == "":
            return DEFAULT_BUILD_ID
        return value

    @field_validator("log_level")
    @classmethod
    def known_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(_LOG_LEVELS)}, got {value!r}")
        return level

    @property
    def numeric_log_level(self) -> int:
        """Logging module constant for ``log_level``."""
        return getattr(logging, self.log_level)


@lru_cache
def get_settings() -> Settings:
    """Get package settings (singleton).

    Returns:
        Settings instance built from the environment on first call
    """
    return Settings()


def default_cache_path(cache_identifier: str, settings: Settings | None = None) -> Path:
    """
    Build the default backing-file location for a cache identifier.

    The layout is ``<cache_dir>/<build_id>_<cache_identifier>.json`` so that
    every CI build gets its own set of cache files.

    Args:
        cache_identifier: Name that namespaces the cache file
        settings: Settings to read from (a fresh Settings() if None)

    Returns:
        Path to the cache file

    Example:
        >>> default_cache_path("fetch_user", Settings(build_id="abc123", cache_dir="/tmp"))
        PosixPath('/tmp/abc123_fetch_user.json')
    """
    if settings is None:
        settings = Settings()
    return Path(settings.cache_dir) / f"{settings.build_id}_{cache_identifier}.json"
