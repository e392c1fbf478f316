"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields so the
service can start locally without any configuration.  Settings are
built once at startup (``Settings.from_env()``) and handed to
``create_app``; handlers receive what they need through the
application state rather than importing a module‑level instance.
"""

import os
from dataclasses import dataclass
from typing import Mapping, Optional


@dataclass
class Settings:
    """Application settings."""

    project_name: str = "Music Library API"
    api_version: str = "1.0.0"
    log_level: str = "INFO"
    # Path of the log file.  Empty means console output only.
    log_file: str = ""

    # Path to the SQLite database file.  A relative path is resolved
    # against the project root by the ``db`` module.
    database_url: str = "music_library.db"

    # Base URL of the enrichment service queried when a song is created.
    # The service is called as ``GET <url>?group=...&song=...``.
    external_api_url: str = "http://localhost:8081/info"
    external_api_timeout: float = 10.0

    api_host: str = "0.0.0.0"
    api_port: int = 8080

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """Build settings from environment variables.

        ``environ`` defaults to ``os.environ``; tests pass a plain dict.
        Malformed numeric values raise ``ValueError``.
        """
        env = os.environ if environ is None else environ
        defaults = cls()
        return cls(
            project_name=env.get("PROJECT_NAME", defaults.project_name),
            api_version=env.get("API_VERSION", defaults.api_version),
            log_level=env.get("LOG_LEVEL", defaults.log_level),
            log_file=env.get("LOG_FILE", defaults.log_file),
            database_url=env.get("DATABASE_URL", defaults.database_url),
            external_api_url=env.get("EXTERNAL_API_URL", defaults.external_api_url),
            external_api_timeout=float(env.get("EXTERNAL_API_TIMEOUT", str(defaults.external_api_timeout))),
            api_host=env.get("API_HOST", defaults.api_host),
            api_port=int(env.get("API_PORT", str(defaults.api_port))),
        )
